"""Permission references as supplied by administrators."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class RefKind(StrEnum):
    """Classification of a raw permission reference."""

    CANONICAL = "canonical"
    SYMBOLIC = "symbolic"
    INVALID = "invalid"


@dataclass(frozen=True)
class PermissionRef:
    """A raw reference classified once at the boundary.

    CANONICAL carries ``permission_id``; SYMBOLIC carries the upper-cased
    ``module``/``action`` pair of a ``MODULE.ACTION`` key.
    """

    kind: RefKind
    raw: str
    permission_id: UUID | None = None
    module: str | None = None
    action: str | None = None

    @classmethod
    def parse(cls, value: object) -> "PermissionRef":
        if isinstance(value, UUID):
            return cls(kind=RefKind.CANONICAL, raw=str(value), permission_id=value)
        if not isinstance(value, str):
            return cls(kind=RefKind.INVALID, raw=repr(value))

        raw = value.strip()
        try:
            return cls(kind=RefKind.CANONICAL, raw=raw, permission_id=UUID(raw))
        except ValueError:
            pass

        if "." in raw:
            module, _, action = raw.upper().partition(".")
            module, action = module.strip(), action.strip()
            if module and action:
                return cls(kind=RefKind.SYMBOLIC, raw=raw, module=module, action=action)
        return cls(kind=RefKind.INVALID, raw=raw)

    @property
    def symbolic_key(self) -> str | None:
        if self.kind is not RefKind.SYMBOLIC:
            return None
        return f"{self.module}.{self.action}"
