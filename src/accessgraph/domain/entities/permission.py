"""Permission entity - one action on one module."""

from dataclasses import dataclass
from uuid import UUID


def canonical_key(module: str, action: str) -> str:
    """Return the unique storage key, e.g. ``VEHICLES_READ``."""
    return f"{module}_{action}".upper()


@dataclass
class Permission:
    """Permission - MODULE/ACTION pair; deactivated, never deleted."""

    id: UUID
    module: str
    action: str
    canonical_key: str
    category: str = ""
    description: str = ""
    active: bool = True

    def __post_init__(self) -> None:
        self.module = self.module.strip().upper()
        self.action = self.action.strip().upper()
        self.canonical_key = self.canonical_key.strip().upper()

    @property
    def symbolic_key(self) -> str:
        """Human-authored form, e.g. ``VEHICLES.READ``."""
        return f"{self.module}.{self.action}"
