"""Permission catalog - the static table of modules and their actions."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from accessgraph.domain.exceptions import ValidationError

WILDCARD_ACTION = "ALL"


@dataclass(frozen=True)
class CatalogEntry:
    """One module with the actions it allows."""

    module_key: str
    actions: frozenset[str]
    category: str = ""

    def __post_init__(self) -> None:
        module_key = self.module_key.strip().upper()
        if not module_key or "." in module_key:
            raise ValidationError(f"Invalid catalog module key: {self.module_key!r}")
        actions = frozenset(a.strip().upper() for a in self.actions if a and a.strip())
        if not actions:
            raise ValidationError(f"Catalog module {module_key} declares no actions")
        object.__setattr__(self, "module_key", module_key)
        object.__setattr__(self, "actions", actions)
        object.__setattr__(self, "category", self.category.strip().upper())


@dataclass(frozen=True)
class Catalog:
    """Read-only, versioned module table.

    Injected into the bootstrapper and normalizer; nothing reads it
    through a module-level global.
    """

    entries: tuple[CatalogEntry, ...]
    version: str = "1"
    _by_module: dict[str, CatalogEntry] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        by_module: dict[str, CatalogEntry] = {}
        for entry in self.entries:
            if entry.module_key in by_module:
                raise ValidationError(f"Duplicate catalog module: {entry.module_key}")
            by_module[entry.module_key] = entry
        object.__setattr__(self, "_by_module", by_module)

    @classmethod
    def from_modules(
        cls, modules: Iterable[tuple[str, str, Iterable[str]]], version: str = "1"
    ) -> "Catalog":
        """Build from ``(module_key, category, actions)`` tuples."""
        return cls(
            entries=tuple(
                CatalogEntry(module_key=key, category=category, actions=frozenset(actions))
                for key, category, actions in modules
            ),
            version=version,
        )

    def get(self, module_key: str) -> CatalogEntry | None:
        return self._by_module.get(module_key.strip().upper())

    def allows(self, module_key: str, action: str) -> bool:
        """True when the catalog declares ``action`` for ``module_key``."""
        entry = self.get(module_key)
        return entry is not None and action.strip().upper() in entry.actions

    def pairs(self) -> Iterator[tuple[str, str, str]]:
        """Yield ``(module, action, category)`` in a stable order."""
        for entry in self.entries:
            for action in sorted(entry.actions):
                yield entry.module_key, action, entry.category

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
