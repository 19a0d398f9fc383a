"""Result of effective-permission computation."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Literal
from uuid import UUID

from accessgraph.domain.catalog import WILDCARD_ACTION
from accessgraph.domain.entities import Permission
from accessgraph.domain.value_objects.grant_source import GrantSource


class Universal(Enum):
    """Sentinel type for the SuperAdmin bypass."""

    UNIVERSAL = "UNIVERSAL"

    def __repr__(self) -> str:
        return "UNIVERSAL"


UNIVERSAL = Universal.UNIVERSAL


@dataclass(frozen=True)
class EffectiveEntry:
    """Permission record with the source it was first seen from."""

    permission: Permission
    source: GrantSource


@dataclass(frozen=True)
class EffectivePermissions:
    """Deduplicated permissions held by a principal at one point in time."""

    entries: tuple[EffectiveEntry, ...] = ()

    def __iter__(self) -> Iterator[EffectiveEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def records(self) -> list[Permission]:
        return [e.permission for e in self.entries]

    @property
    def ids(self) -> set[UUID]:
        return {e.permission.id for e in self.entries}

    def allows(self, module: str, action: str) -> bool:
        """Match on module with exact action or the per-module wildcard."""
        module = module.strip().upper()
        action = action.strip().upper()
        return any(
            e.permission.module == module
            and e.permission.action in (action, WILDCARD_ACTION)
            for e in self.entries
        )


PermissionSet = EffectivePermissions | Literal[Universal.UNIVERSAL]
