"""Domain entities."""

from accessgraph.domain.entities.permission import Permission, canonical_key
from accessgraph.domain.entities.principal import DelegatedGrant, DirectGrant, Principal
from accessgraph.domain.entities.role import Role, normalize_role_name

__all__ = [
    "DelegatedGrant",
    "DirectGrant",
    "Permission",
    "Principal",
    "Role",
    "canonical_key",
    "normalize_role_name",
]
