"""Domain value objects."""

from accessgraph.domain.value_objects.effective_permissions import (
    UNIVERSAL,
    EffectiveEntry,
    EffectivePermissions,
    PermissionSet,
    Universal,
)
from accessgraph.domain.value_objects.grant_source import GrantSource
from accessgraph.domain.value_objects.permission_ref import PermissionRef, RefKind

__all__ = [
    "UNIVERSAL",
    "EffectiveEntry",
    "EffectivePermissions",
    "GrantSource",
    "PermissionRef",
    "PermissionSet",
    "RefKind",
    "Universal",
]
