"""Repository ports."""

from accessgraph.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from accessgraph.application.ports.repositories.principal_repository import (
    PrincipalRepository,
)
from accessgraph.application.ports.repositories.role_repository import RoleRepository

__all__ = [
    "PermissionRepository",
    "PrincipalRepository",
    "RoleRepository",
]
