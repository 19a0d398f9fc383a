"""Application services shared by use cases."""

from accessgraph.application.services.catalog_bootstrapper import CatalogBootstrapper
from accessgraph.application.services.effective_permissions import (
    EffectivePermissionResolver,
)
from accessgraph.application.services.permission_normalizer import PermissionNormalizer
from accessgraph.application.services.role_inheritance import RoleInheritanceResolver

__all__ = [
    "CatalogBootstrapper",
    "EffectivePermissionResolver",
    "PermissionNormalizer",
    "RoleInheritanceResolver",
]
