"""Initialize system roles use case."""

import logging
from uuid import uuid4

from accessgraph.application.services.catalog_bootstrapper import check_disjoint
from accessgraph.domain.entities import normalize_role_name
from accessgraph.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

ADMIN_ACTIONS = frozenset({"READ", "CREATE", "UPDATE"})


class InitializeRolesUseCase:
    """Seed the super admin and baseline admin roles from active permissions.

    SUPERADMIN receives every active permission and the bypass flag; ADMIN
    receives READ/CREATE/UPDATE across modules. Both are system roles.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        superadmin_role_name: str = "SUPERADMIN",
        admin_role_name: str = "ADMIN",
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._superadmin_name = normalize_role_name(superadmin_role_name)
        self._admin_name = normalize_role_name(admin_role_name)

    async def execute(self) -> dict[str, dict[str, object]]:
        """Upsert both roles by name and return a summary."""
        async with self._uow_factory() as uow:
            permissions, _ = await uow.permissions.list_active(limit=None)
            if not permissions:
                raise ValidationError(
                    "No active permissions found; run the catalog bootstrap first"
                )

            seeds = (
                (
                    self._superadmin_name,
                    "Super admin with all permissions",
                    {p.id for p in permissions},
                    True,
                ),
                (
                    self._admin_name,
                    "Admin role (READ/CREATE/UPDATE across modules)",
                    {p.id for p in permissions if p.action in ADMIN_ACTIONS},
                    False,
                ),
            )
            summary: dict[str, dict[str, object]] = {}
            for name, description, permission_ids, is_super_admin in seeds:
                on_insert = {"id": uuid4(), "name": name, "is_system": True}
                on_update = {
                    "description": description,
                    "permission_ids": permission_ids,
                    "active": True,
                    "is_super_admin": is_super_admin,
                }
                check_disjoint(on_insert, on_update)
                role = await uow.roles.upsert_by_name(name, on_insert, on_update)
                summary[role.name] = {"id": role.id, "permissions": len(role.permission_ids)}

        logger.info("System roles initialized: %s", ", ".join(summary))
        return summary
