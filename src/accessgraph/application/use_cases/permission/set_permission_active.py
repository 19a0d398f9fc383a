"""Set permission active use case."""

import logging
from uuid import UUID

from accessgraph.domain.entities import Permission
from accessgraph.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class SetPermissionActiveUseCase:
    """Deactivate or reactivate a permission. Permissions are never deleted."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, permission_id: UUID, active: bool = False) -> Permission:
        async with self._uow_factory() as uow:
            permission = await uow.permissions.set_active(permission_id, active)
            if permission is None:
                raise NotFound("Permission", str(permission_id))

        logger.info(
            "Permission %s %s",
            permission.canonical_key,
            "activated" if active else "deactivated",
        )
        return permission
