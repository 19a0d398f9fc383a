"""Update role use case."""

import logging
from collections.abc import Sequence
from uuid import UUID

from accessgraph.application.services import PermissionNormalizer
from accessgraph.application.use_cases.role.role_rules import (
    ensure_mutable,
    ensure_still_active,
    resolve_role_permissions,
)
from accessgraph.domain.entities import Role, normalize_role_name
from accessgraph.domain.exceptions import ConflictError, NotFound, ValidationError

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """Update role fields; permissions are re-normalized on every save."""

    def __init__(
        self,
        unit_of_work_factory: type,
        normalizer: PermissionNormalizer,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._normalizer = normalizer

    async def execute(
        self,
        role_id: UUID,
        *,
        name: str | None = None,
        description: str | None = None,
        permissions: Sequence[object] | None = None,
        active: bool | None = None,
    ) -> Role:
        """Update role. Without ``permissions`` the stored set is re-validated."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            ensure_mutable(role)

            if name is not None:
                new_name = normalize_role_name(name)
                if not new_name:
                    raise ValidationError("Role name is required")
                if new_name != role.name and await uow.roles.get_by_name(new_name):
                    raise ConflictError("Role", new_name)
                role.name = new_name
            if description is not None:
                role.description = description.strip()
            if active is not None:
                role.active = active

            refs = list(permissions) if permissions is not None else list(role.permission_ids)
            role.permission_ids = await resolve_role_permissions(uow, self._normalizer, refs)
            await ensure_still_active(uow, role.permission_ids)
            await uow.roles.update(role)

        logger.info("Updated role %s", role.name)
        return role
