"""Create role use case."""

import logging
from collections.abc import Iterable, Sequence
from uuid import UUID, uuid4

from accessgraph.application.services import PermissionNormalizer
from accessgraph.application.use_cases.role.role_rules import (
    ensure_still_active,
    load_parent_roles,
    resolve_role_permissions,
)
from accessgraph.domain.entities import Role, normalize_role_name
from accessgraph.domain.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """Create a role from mixed permission references."""

    def __init__(
        self,
        unit_of_work_factory: type,
        normalizer: PermissionNormalizer,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._normalizer = normalizer

    async def execute(
        self,
        name: str,
        permissions: Sequence[object],
        description: str = "",
        inherits: Iterable[UUID] = (),
        is_super_admin: bool = False,
    ) -> Role:
        """Create role. Name must be unique; permissions are normalized."""
        name = normalize_role_name(name)
        if not name:
            raise ValidationError("Role name is required")

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise ConflictError("Role", name)

            permission_ids = await resolve_role_permissions(
                uow, self._normalizer, list(permissions)
            )
            parents = await load_parent_roles(uow, inherits)

            role = Role(
                id=uuid4(),
                name=name,
                description=description.strip(),
                permission_ids=permission_ids,
                inherits={p.id for p in parents},
                is_super_admin=is_super_admin,
            )
            await ensure_still_active(uow, role.permission_ids)
            await uow.roles.create(role)

        logger.info("Created role %s with %d permissions", role.name, len(permission_ids))
        return role
