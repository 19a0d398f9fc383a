"""Add role inheritance use case."""

import logging
from uuid import UUID

from accessgraph.application.services import RoleInheritanceResolver
from accessgraph.application.use_cases.role.role_rules import ensure_mutable, load_parent_roles
from accessgraph.domain.entities import Role
from accessgraph.domain.exceptions import CircularInheritanceError, NotFound

logger = logging.getLogger(__name__)


class AddInheritanceUseCase:
    """Make a role inherit another role's permissions, refusing cycles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        inheritance: RoleInheritanceResolver | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._inheritance = inheritance or RoleInheritanceResolver()

    async def execute(self, role_id: UUID, parent_id: UUID) -> Role:
        """Add edge ``role -> parent`` unless ``parent`` already reaches ``role``."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            ensure_mutable(role)
            if parent_id in role.inherits:
                return role
            if parent_id == role_id:
                raise CircularInheritanceError(f"Role {role.name} cannot inherit from itself")
            await load_parent_roles(uow, [parent_id])

            if await self._inheritance.reaches(uow.roles, parent_id, role_id):
                logger.warning(
                    "Rejected inheritance %s -> %s: would create a cycle", role_id, parent_id
                )
                raise CircularInheritanceError(
                    f"Role {role.name} cannot inherit from {parent_id}: circular inheritance"
                )

            role.inherits.add(parent_id)
            await uow.roles.set_inherits(role.id, role.inherits)

        logger.info("Role %s now inherits from %s", role.name, parent_id)
        return role
