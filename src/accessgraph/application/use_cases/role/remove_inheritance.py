"""Remove role inheritance use case."""

from uuid import UUID

from accessgraph.application.use_cases.role.role_rules import ensure_mutable
from accessgraph.domain.entities import Role
from accessgraph.domain.exceptions import NotFound


class RemoveInheritanceUseCase:
    """Drop an inheritance edge; removing an absent edge is a no-op."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, role_id: UUID, parent_id: UUID) -> Role:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            ensure_mutable(role)
            if parent_id in role.inherits:
                role.inherits.discard(parent_id)
                await uow.roles.set_inherits(role.id, role.inherits)
        return role
