"""Get role permissions use case."""

from uuid import UUID

from accessgraph.application.services import RoleInheritanceResolver
from accessgraph.domain.entities import Permission
from accessgraph.domain.exceptions import NotFound


class GetRolePermissionsUseCase:
    """Transitive permissions of a role, following its inheritance edges."""

    def __init__(
        self,
        unit_of_work_factory: type,
        inheritance: RoleInheritanceResolver | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._inheritance = inheritance or RoleInheritanceResolver()

    async def execute(
        self, role_id: UUID, as_records: bool = False
    ) -> list[UUID] | list[Permission]:
        """Return raw ids, or active records sorted by (module, action)."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            permission_ids = await self._inheritance.collect_permission_ids(uow.roles, role)
            if not as_records:
                return sorted(permission_ids, key=str)
            records = await uow.permissions.list_by_ids(permission_ids, active_only=True)
        return sorted(records, key=lambda p: (p.module, p.action))
