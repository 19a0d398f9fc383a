"""Assign roles use case."""

import logging
from collections.abc import Iterable
from uuid import UUID

from accessgraph.domain.entities import Principal
from accessgraph.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class AssignRolesUseCase:
    """Replace the roles assigned to a principal."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, principal_id: UUID, role_ids: Iterable[UUID]) -> Principal:
        """Assign roles. A super admin role cannot be combined with any other role.

        The principal record is created on first assignment.
        """
        wanted = set(role_ids)
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_by_ids(wanted)
            missing = wanted - {r.id for r in roles}
            if missing:
                raise NotFound("Role", ", ".join(sorted(str(m) for m in missing)))
            inactive = [r.name for r in roles if not r.active]
            if inactive:
                raise ValidationError(f"Cannot assign inactive role(s): {', '.join(inactive)}")
            if any(r.is_super_admin for r in roles) and len(roles) > 1:
                raise ValidationError("SuperAdmin cannot have additional roles")

            principal = await uow.principals.get_by_id(principal_id)
            if principal is None:
                principal = Principal(id=principal_id)
            principal.role_ids = wanted
            await uow.principals.save(principal)

        logger.info("Principal %s assigned %d role(s)", principal_id, len(wanted))
        return principal
