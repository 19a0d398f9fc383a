"""Revoke direct permission use case."""

from uuid import UUID

from accessgraph.domain.exceptions import NotFound


class RevokePermissionUseCase:
    """Remove every direct grant of one permission from a principal."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, principal_id: UUID, permission_id: UUID) -> int:
        """Return the number of grants removed."""
        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(principal_id)
            if principal is None:
                raise NotFound("Principal", str(principal_id))
            kept = [g for g in principal.direct_grants if g.permission_id != permission_id]
            removed = len(principal.direct_grants) - len(kept)
            if removed:
                principal.direct_grants = kept
                await uow.principals.save(principal)
        return removed
