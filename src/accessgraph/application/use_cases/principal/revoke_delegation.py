"""Revoke delegation use case."""

from uuid import UUID

from accessgraph.domain.exceptions import NotFound


class RevokeDelegationUseCase:
    """Remove delegations a principal received from another principal."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, principal_id: UUID, from_principal_id: UUID) -> int:
        """Return the number of delegations removed."""
        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(principal_id)
            if principal is None:
                raise NotFound("Principal", str(principal_id))
            kept = [
                d for d in principal.delegated_grants if d.from_principal != from_principal_id
            ]
            removed = len(principal.delegated_grants) - len(kept)
            if removed:
                principal.delegated_grants = kept
                await uow.principals.save(principal)
        return removed
