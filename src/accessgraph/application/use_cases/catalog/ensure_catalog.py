"""Ensure catalog use case."""

from accessgraph.application.services import CatalogBootstrapper
from accessgraph.domain.entities import Permission


class EnsureCatalogUseCase:
    """Seed every catalog permission in one transaction.

    With ``lock_id`` set, concurrent bootstraps from several processes are
    serialized behind a store-level lock held until commit.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        bootstrapper: CatalogBootstrapper,
        lock_id: int | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._bootstrapper = bootstrapper
        self._lock_id = lock_id

    async def execute(self) -> list[Permission]:
        """Ensure the catalog and return the resulting permission records."""
        async with self._uow_factory() as uow:
            if self._lock_id is not None:
                await uow.permissions.acquire_bootstrap_lock(self._lock_id)
            return await self._bootstrapper.ensure_catalog(uow)
