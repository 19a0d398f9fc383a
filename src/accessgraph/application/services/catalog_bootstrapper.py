"""Catalog bootstrapper - idempotent seeding of catalog permissions."""

import logging
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from accessgraph.application.ports import UnitOfWork
from accessgraph.domain.catalog import Catalog
from accessgraph.domain.entities import Permission, canonical_key
from accessgraph.domain.exceptions import ConflictError

logger = logging.getLogger(__name__)


def check_disjoint(on_insert: Mapping[str, Any], on_update: Mapping[str, Any]) -> None:
    """Reject an upsert that would write the same field from both groups."""
    overlap = set(on_insert) & set(on_update)
    if overlap:
        raise ConflictError(
            f"Upsert touches {', '.join(sorted(overlap))} on insert and on update"
        )


class CatalogBootstrapper:
    """Ensures a Permission row exists for every catalog (module, action) pair."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    async def ensure_one(
        self, uow: UnitOfWork, module: str, action: str, category: str = ""
    ) -> Permission:
        """Upsert the permission ``MODULE_ACTION`` and mark it active."""
        module = module.strip().upper()
        action = action.strip().upper()
        key = canonical_key(module, action)
        # written once, when the row is created
        on_insert = {
            "id": uuid4(),
            "module": module,
            "action": action,
            "canonical_key": key,
        }
        # refreshed on every call
        on_update = {
            "description": f"{action} {module}",
            "category": category,
            "active": True,
        }
        check_disjoint(on_insert, on_update)
        return await uow.permissions.upsert(key, on_insert, on_update)

    async def ensure_catalog(self, uow: UnitOfWork) -> list[Permission]:
        """Ensure every catalog pair; safe to repeat."""
        ensured = []
        for module, action, category in self._catalog.pairs():
            ensured.append(await self.ensure_one(uow, module, action, category))
        logger.info(
            "Catalog v%s ensured: %d permissions across %d modules",
            self._catalog.version,
            len(ensured),
            len(self._catalog),
        )
        return ensured
