"""Permission normalizer - mixed references to canonical permission ids."""

import logging
from collections.abc import Iterable
from uuid import UUID

from accessgraph.application.ports import UnitOfWork
from accessgraph.application.services.catalog_bootstrapper import CatalogBootstrapper
from accessgraph.domain.value_objects import PermissionRef, RefKind

logger = logging.getLogger(__name__)


class PermissionNormalizer:
    """Resolves canonical ids and ``MODULE.ACTION`` keys to active permission ids.

    Unresolvable references are dropped without error. Callers that need
    strict behaviour compare input and output sizes themselves.
    """

    def __init__(self, bootstrapper: CatalogBootstrapper) -> None:
        self._bootstrapper = bootstrapper

    async def resolve_mixed_to_ids(
        self, uow: UnitOfWork, refs: Iterable[object]
    ) -> list[UUID]:
        """Return the deduplicated ids of active permissions ``refs`` point to."""
        parsed = [PermissionRef.parse(ref) for ref in refs]
        catalog = self._bootstrapper.catalog

        candidate_ids = {r.permission_id for r in parsed if r.kind is RefKind.CANONICAL}
        symbolic = {
            (r.module, r.action)
            for r in parsed
            if r.kind is RefKind.SYMBOLIC and catalog.allows(r.module, r.action)
        }

        resolved: set[UUID] = set()
        if candidate_ids:
            active = await uow.permissions.list_by_ids(candidate_ids, active_only=True)
            resolved.update(p.id for p in active)

        for module, action in sorted(symbolic):
            entry = catalog.get(module)
            permission = await self._bootstrapper.ensure_one(
                uow, entry.module_key, action, entry.category
            )
            resolved.add(permission.id)

        if logger.isEnabledFor(logging.DEBUG):
            dropped = [
                r.raw
                for r in parsed
                if r.kind is RefKind.INVALID
                or (r.kind is RefKind.CANONICAL and r.permission_id not in resolved)
                or (r.kind is RefKind.SYMBOLIC and (r.module, r.action) not in symbolic)
            ]
            if dropped:
                logger.debug("Dropped unresolved permission references: %s", dropped)

        return sorted(resolved, key=str)
