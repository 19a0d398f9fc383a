"""Authorization checker - the per-request permission predicate."""

import logging
from uuid import UUID

from accessgraph.application.ports import UnitOfWork
from accessgraph.application.services import EffectivePermissionResolver
from accessgraph.domain.entities import Principal
from accessgraph.domain.value_objects import UNIVERSAL, PermissionRef, PermissionSet, RefKind

logger = logging.getLogger(__name__)


def permits(effective: PermissionSet, module: str, action: str) -> bool:
    """True for UNIVERSAL, else when module matches and action matches or is ALL."""
    if effective is UNIVERSAL:
        return True
    return effective.allows(module, action)


class AuthorizationChecker:
    """Answers ``has_permission(principal, module, action)``.

    Nothing is cached: a revoked grant or deactivated role takes effect on the
    very next check. An unknown principal holds nothing.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        resolver: EffectivePermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = resolver

    async def has_permission(
        self, principal: Principal | UUID, module: str, action: str
    ) -> bool:
        """Check if principal may perform ``action`` on ``module``."""
        module = module.strip().upper()
        action = action.strip().upper()
        async with self._uow_factory() as uow:
            effective = await self._effective(uow, principal)
        if effective is None:
            return False
        allowed = permits(effective, module, action)
        logger.debug(
            "has_permission(%s, %s, %s) -> %s",
            getattr(principal, "id", principal),
            module,
            action,
            allowed,
        )
        return allowed

    async def allows(
        self, uow: UnitOfWork, principal: Principal, module: str, action: str
    ) -> bool:
        """Same predicate for an already-loaded principal inside the caller's UoW."""
        effective = await self._resolver.compute(uow, principal)
        return permits(effective, module, action)

    async def has_any_permission(self, principal: Principal | UUID, *keys: str) -> bool:
        """Check ``MODULE.ACTION`` keys; true when any one of them is held."""
        wanted = [ref for ref in map(PermissionRef.parse, keys) if ref.kind is RefKind.SYMBOLIC]
        if not wanted:
            return False
        async with self._uow_factory() as uow:
            effective = await self._effective(uow, principal)
        if effective is None:
            return False
        return any(permits(effective, ref.module, ref.action) for ref in wanted)

    async def _effective(
        self, uow: UnitOfWork, principal: Principal | UUID
    ) -> PermissionSet | None:
        if not isinstance(principal, Principal):
            principal = await uow.principals.get_by_id(principal)
            if principal is None:
                return None
        return await self._resolver.compute(uow, principal)
