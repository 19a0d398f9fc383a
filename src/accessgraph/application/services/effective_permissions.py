"""Effective permission resolver - per-principal aggregation of grants.

Every call re-reads roles, grants and permission records; nothing is cached
between calls. Reads are not taken from one snapshot, so a permission revoked
mid-computation may still appear in that single result. Authorization
decisions are correct as of a moment no older than the current request.
"""

import logging
from datetime import datetime
from uuid import UUID

from accessgraph.application.ports import UnitOfWork
from accessgraph.application.services.role_inheritance import RoleInheritanceResolver
from accessgraph.domain.clock import Clock, utcnow
from accessgraph.domain.entities import Principal
from accessgraph.domain.value_objects import (
    UNIVERSAL,
    EffectiveEntry,
    EffectivePermissions,
    GrantSource,
    PermissionSet,
)

logger = logging.getLogger(__name__)


class EffectivePermissionResolver:
    """Combines role-derived, direct and delegated grants for a principal."""

    def __init__(
        self,
        inheritance: RoleInheritanceResolver | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._inheritance = inheritance or RoleInheritanceResolver()
        self._clock = clock

    async def compute(
        self,
        uow: UnitOfWork,
        principal: Principal,
        now: datetime | None = None,
    ) -> PermissionSet:
        """Return the principal's effective permissions, or UNIVERSAL."""
        roles = [r for r in await uow.roles.list_by_ids(principal.role_ids) if r.active]
        if any(r.is_super_admin for r in roles):
            logger.debug("Principal %s holds a super admin role", principal.id)
            return UNIVERSAL

        now = now or self._clock()
        sources: dict[UUID, GrantSource] = {}

        for role in sorted(roles, key=lambda r: r.name):
            for pid in await self._inheritance.collect_permission_ids(uow.roles, role):
                sources.setdefault(pid, GrantSource.ROLE)

        for grant in principal.direct_grants:
            if grant.is_live(now):
                sources.setdefault(grant.permission_id, GrantSource.DIRECT)

        for delegation in principal.delegated_grants:
            if delegation.is_live(now):
                for pid in delegation.permission_ids:
                    sources.setdefault(pid, GrantSource.DELEGATED)

        if not sources:
            return EffectivePermissions()

        records = await uow.permissions.list_by_ids(sources, active_only=True)
        records.sort(key=lambda p: (p.module, p.action))
        return EffectivePermissions(
            entries=tuple(EffectiveEntry(permission=p, source=sources[p.id]) for p in records)
        )
