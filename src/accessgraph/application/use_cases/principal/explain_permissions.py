"""Explain permissions use case."""

from uuid import UUID

from accessgraph.application.dto.permission_report import (
    EffectiveSummary,
    GrantSummary,
    PermissionReport,
    RoleSummary,
)
from accessgraph.application.services import EffectivePermissionResolver
from accessgraph.domain.clock import Clock, utcnow
from accessgraph.domain.exceptions import NotFound
from accessgraph.domain.value_objects import UNIVERSAL


class ExplainPermissionsUseCase:
    """Build a diagnostic report of a principal's roles, grants and effective set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        resolver: EffectivePermissionResolver,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = resolver
        self._clock = clock

    async def execute(self, principal_id: UUID) -> PermissionReport:
        now = self._clock()
        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(principal_id)
            if principal is None:
                raise NotFound("Principal", str(principal_id))

            roles = await uow.roles.list_by_ids(principal.role_ids)
            granted_ids = {g.permission_id for g in principal.direct_grants}
            for d in principal.delegated_grants:
                granted_ids.update(d.permission_ids)
            keys = {
                p.id: p.symbolic_key
                for p in await uow.permissions.list_by_ids(granted_ids, active_only=False)
            }
            effective = await self._resolver.compute(uow, principal, now=now)

        report = PermissionReport(
            principal_id=principal.id,
            is_super_admin=effective is UNIVERSAL,
            roles=[
                RoleSummary(
                    id=r.id, name=r.name, active=r.active, is_super_admin=r.is_super_admin
                )
                for r in sorted(roles, key=lambda r: r.name)
            ],
            direct_grants=[
                GrantSummary(
                    permission_id=g.permission_id,
                    key=keys.get(g.permission_id),
                    expires_at=g.expires_at,
                    live=g.is_live(now),
                )
                for g in principal.direct_grants
            ],
            delegated_grants=[
                GrantSummary(
                    permission_id=pid,
                    key=keys.get(pid),
                    expires_at=d.expires_at,
                    live=d.is_live(now),
                    from_principal=d.from_principal,
                )
                for d in principal.delegated_grants
                for pid in sorted(d.permission_ids, key=str)
            ],
        )
        if effective is not UNIVERSAL:
            report.effective = [
                EffectiveSummary(
                    module=e.permission.module,
                    action=e.permission.action,
                    source=e.source.value,
                )
                for e in effective
            ]
        return report
