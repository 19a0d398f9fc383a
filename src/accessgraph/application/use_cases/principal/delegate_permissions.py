"""Delegate permissions use case."""

import logging
from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from accessgraph.application.services import EffectivePermissionResolver
from accessgraph.domain.clock import Clock, as_utc, utcnow
from accessgraph.domain.entities import DelegatedGrant
from accessgraph.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgraph.domain.value_objects import UNIVERSAL

logger = logging.getLogger(__name__)


class DelegatePermissionsUseCase:
    """Hand a subset of one principal's permissions to another, until a deadline."""

    def __init__(
        self,
        unit_of_work_factory: type,
        resolver: EffectivePermissionResolver,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = resolver
        self._clock = clock

    async def execute(
        self,
        from_principal_id: UUID,
        to_principal_id: UUID,
        permission_ids: Iterable[UUID],
        expires_at: datetime | None,
        granted_by: UUID | None = None,
    ) -> DelegatedGrant:
        """Delegate. The delegator must currently hold every delegated permission."""
        now = self._clock()
        if expires_at is None:
            raise ValidationError("Delegated grants require an expiration date")
        expires_at = as_utc(expires_at)
        if expires_at <= now:
            raise ValidationError("Expiration date must be in the future")
        if from_principal_id == to_principal_id:
            raise ValidationError("Cannot delegate permissions to oneself")
        wanted = set(permission_ids)
        if not wanted:
            raise ValidationError("At least one permission is required")

        async with self._uow_factory() as uow:
            delegator = await uow.principals.get_by_id(from_principal_id)
            if delegator is None:
                raise NotFound("Principal", str(from_principal_id))
            target = await uow.principals.get_by_id(to_principal_id)
            if target is None:
                raise NotFound("Principal", str(to_principal_id))

            found = await uow.permissions.list_by_ids(wanted, active_only=True)
            missing = wanted - {p.id for p in found}
            if missing:
                raise NotFound("Permission", ", ".join(sorted(str(m) for m in missing)))

            held = await self._resolver.compute(uow, delegator, now=now)
            if held is not UNIVERSAL and not wanted <= held.ids:
                raise PermissionDenied(
                    "You do not have all the permissions you are trying to delegate"
                )

            grant = DelegatedGrant(
                from_principal=from_principal_id,
                permission_ids=frozenset(wanted),
                granted_by=granted_by or from_principal_id,
                expires_at=expires_at,
            )
            target.delegated_grants.append(grant)
            await uow.principals.save(target)

        logger.info(
            "Principal %s delegated %d permission(s) to %s until %s",
            from_principal_id,
            len(wanted),
            to_principal_id,
            expires_at.isoformat(),
        )
        return grant
