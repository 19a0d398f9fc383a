"""Grant direct permissions use case."""

import logging
from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from accessgraph.application.services import PermissionNormalizer
from accessgraph.domain.clock import Clock, as_utc, utcnow
from accessgraph.domain.entities import DirectGrant
from accessgraph.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class GrantPermissionsUseCase:
    """Grant permissions straight to a principal, optionally until a deadline."""

    def __init__(
        self,
        unit_of_work_factory: type,
        normalizer: PermissionNormalizer,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._normalizer = normalizer
        self._clock = clock

    async def execute(
        self,
        principal_id: UUID,
        permissions: Sequence[object],
        granted_by: UUID,
        expires_at: datetime | None = None,
    ) -> list[DirectGrant]:
        """Add grants the principal does not already hold; return the new ones."""
        now = self._clock()
        if expires_at is not None:
            expires_at = as_utc(expires_at)
            if expires_at <= now:
                raise ValidationError("Expiration date must be in the future")

        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(principal_id)
            if principal is None:
                raise NotFound("Principal", str(principal_id))

            permission_ids = await self._normalizer.resolve_mixed_to_ids(uow, permissions)
            if permissions and not permission_ids:
                raise ValidationError("no valid permissions resolved")

            held = {g.permission_id for g in principal.direct_grants if g.is_live(now)}
            added = [
                DirectGrant(permission_id=pid, granted_by=granted_by, expires_at=expires_at)
                for pid in permission_ids
                if pid not in held
            ]
            if added:
                principal.direct_grants.extend(added)
                await uow.principals.save(principal)

        logger.info("Granted %d permission(s) to principal %s", len(added), principal_id)
        return added
