"""Principal entity - the authorization-relevant part of a user."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from accessgraph.domain.clock import as_utc
from accessgraph.domain.exceptions import ValidationError


@dataclass(frozen=True)
class DirectGrant:
    """Permission granted straight to a principal; no expiry means permanent."""

    permission_id: UUID
    granted_by: UUID
    expires_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.expires_at is not None:
            object.__setattr__(self, "expires_at", as_utc(self.expires_at))

    def is_live(self, now: datetime) -> bool:
        return self.expires_at is None or self.expires_at > as_utc(now)


@dataclass(frozen=True)
class DelegatedGrant:
    """Time-bounded grant of another principal's permissions."""

    from_principal: UUID
    permission_ids: frozenset[UUID]
    granted_by: UUID
    expires_at: datetime

    def __post_init__(self) -> None:
        if self.expires_at is None:
            raise ValidationError("Delegated grants require an expiration date")
        object.__setattr__(self, "expires_at", as_utc(self.expires_at))

    def is_live(self, now: datetime) -> bool:
        return self.expires_at > as_utc(now)


@dataclass
class Principal:
    """Principal - role assignments plus direct and delegated grants."""

    id: UUID
    role_ids: set[UUID] = field(default_factory=set)
    direct_grants: list[DirectGrant] = field(default_factory=list)
    delegated_grants: list[DelegatedGrant] = field(default_factory=list)
