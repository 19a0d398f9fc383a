"""Permission report DTO."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class RoleSummary:
    id: UUID
    name: str
    active: bool
    is_super_admin: bool


@dataclass
class GrantSummary:
    """Direct or delegated grant as shown in a report."""

    permission_id: UUID
    key: str | None
    expires_at: datetime | None
    live: bool
    from_principal: UUID | None = None


@dataclass
class EffectiveSummary:
    module: str
    action: str
    source: str


@dataclass
class PermissionReport:
    """Why a principal holds what it holds."""

    principal_id: UUID
    is_super_admin: bool
    roles: list[RoleSummary] = field(default_factory=list)
    direct_grants: list[GrantSummary] = field(default_factory=list)
    delegated_grants: list[GrantSummary] = field(default_factory=list)
    effective: list[EffectiveSummary] = field(default_factory=list)
