"""Unit tests for principal use cases."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from accessgraph.application.use_cases.principal.assign_roles import AssignRolesUseCase
from accessgraph.application.use_cases.principal.delegate_permissions import (
    DelegatePermissionsUseCase,
)
from accessgraph.application.use_cases.principal.explain_permissions import (
    ExplainPermissionsUseCase,
)
from accessgraph.application.use_cases.principal.grant_permissions import (
    GrantPermissionsUseCase,
)
from accessgraph.application.use_cases.principal.revoke_delegation import (
    RevokeDelegationUseCase,
)
from accessgraph.application.use_cases.principal.revoke_permission import (
    RevokePermissionUseCase,
)
from accessgraph.domain.entities import DelegatedGrant, DirectGrant
from accessgraph.domain.exceptions import NotFound, PermissionDenied, ValidationError
from tests.conftest import NOW, fixed_clock, seed_permission, seed_principal, seed_role


class TestAssignRoles:
    """Tests for AssignRolesUseCase."""

    @pytest.mark.asyncio
    async def test_creates_principal_on_first_assignment(self, store, uow_factory) -> None:
        role = seed_role(store, "VIEWER")
        principal_id = uuid4()

        principal = await AssignRolesUseCase(uow_factory).execute(principal_id, [role.id])

        assert principal.role_ids == {role.id}
        assert store.principals[principal_id].role_ids == {role.id}

    @pytest.mark.asyncio
    async def test_replaces_existing_roles(self, store, uow_factory) -> None:
        old = seed_role(store, "OLD")
        new = seed_role(store, "NEW")
        principal = seed_principal(store, roles=[old])

        await AssignRolesUseCase(uow_factory).execute(principal.id, [new.id])

        assert store.principals[principal.id].role_ids == {new.id}

    @pytest.mark.asyncio
    async def test_super_admin_is_exclusive(self, store, uow_factory) -> None:
        admin = seed_role(store, "SUPERADMIN", is_super_admin=True)
        viewer = seed_role(store, "VIEWER")
        principal = seed_principal(store, roles=[viewer])

        with pytest.raises(ValidationError, match="SuperAdmin"):
            await AssignRolesUseCase(uow_factory).execute(principal.id, [admin.id, viewer.id])
        assert store.principals[principal.id].role_ids == {viewer.id}

        await AssignRolesUseCase(uow_factory).execute(principal.id, [admin.id])
        assert store.principals[principal.id].role_ids == {admin.id}

    @pytest.mark.asyncio
    async def test_unknown_or_inactive_role_raises(self, store, uow_factory) -> None:
        inactive = seed_role(store, "OLD", active=False)
        use_case = AssignRolesUseCase(uow_factory)

        with pytest.raises(NotFound):
            await use_case.execute(uuid4(), [uuid4()])
        with pytest.raises(ValidationError, match="inactive"):
            await use_case.execute(uuid4(), [inactive.id])
        assert store.principals == {}


class TestDirectGrants:
    """Tests for GrantPermissionsUseCase and RevokePermissionUseCase."""

    @pytest.mark.asyncio
    async def test_grant_skips_already_held(self, store, uow_factory, normalizer) -> None:
        held = seed_permission(store, "BOOKING", "READ")
        admin = uuid4()
        principal = seed_principal(store, direct=[DirectGrant(held.id, admin)])
        use_case = GrantPermissionsUseCase(uow_factory, normalizer, clock=fixed_clock)

        added = await use_case.execute(
            principal.id, ["BOOKING.READ", "BOOKING.CREATE"], granted_by=admin
        )

        assert len(added) == 1
        assert store.permissions[added[0].permission_id].canonical_key == "BOOKING_CREATE"
        assert len(store.principals[principal.id].direct_grants) == 2

    @pytest.mark.asyncio
    async def test_grant_rejects_past_expiry(self, store, uow_factory, normalizer) -> None:
        principal = seed_principal(store)
        use_case = GrantPermissionsUseCase(uow_factory, normalizer, clock=fixed_clock)

        with pytest.raises(ValidationError, match="future"):
            await use_case.execute(
                principal.id, ["BOOKING.READ"], uuid4(), expires_at=NOW - timedelta(minutes=1)
            )

    @pytest.mark.asyncio
    async def test_grant_requires_known_principal(self, uow_factory, normalizer) -> None:
        with pytest.raises(NotFound):
            await GrantPermissionsUseCase(uow_factory, normalizer).execute(
                uuid4(), ["BOOKING.READ"], uuid4()
            )

    @pytest.mark.asyncio
    async def test_grant_nothing_resolved_raises(self, store, uow_factory, normalizer) -> None:
        principal = seed_principal(store)
        with pytest.raises(ValidationError):
            await GrantPermissionsUseCase(uow_factory, normalizer).execute(
                principal.id, ["NOPE.NOPE"], uuid4()
            )

    @pytest.mark.asyncio
    async def test_revoke_removes_all_grants_of_permission(self, store, uow_factory) -> None:
        permission = seed_permission(store, "BOOKING", "READ")
        other = seed_permission(store, "BOOKING", "CREATE")
        principal = seed_principal(
            store,
            direct=[
                DirectGrant(permission.id, uuid4()),
                DirectGrant(permission.id, uuid4(), NOW + timedelta(days=1)),
                DirectGrant(other.id, uuid4()),
            ],
        )
        use_case = RevokePermissionUseCase(uow_factory)

        assert await use_case.execute(principal.id, permission.id) == 2
        assert await use_case.execute(principal.id, permission.id) == 0
        remaining = store.principals[principal.id].direct_grants
        assert [g.permission_id for g in remaining] == [other.id]


class TestDelegation:
    """Tests for DelegatePermissionsUseCase and RevokeDelegationUseCase."""

    @pytest.fixture
    def delegate(self, uow_factory, resolver) -> DelegatePermissionsUseCase:
        return DelegatePermissionsUseCase(uow_factory, resolver, clock=fixed_clock)

    @pytest.mark.asyncio
    async def test_delegates_held_permissions(self, store, delegate) -> None:
        permission = seed_permission(store, "BOOKING", "READ")
        source = seed_principal(store, roles=[seed_role(store, "V", permissions=[permission])])
        target = seed_principal(store)
        expires = NOW + timedelta(days=2)

        grant = await delegate.execute(source.id, target.id, [permission.id], expires)

        assert grant.from_principal == source.id
        assert grant.granted_by == source.id
        assert store.principals[target.id].delegated_grants == [grant]

    @pytest.mark.asyncio
    async def test_requires_expiry(self, store, delegate) -> None:
        permission = seed_permission(store, "BOOKING", "READ")
        source = seed_principal(store)
        target = seed_principal(store)

        with pytest.raises(ValidationError, match="expiration"):
            await delegate.execute(source.id, target.id, [permission.id], None)

    @pytest.mark.asyncio
    async def test_rejects_invalid_requests(self, store, delegate) -> None:
        permission = seed_permission(store, "BOOKING", "READ")
        source = seed_principal(store)
        target = seed_principal(store)
        future = NOW + timedelta(days=1)

        with pytest.raises(ValidationError):
            await delegate.execute(source.id, target.id, [permission.id], NOW)
        with pytest.raises(ValidationError):
            await delegate.execute(source.id, source.id, [permission.id], future)
        with pytest.raises(ValidationError):
            await delegate.execute(source.id, target.id, [], future)
        with pytest.raises(NotFound):
            await delegate.execute(source.id, uuid4(), [permission.id], future)
        with pytest.raises(NotFound):
            await delegate.execute(source.id, target.id, [uuid4()], future)

    @pytest.mark.asyncio
    async def test_cannot_delegate_unheld_permission(self, store, delegate) -> None:
        held = seed_permission(store, "BOOKING", "READ")
        unheld = seed_permission(store, "BOOKING", "DELETE")
        source = seed_principal(store, roles=[seed_role(store, "V", permissions=[held])])
        target = seed_principal(store)

        with pytest.raises(PermissionDenied):
            await delegate.execute(
                source.id, target.id, [held.id, unheld.id], NOW + timedelta(days=1)
            )
        assert store.principals[target.id].delegated_grants == []

    @pytest.mark.asyncio
    async def test_super_admin_may_delegate_anything(self, store, delegate) -> None:
        permission = seed_permission(store, "BOOKING", "DELETE")
        source = seed_principal(store, roles=[seed_role(store, "SA", is_super_admin=True)])
        target = seed_principal(store)

        grant = await delegate.execute(
            source.id, target.id, [permission.id], NOW + timedelta(days=1)
        )

        assert grant.permission_ids == frozenset({permission.id})

    def test_delegated_grant_entity_requires_expiry(self) -> None:
        with pytest.raises(ValidationError):
            DelegatedGrant(uuid4(), frozenset(), uuid4(), None)

    @pytest.mark.asyncio
    async def test_revoke_delegation_by_source(self, store, uow_factory) -> None:
        a, b = uuid4(), uuid4()
        expires = NOW + timedelta(days=1)
        principal = seed_principal(
            store,
            delegated=[
                DelegatedGrant(a, frozenset({uuid4()}), a, expires),
                DelegatedGrant(b, frozenset({uuid4()}), b, expires),
            ],
        )

        removed = await RevokeDelegationUseCase(uow_factory).execute(principal.id, a)

        assert removed == 1
        assert [d.from_principal for d in store.principals[principal.id].delegated_grants] == [b]


class TestExplainPermissions:
    """Tests for ExplainPermissionsUseCase."""

    @pytest.mark.asyncio
    async def test_report_lists_sources(self, store, uow_factory, resolver) -> None:
        read = seed_permission(store, "BOOKING", "READ")
        create = seed_permission(store, "BOOKING", "CREATE")
        expired = seed_permission(store, "BOOKING", "DELETE")
        role = seed_role(store, "VIEWER", permissions=[read])
        principal = seed_principal(
            store,
            roles=[role],
            direct=[
                DirectGrant(create.id, uuid4()),
                DirectGrant(expired.id, uuid4(), NOW - timedelta(days=1)),
            ],
        )

        report = await ExplainPermissionsUseCase(uow_factory, resolver, fixed_clock).execute(
            principal.id
        )

        assert not report.is_super_admin
        assert [r.name for r in report.roles] == ["VIEWER"]
        assert [(g.key, g.live) for g in report.direct_grants] == [
            ("BOOKING.CREATE", True),
            ("BOOKING.DELETE", False),
        ]
        assert [(e.module, e.action, e.source) for e in report.effective] == [
            ("BOOKING", "CREATE", "direct"),
            ("BOOKING", "READ", "role"),
        ]

    @pytest.mark.asyncio
    async def test_super_admin_report(self, store, uow_factory, resolver) -> None:
        principal = seed_principal(store, roles=[seed_role(store, "SA", is_super_admin=True)])

        report = await ExplainPermissionsUseCase(uow_factory, resolver, fixed_clock).execute(
            principal.id
        )

        assert report.is_super_admin
        assert report.effective == []

    @pytest.mark.asyncio
    async def test_unknown_principal_raises(self, uow_factory, resolver) -> None:
        with pytest.raises(NotFound):
            await ExplainPermissionsUseCase(uow_factory, resolver).execute(uuid4())


class TestNaiveExpiry:
    """Naive expiry datetimes are read as UTC."""

    @pytest.mark.asyncio
    async def test_grant_with_naive_past_expiry_is_rejected(
        self, store, uow_factory, normalizer
    ) -> None:
        principal = seed_principal(store)
        use_case = GrantPermissionsUseCase(uow_factory, normalizer, clock=fixed_clock)

        with pytest.raises(ValidationError, match="future"):
            await use_case.execute(
                principal.id, ["BOOKING.READ"], uuid4(), expires_at=datetime(2020, 1, 1)
            )

    @pytest.mark.asyncio
    async def test_grant_with_naive_future_expiry_is_stored_as_utc(
        self, store, uow_factory, normalizer
    ) -> None:
        principal = seed_principal(store)
        use_case = GrantPermissionsUseCase(uow_factory, normalizer, clock=fixed_clock)

        added = await use_case.execute(
            principal.id, ["BOOKING.READ"], uuid4(), expires_at=datetime(2030, 1, 1)
        )

        assert added[0].expires_at == datetime(2030, 1, 1, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_delegate_with_naive_expiry(self, store, uow_factory, resolver) -> None:
        permission = seed_permission(store, "BOOKING", "READ")
        source = seed_principal(store, roles=[seed_role(store, "V", permissions=[permission])])
        target = seed_principal(store)
        use_case = DelegatePermissionsUseCase(uow_factory, resolver, clock=fixed_clock)

        with pytest.raises(ValidationError, match="future"):
            await use_case.execute(source.id, target.id, [permission.id], datetime(2020, 1, 1))
        grant = await use_case.execute(
            source.id, target.id, [permission.id], datetime(2030, 1, 1)
        )

        assert grant.expires_at.tzinfo is UTC

    def test_grant_entities_normalize_naive_expiry(self) -> None:
        direct = DirectGrant(uuid4(), uuid4(), datetime(2030, 1, 1))
        delegated = DelegatedGrant(uuid4(), frozenset(), uuid4(), datetime(2030, 1, 1))

        assert direct.is_live(NOW)
        assert delegated.is_live(NOW)
        assert not direct.is_live(datetime(2031, 1, 1))
