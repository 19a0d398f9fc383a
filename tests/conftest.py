"""Pytest fixtures for AccessGraph tests."""

from __future__ import annotations

import asyncio
import copy
from collections.abc import AsyncIterator, Iterable, Mapping
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

import pytest

from accessgraph.application.services import (
    CatalogBootstrapper,
    EffectivePermissionResolver,
    PermissionNormalizer,
    RoleInheritanceResolver,
)
from accessgraph.domain.catalog import Catalog
from accessgraph.domain.entities import (
    DelegatedGrant,
    DirectGrant,
    Permission,
    Principal,
    Role,
    canonical_key,
)

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return NOW


# --- In-memory store ---


class InMemoryStore:
    """Shared state behind every FakeUnitOfWork of one test."""

    def __init__(self) -> None:
        self.permissions: dict[UUID, Permission] = {}
        self.roles: dict[UUID, Role] = {}
        self.principals: dict[UUID, Principal] = {}
        self.bootstrap_locks: list[int] = []

    def snapshot(self) -> tuple:
        return copy.deepcopy((self.permissions, self.roles, self.principals))

    def restore(self, snapshot: tuple) -> None:
        self.permissions, self.roles, self.principals = snapshot


def _check_groups(on_insert: Mapping[str, Any], on_update: Mapping[str, Any]) -> None:
    overlap = set(on_insert) & set(on_update)
    if overlap:
        raise ValueError(f"Conflicting update operators on {sorted(overlap)}")


# --- Fake repositories ---


class FakePermissionRepository:
    """In-memory permission repository with atomic upsert per key."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _find_key(self, key: str) -> Permission | None:
        return next(
            (p for p in self._store.permissions.values() if p.canonical_key == key.upper()),
            None,
        )

    async def list_by_ids(
        self, permission_ids: Iterable[UUID], *, active_only: bool = True
    ) -> list[Permission]:
        found = []
        for pid in dict.fromkeys(permission_ids):
            p = self._store.permissions.get(pid)
            if p and (p.active or not active_only):
                found.append(copy.deepcopy(p))
        return found

    async def list_active(
        self,
        *,
        module: str | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int | None = 50,
    ) -> tuple[list[Permission], int]:
        items = [p for p in self._store.permissions.values() if p.active]
        if module:
            items = [p for p in items if p.module == module.upper()]
        if search:
            needle = search.lower()
            items = [
                p
                for p in items
                if needle in p.canonical_key.lower() or needle in p.description.lower()
            ]
        items.sort(key=lambda p: (p.module, p.action))
        end = None if limit is None else offset + limit
        return copy.deepcopy(items[offset:end]), len(items)

    async def upsert(
        self,
        canonical_key: str,
        on_insert: Mapping[str, Any],
        on_update: Mapping[str, Any],
    ) -> Permission:
        # let concurrent callers interleave between keys
        await asyncio.sleep(0)
        _check_groups(on_insert, on_update)
        existing = self._find_key(canonical_key)
        if existing is None:
            existing = Permission(**{**on_insert, **on_update})
            self._store.permissions[existing.id] = existing
        else:
            for field_name, value in on_update.items():
                setattr(existing, field_name, value)
        return copy.deepcopy(existing)

    async def set_active(self, permission_id: UUID, active: bool) -> Permission | None:
        p = self._store.permissions.get(permission_id)
        if p is None:
            return None
        p.active = active
        return copy.deepcopy(p)

    async def acquire_bootstrap_lock(self, lock_id: int) -> None:
        self._store.bootstrap_locks.append(lock_id)


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return copy.deepcopy(self._store.roles.get(role_id))

    async def get_by_name(self, name: str) -> Role | None:
        name = name.strip().upper()
        return copy.deepcopy(
            next((r for r in self._store.roles.values() if r.name == name), None)
        )

    async def list_by_ids(self, role_ids: Iterable[UUID]) -> list[Role]:
        return [
            copy.deepcopy(self._store.roles[rid])
            for rid in dict.fromkeys(role_ids)
            if rid in self._store.roles
        ]

    async def set_inherits(self, role_id: UUID, inherits: Iterable[UUID]) -> None:
        self._store.roles[role_id].inherits = set(inherits)

    async def create(self, role: Role) -> Role:
        if any(r.name == role.name for r in self._store.roles.values()):
            raise ValueError(f"duplicate role name {role.name}")
        self._store.roles[role.id] = copy.deepcopy(role)
        return role

    async def update(self, role: Role) -> None:
        self._store.roles[role.id] = copy.deepcopy(role)

    async def upsert_by_name(
        self,
        name: str,
        on_insert: Mapping[str, Any],
        on_update: Mapping[str, Any],
    ) -> Role:
        _check_groups(on_insert, on_update)
        existing = next(
            (r for r in self._store.roles.values() if r.name == name.strip().upper()), None
        )
        if existing is None:
            existing = Role(**{**on_insert, **on_update})
            self._store.roles[existing.id] = existing
        else:
            for field_name, value in on_update.items():
                setattr(existing, field_name, copy.deepcopy(value))
        return copy.deepcopy(existing)


class FakePrincipalRepository:
    """In-memory principal repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, principal_id: UUID) -> Principal | None:
        return copy.deepcopy(self._store.principals.get(principal_id))

    async def save(self, principal: Principal) -> None:
        self._store.principals[principal.id] = copy.deepcopy(principal)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self, store: InMemoryStore) -> None:
        self.permissions = FakePermissionRepository(store)
        self.roles = FakeRoleRepository(store)
        self.principals = FakePrincipalRepository(store)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: InMemoryStore):
    """Factory yielding a FakeUnitOfWork; the store is restored on exception."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        snapshot = store.snapshot()
        uow = FakeUnitOfWork(store)
        try:
            yield uow
        except BaseException:
            store.restore(snapshot)
            raise

    return factory


# --- Seed helpers ---


def seed_permission(
    store: InMemoryStore, module: str, action: str, *, active: bool = True
) -> Permission:
    permission = Permission(
        id=uuid4(),
        module=module,
        action=action,
        canonical_key=canonical_key(module, action),
        category="TEST",
        description=f"{action} {module}",
        active=active,
    )
    store.permissions[permission.id] = permission
    return permission


def seed_role(
    store: InMemoryStore,
    name: str,
    permissions: Iterable[Permission] = (),
    inherits: Iterable[Role] = (),
    **kwargs: Any,
) -> Role:
    role = Role(
        id=uuid4(),
        name=name,
        permission_ids={p.id for p in permissions},
        inherits={r.id for r in inherits},
        **kwargs,
    )
    store.roles[role.id] = role
    return role


def seed_principal(
    store: InMemoryStore,
    roles: Iterable[Role] = (),
    direct: Iterable[DirectGrant] = (),
    delegated: Iterable[DelegatedGrant] = (),
) -> Principal:
    principal = Principal(
        id=uuid4(),
        role_ids={r.id for r in roles},
        direct_grants=list(direct),
        delegated_grants=list(delegated),
    )
    store.principals[principal.id] = principal
    return principal


# --- Fixtures ---


@pytest.fixture
def catalog() -> Catalog:
    """Small catalog: VEHICLES read/create, BOOKING CRUD, REPORTS with wildcard."""
    return Catalog.from_modules(
        [
            ("VEHICLES", "INVENTORY", ["READ", "CREATE"]),
            ("BOOKING", "SALES", ["READ", "CREATE", "UPDATE", "DELETE"]),
            ("REPORTS", "REPORTS", ["READ", "ALL"]),
        ],
        version="test",
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow_factory(store: InMemoryStore):
    return make_uow_factory(store)


@pytest.fixture
def bootstrapper(catalog: Catalog) -> CatalogBootstrapper:
    return CatalogBootstrapper(catalog)


@pytest.fixture
def normalizer(bootstrapper: CatalogBootstrapper) -> PermissionNormalizer:
    return PermissionNormalizer(bootstrapper)


@pytest.fixture
def inheritance() -> RoleInheritanceResolver:
    return RoleInheritanceResolver()


@pytest.fixture
def resolver(inheritance: RoleInheritanceResolver) -> EffectivePermissionResolver:
    return EffectivePermissionResolver(inheritance, clock=fixed_clock)
