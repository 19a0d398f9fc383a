"""PostgreSQL role repository implementation."""

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from psycopg import AsyncConnection

from accessgraph.domain.entities import Role
from accessgraph.infrastructure.persistence.postgres.upsert import build_upsert

_COLUMNS = (
    "id, name, description, permission_ids, inherits, active, is_super_admin, is_system"
)
_ALLOWED = frozenset(c.strip() for c in _COLUMNS.split(","))


def _row_to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2] or "",
        permission_ids=set(r[3] or []),
        inherits=set(r[4] or []),
        active=r[5],
        is_super_admin=r[6],
        is_system=r[7],
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE name = %s",
            (name.strip().upper(),),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def list_by_ids(self, role_ids: Iterable[UUID]) -> list[Role]:
        """List roles whose id is in ``role_ids``."""
        ids = list(role_ids)
        if not ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = ANY(%s)",
            (ids,),
        )
        return [_row_to_role(r) for r in await cur.fetchall()]

    async def set_inherits(self, role_id: UUID, inherits: Iterable[UUID]) -> None:
        """Update only the inherits column."""
        await self._conn.execute(
            "UPDATE role SET inherits=%s WHERE id=%s",
            (sorted(inherits, key=str), role_id),
        )

    async def create(self, role: Role) -> Role:
        """Create role."""
        await self._conn.execute(
            f"INSERT INTO role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                role.id,
                role.name,
                role.description,
                list(role.permission_ids),
                list(role.inherits),
                role.active,
                role.is_super_admin,
                role.is_system,
            ),
        )
        return role

    async def update(self, role: Role) -> None:
        """Update role."""
        await self._conn.execute(
            "UPDATE role SET name=%s, description=%s, permission_ids=%s, inherits=%s, "
            "active=%s, is_super_admin=%s WHERE id=%s",
            (
                role.name,
                role.description,
                list(role.permission_ids),
                list(role.inherits),
                role.active,
                role.is_super_admin,
                role.id,
            ),
        )

    async def upsert_by_name(
        self,
        name: str,
        on_insert: Mapping[str, Any],
        on_update: Mapping[str, Any],
    ) -> Role:
        """Atomic upsert on the unique role name."""
        query, params = build_upsert(
            "role",
            "name",
            _ALLOWED,
            {**on_insert, "name": name.strip().upper()},
            on_update,
            returning=_COLUMNS,
        )
        cur = await self._conn.execute(query, params)
        return _row_to_role(await cur.fetchone())
