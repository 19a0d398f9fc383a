"""PostgreSQL permission repository implementation."""

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from psycopg import AsyncConnection

from accessgraph.domain.entities import Permission
from accessgraph.infrastructure.persistence.postgres.upsert import build_upsert

_COLUMNS = "id, module, action, canonical_key, category, description, active"
_ALLOWED = frozenset(c.strip() for c in _COLUMNS.split(","))


def _row_to_permission(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        module=r[1],
        action=r[2],
        canonical_key=r[3],
        category=r[4] or "",
        description=r[5] or "",
        active=r[6],
    )


def _build_active_filter(
    module: str | None, search: str | None
) -> tuple[list[str], list[Any]]:
    """Return WHERE conditions and params for listing active permissions."""
    conditions = ["active"]
    params: list[Any] = []
    if module:
        conditions.append("module = %s")
        params.append(module.upper())
    if search:
        escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        conditions.append("(canonical_key ILIKE %s OR description ILIKE %s)")
        params.extend([f"%{escaped}%", f"%{escaped}%"])
    return conditions, params


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_ids(
        self, permission_ids: Iterable[UUID], *, active_only: bool = True
    ) -> list[Permission]:
        """List permissions whose id is in ``permission_ids``."""
        ids = list(permission_ids)
        if not ids:
            return []
        query = f"SELECT {_COLUMNS} FROM permission WHERE id = ANY(%s)"
        if active_only:
            query += " AND active"
        cur = await self._conn.execute(query, (ids,))
        return [_row_to_permission(r) for r in await cur.fetchall()]

    async def list_active(
        self,
        *,
        module: str | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int | None = 50,
    ) -> tuple[list[Permission], int]:
        """List active permissions ordered by module, action."""
        conditions, params = _build_active_filter(module, search)
        where = " AND ".join(conditions)
        cur = await self._conn.execute(
            f"SELECT count(*) FROM permission WHERE {where}", params
        )
        total = (await cur.fetchone())[0]

        query = f"SELECT {_COLUMNS} FROM permission WHERE {where} ORDER BY module, action"
        page_params = list(params)
        if limit is not None:
            query += " LIMIT %s OFFSET %s"
            page_params.extend([limit, offset])
        elif offset:
            query += " OFFSET %s"
            page_params.append(offset)
        cur = await self._conn.execute(query, page_params)
        return [_row_to_permission(r) for r in await cur.fetchall()], total

    async def upsert(
        self,
        canonical_key: str,
        on_insert: Mapping[str, Any],
        on_update: Mapping[str, Any],
    ) -> Permission:
        """Atomic upsert on the unique canonical_key."""
        query, params = build_upsert(
            "permission",
            "canonical_key",
            _ALLOWED,
            {**on_insert, "canonical_key": canonical_key.upper()},
            on_update,
            returning=_COLUMNS,
        )
        cur = await self._conn.execute(query, params)
        return _row_to_permission(await cur.fetchone())

    async def set_active(self, permission_id: UUID, active: bool) -> Permission | None:
        """Set the active flag."""
        cur = await self._conn.execute(
            f"UPDATE permission SET active = %s WHERE id = %s RETURNING {_COLUMNS}",
            (active, permission_id),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def acquire_bootstrap_lock(self, lock_id: int) -> None:
        """Transaction-scoped advisory lock; released on commit or rollback."""
        await self._conn.execute("SELECT pg_advisory_xact_lock(%s)", (lock_id,))
