"""PostgreSQL principal repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from accessgraph.domain.entities import DelegatedGrant, DirectGrant, Principal


class PostgresPrincipalRepository:
    """Principal repository - role assignments and grants."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, principal_id: UUID) -> Principal | None:
        """Get principal with its direct and delegated grants."""
        cur = await self._conn.execute(
            "SELECT id, role_ids FROM principal WHERE id = %s",
            (principal_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None

        cur = await self._conn.execute(
            "SELECT permission_id, granted_by, expires_at FROM principal_direct_grant "
            "WHERE principal_id = %s ORDER BY permission_id",
            (principal_id,),
        )
        direct = [
            DirectGrant(permission_id=g[0], granted_by=g[1], expires_at=g[2])
            for g in await cur.fetchall()
        ]

        cur = await self._conn.execute(
            "SELECT from_principal, permission_ids, granted_by, expires_at "
            "FROM principal_delegated_grant WHERE principal_id = %s ORDER BY expires_at",
            (principal_id,),
        )
        delegated = [
            DelegatedGrant(
                from_principal=d[0],
                permission_ids=frozenset(d[1] or []),
                granted_by=d[2],
                expires_at=d[3],
            )
            for d in await cur.fetchall()
        ]
        return Principal(
            id=r[0],
            role_ids=set(r[1] or []),
            direct_grants=direct,
            delegated_grants=delegated,
        )

    async def save(self, principal: Principal) -> None:
        """Upsert principal and replace its grants."""
        await self._conn.execute(
            "INSERT INTO principal (id, role_ids) VALUES (%s, %s) "
            "ON CONFLICT (id) DO UPDATE SET role_ids = EXCLUDED.role_ids",
            (principal.id, list(principal.role_ids)),
        )
        await self._conn.execute(
            "DELETE FROM principal_direct_grant WHERE principal_id = %s",
            (principal.id,),
        )
        await self._conn.execute(
            "DELETE FROM principal_delegated_grant WHERE principal_id = %s",
            (principal.id,),
        )
        async with self._conn.cursor() as cur:
            if principal.direct_grants:
                await cur.executemany(
                    "INSERT INTO principal_direct_grant "
                    "(principal_id, permission_id, granted_by, expires_at) "
                    "VALUES (%s, %s, %s, %s)",
                    [
                        (principal.id, g.permission_id, g.granted_by, g.expires_at)
                        for g in principal.direct_grants
                    ],
                )
            if principal.delegated_grants:
                await cur.executemany(
                    "INSERT INTO principal_delegated_grant "
                    "(principal_id, from_principal, permission_ids, granted_by, expires_at) "
                    "VALUES (%s, %s, %s, %s, %s)",
                    [
                        (
                            principal.id,
                            d.from_principal,
                            sorted(d.permission_ids, key=str),
                            d.granted_by,
                            d.expires_at,
                        )
                        for d in principal.delegated_grants
                    ],
                )
