"""Table definitions used by the Postgres repositories.

Statements are idempotent. Versioned migrations are left to the host
application; this only creates what is missing.
"""

from psycopg import AsyncConnection

TABLES = (
    "permission",
    "role",
    "principal",
    "principal_direct_grant",
    "principal_delegated_grant",
)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS permission (
        id UUID PRIMARY KEY,
        module VARCHAR(100) NOT NULL,
        action VARCHAR(100) NOT NULL,
        canonical_key VARCHAR(201) NOT NULL UNIQUE,
        category VARCHAR(100) NOT NULL DEFAULT '',
        description VARCHAR(255) NOT NULL DEFAULT '',
        active BOOLEAN NOT NULL DEFAULT TRUE
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_permission_module_action ON permission (module, action)",
    """
    CREATE TABLE IF NOT EXISTS role (
        id UUID PRIMARY KEY,
        name VARCHAR(100) NOT NULL UNIQUE,
        description VARCHAR(255) NOT NULL DEFAULT '',
        permission_ids UUID[] NOT NULL DEFAULT '{}',
        inherits UUID[] NOT NULL DEFAULT '{}',
        active BOOLEAN NOT NULL DEFAULT TRUE,
        is_super_admin BOOLEAN NOT NULL DEFAULT FALSE,
        is_system BOOLEAN NOT NULL DEFAULT FALSE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS principal (
        id UUID PRIMARY KEY,
        role_ids UUID[] NOT NULL DEFAULT '{}'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS principal_direct_grant (
        principal_id UUID NOT NULL REFERENCES principal(id) ON DELETE CASCADE,
        permission_id UUID NOT NULL REFERENCES permission(id),
        granted_by UUID NOT NULL,
        expires_at TIMESTAMPTZ NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_direct_grant_principal "
    "ON principal_direct_grant (principal_id)",
    """
    CREATE TABLE IF NOT EXISTS principal_delegated_grant (
        principal_id UUID NOT NULL REFERENCES principal(id) ON DELETE CASCADE,
        from_principal UUID NOT NULL,
        permission_ids UUID[] NOT NULL,
        granted_by UUID NOT NULL,
        expires_at TIMESTAMPTZ NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_delegated_grant_principal "
    "ON principal_delegated_grant (principal_id)",
)


async def ensure_schema(conn: AsyncConnection) -> None:
    """Create missing tables and indexes."""
    for statement in SCHEMA_STATEMENTS:
        await conn.execute(statement)
