"""Application entry point and composition root."""

import argparse
import asyncio
import sys
from dataclasses import dataclass
from uuid import UUID

from psycopg_pool import AsyncConnectionPool

from accessgraph import __version__
from accessgraph.application.dto.permission_report import GrantSummary, PermissionReport
from accessgraph.application.ports import PermissionChecker
from accessgraph.application.services import (
    CatalogBootstrapper,
    EffectivePermissionResolver,
    PermissionNormalizer,
    RoleInheritanceResolver,
)
from accessgraph.application.use_cases.catalog.ensure_catalog import EnsureCatalogUseCase
from accessgraph.application.use_cases.permission.list_permissions import (
    ListPermissionsUseCase,
)
from accessgraph.application.use_cases.permission.set_permission_active import (
    SetPermissionActiveUseCase,
)
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
from accessgraph.application.use_cases.role.add_inheritance import AddInheritanceUseCase
from accessgraph.application.use_cases.role.create_role import CreateRoleUseCase
from accessgraph.application.use_cases.role.get_role_permissions import (
    GetRolePermissionsUseCase,
)
from accessgraph.application.use_cases.role.initialize_roles import InitializeRolesUseCase
from accessgraph.application.use_cases.role.remove_inheritance import (
    RemoveInheritanceUseCase,
)
from accessgraph.application.use_cases.role.update_role import UpdateRoleUseCase
from accessgraph.config import Settings, get_settings
from accessgraph.domain.catalog import Catalog
from accessgraph.domain.exceptions import AccessGraphError, ValidationError
from accessgraph.infrastructure.catalog.default_catalog import DEFAULT_CATALOG
from accessgraph.infrastructure.catalog.json_catalog import load_catalog
from accessgraph.infrastructure.permission.authorization_checker import AuthorizationChecker
from accessgraph.infrastructure.persistence.postgres.connection import create_pool
from accessgraph.infrastructure.persistence.postgres.schema import ensure_schema
from accessgraph.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from accessgraph.logging_config import configure_logging


@dataclass
class Engine:
    """Wired authorization engine."""

    catalog: Catalog
    ensure_catalog: EnsureCatalogUseCase
    initialize_roles: InitializeRolesUseCase
    list_permissions: ListPermissionsUseCase
    set_permission_active: SetPermissionActiveUseCase
    create_role: CreateRoleUseCase
    update_role: UpdateRoleUseCase
    add_inheritance: AddInheritanceUseCase
    remove_inheritance: RemoveInheritanceUseCase
    get_role_permissions: GetRolePermissionsUseCase
    assign_roles: AssignRolesUseCase
    grant_permissions: GrantPermissionsUseCase
    revoke_permission: RevokePermissionUseCase
    delegate_permissions: DelegatePermissionsUseCase
    revoke_delegation: RevokeDelegationUseCase
    explain_permissions: ExplainPermissionsUseCase
    checker: PermissionChecker


def build_engine(
    uow_factory: object,
    catalog: Catalog,
    settings: Settings | None = None,
) -> Engine:
    """Composition root - wire services and use cases around a UoW factory."""
    settings = settings or get_settings()
    bootstrapper = CatalogBootstrapper(catalog)
    normalizer = PermissionNormalizer(bootstrapper)
    inheritance = RoleInheritanceResolver()
    resolver = EffectivePermissionResolver(inheritance)

    return Engine(
        catalog=catalog,
        ensure_catalog=EnsureCatalogUseCase(
            uow_factory, bootstrapper, lock_id=settings.bootstrap_lock_id
        ),
        initialize_roles=InitializeRolesUseCase(
            uow_factory,
            superadmin_role_name=settings.superadmin_role_name,
            admin_role_name=settings.admin_role_name,
        ),
        list_permissions=ListPermissionsUseCase(uow_factory),
        set_permission_active=SetPermissionActiveUseCase(uow_factory),
        create_role=CreateRoleUseCase(uow_factory, normalizer),
        update_role=UpdateRoleUseCase(uow_factory, normalizer),
        add_inheritance=AddInheritanceUseCase(uow_factory, inheritance),
        remove_inheritance=RemoveInheritanceUseCase(uow_factory),
        get_role_permissions=GetRolePermissionsUseCase(uow_factory, inheritance),
        assign_roles=AssignRolesUseCase(uow_factory),
        grant_permissions=GrantPermissionsUseCase(uow_factory, normalizer),
        revoke_permission=RevokePermissionUseCase(uow_factory),
        delegate_permissions=DelegatePermissionsUseCase(uow_factory, resolver),
        revoke_delegation=RevokeDelegationUseCase(uow_factory),
        explain_permissions=ExplainPermissionsUseCase(uow_factory, resolver),
        checker=AuthorizationChecker(uow_factory, resolver),
    )


def load_configured_catalog(settings: Settings) -> Catalog:
    if settings.catalog_path:
        try:
            return load_catalog(settings.catalog_path)
        except OSError as e:
            raise ValidationError(f"Cannot read catalog {settings.catalog_path}: {e}") from e
    return DEFAULT_CATALOG


def _grant_line(grant: GrantSummary) -> str:
    line = f"- {grant.key or grant.permission_id}"
    if grant.from_principal:
        line += f" from {grant.from_principal}"
    if grant.expires_at:
        line += f" (expires: {grant.expires_at.isoformat()})"
    if not grant.live:
        line += " [expired]"
    return line


def format_report(report: PermissionReport) -> list[str]:
    """Render an explain report as CLI lines."""
    lines = [
        f"Principal: {report.principal_id}",
        f"Super admin: {report.is_super_admin}",
        "Roles:",
    ]
    for role in report.roles:
        lines.append(f"- {role.name}{' (super admin)' if role.is_super_admin else ''}")
    lines.append("Direct grants:")
    lines.extend(_grant_line(g) for g in report.direct_grants)
    lines.append("Delegated grants:")
    lines.extend(_grant_line(g) for g in report.delegated_grants)
    lines.append("Effective permissions:")
    lines.extend(f"- {e.module}.{e.action} [{e.source}]" for e in report.effective)
    return lines


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    pool: AsyncConnectionPool = create_pool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    await pool.open()
    try:
        if args.command == "init-db":
            async with pool.connection() as conn:
                await ensure_schema(conn)
            print("Schema ready")
            return 0
        engine = build_engine(
            create_uow_factory(pool), load_configured_catalog(settings), settings
        )
        if args.command == "bootstrap":
            permissions = await engine.ensure_catalog.execute()
            roles = await engine.initialize_roles.execute()
            print(f"{len(permissions)} permissions ensured")
            for name, info in roles.items():
                print(f"{name}: {info['id']} ({info['permissions']} permissions)")
        elif args.command == "check":
            allowed = await engine.checker.has_permission(
                args.principal, args.module, args.action
            )
            print("ALLOW" if allowed else "DENY")
            return 0 if allowed else 1
        elif args.command == "explain":
            report = await engine.explain_permissions.execute(args.principal)
            print("\n".join(format_report(report)))
    finally:
        await pool.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="accessgraph", description="Authorization engine")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("version", help="Print version")
    sub.add_parser("init-db", help="Create missing tables")
    sub.add_parser("bootstrap", help="Ensure catalog permissions and system roles")
    check = sub.add_parser("check", help="Check one permission for a principal")
    check.add_argument("principal", type=UUID, help="Principal id")
    check.add_argument("module")
    check.add_argument("action")
    explain = sub.add_parser("explain", help="Show how a principal got its permissions")
    explain.add_argument("principal", type=UUID, help="Principal id")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    if args.command == "version":
        print(f"AccessGraph v{__version__}")
        return 0

    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        return asyncio.run(_run(args, settings))
    except AccessGraphError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
