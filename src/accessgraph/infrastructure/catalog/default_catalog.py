"""Shipped permission catalog."""

from accessgraph.domain.catalog import Catalog

CRUD = ("READ", "CREATE", "UPDATE", "DELETE")

DEFAULT_CATALOG = Catalog.from_modules(
    [
        ("VEHICLES", "INVENTORY", CRUD),
        ("ATTACHMENTS", "DOCS", CRUD),
        ("PERMISSION", "ADMIN", (*CRUD, "MANAGE")),
        ("QUOTATION", "SALES", (*CRUD, "EXPORT")),
        ("ROLE", "ADMIN", CRUD),
        ("RTO_PROCESS", "REGISTRATION", CRUD),
        ("INSURANCE", "FINANCE", CRUD),
        ("IP_WHITELIST", "SYSTEM", ("READ", "CREATE", "DELETE")),
        ("KYC", "COMPLIANCE", (*CRUD, "VERIFY", "DOWNLOAD")),
        ("LEDGER", "FINANCE", CRUD),
        ("MODEL", "CATALOG", CRUD),
        ("NEW_INSURANCE", "FINANCE", CRUD),
        ("OFFER", "MARKETING", CRUD),
        ("ACCESSORY", "CATALOG", CRUD),
        ("ACCESSORY_CATEGORY", "CATALOG", CRUD),
        ("COLOR", "CATALOG", CRUD),
        ("AUDIT_LOG", "SYSTEM", ("READ",)),
        ("BANK", "FINANCE", CRUD),
        ("BOOKING", "SALES", (*CRUD, "BOOKING_ACTIONS")),
        ("BROKER", "PARTNER", CRUD),
        ("BROKER_LEDGER", "FINANCE", CRUD),
        ("BRANCH", "ORGANIZATION", CRUD),
        ("CASH_LOCATION", "FINANCE", CRUD),
        ("CASH_VOUCHER", "FINANCE", CRUD),
        ("CONTRA_VOUCHER", "FINANCE", CRUD),
        ("CSV", "SYSTEM", ("READ", "CREATE")),
        ("CUSTOMER", "CRM", CRUD),
        ("DECLARATION", "DOCS", CRUD),
        ("EMPLOYEE", "ORGANIZATION", CRUD),
        ("EXPENSE_ACCOUNT", "FINANCE", CRUD),
        ("FINANCE_DOCUMENT", "FINANCE", CRUD),
        ("FINANCE_LETTER", "FINANCE", CRUD),
        ("FINANCE_PROVIDER", "FINANCE", CRUD),
        ("HEADER", "SYSTEM", CRUD),
        ("INSURANCE_PROVIDER", "FINANCE", CRUD),
        ("INSURANCE_RECEIPT", "FINANCE", CRUD),
        ("RTO", "REGISTRATION", CRUD),
        ("STOCK_TRANSFER", "INVENTORY", CRUD),
        ("TERMS_CONDITION", "SYSTEM", CRUD),
        ("WORKSHOP_RECEIPT", "FINANCE", CRUD),
        ("VEHICLE_INWARD", "INVENTORY", (*CRUD, "APPROVE")),
        ("USER", "ADMIN", (*CRUD, "MANAGE")),
        ("USER_BUFFER", "ADMIN", ("READ", "UPDATE")),
        ("USER_PERMISSIONS", "ADMIN", ("READ", "ASSIGN", "DELEGATE")),
        ("USER_STATUS", "ADMIN", ("UPDATE",)),
        ("SUBDEALER", "ADMIN", CRUD),
        ("SUBDEALERMODEL", "ADMIN", CRUD),
        ("SUBDEALER_ON_ACCOUNT", "ADMIN", CRUD),
        ("FINANCE_DISBURSEMENT", "FINANCE", CRUD),
    ],
    version="2024.1",
)
