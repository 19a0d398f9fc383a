"""SQL builder for upsert-by-unique-key with disjoint insert/update groups."""

from collections.abc import Collection, Mapping
from typing import Any


def _adapt(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return value


def build_upsert(
    table: str,
    key_column: str,
    allowed_columns: Collection[str],
    on_insert: Mapping[str, Any],
    on_update: Mapping[str, Any],
    returning: str,
) -> tuple[str, list[Any]]:
    """Build ``INSERT ... ON CONFLICT (key) DO UPDATE`` from the two field groups.

    Columns in ``on_insert`` are written only when the row is created;
    columns in ``on_update`` are written on insert and on every conflict.
    Column names are checked against ``allowed_columns``.
    """
    overlap = set(on_insert) & set(on_update)
    if overlap:
        raise ValueError(f"Columns in both insert and update groups: {sorted(overlap)}")
    if key_column not in on_insert:
        raise ValueError(f"Key column {key_column} must be in the insert group")
    if not on_update:
        raise ValueError("Update group must not be empty")
    unknown = (set(on_insert) | set(on_update)) - set(allowed_columns)
    if unknown:
        raise ValueError(f"Unknown columns for {table}: {sorted(unknown)}")

    columns = [*on_insert, *on_update]
    placeholders = ", ".join(["%s"] * len(columns))
    assignments = ", ".join(f"{c} = EXCLUDED.{c}" for c in on_update)
    query = (
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) "
        f"ON CONFLICT ({key_column}) DO UPDATE SET {assignments} "
        f"RETURNING {returning}"
    )
    params = [_adapt(on_insert[c]) for c in on_insert] + [_adapt(on_update[c]) for c in on_update]
    return query, params
