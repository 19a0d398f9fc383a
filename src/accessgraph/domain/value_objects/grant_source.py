"""Where an effective permission came from."""

from enum import StrEnum


class GrantSource(StrEnum):
    """Provenance of an effective permission; informational only."""

    ROLE = "role"
    DIRECT = "direct"
    DELEGATED = "delegated"
