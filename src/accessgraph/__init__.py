"""AccessGraph - role-graph authorization engine."""

__version__ = "0.1.0"
