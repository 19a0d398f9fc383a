"""Domain exceptions."""


class AccessGraphError(Exception):
    """Base exception for AccessGraph."""

    pass


class ValidationError(AccessGraphError):
    """Validation failed for input data."""

    pass


class CircularInheritanceError(ValidationError):
    """Adding an inheritance edge would make a role inherit from itself."""

    pass


class NotFound(AccessGraphError):
    """Requested resource was not found."""

    pass


class ConflictError(AccessGraphError):
    """Unique role name or permission key is already taken."""

    pass


class PermissionDenied(AccessGraphError):
    """Principal does not hold the permissions required for the operation."""

    pass
