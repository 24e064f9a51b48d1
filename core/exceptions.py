"""Domain errors raised by the service layer; routers map them to HTTP codes."""


class NotFoundError(LookupError):
    """Target record is absent or soft-deleted (404)."""


class ConflictError(Exception):
    """Write would break a uniqueness or structural rule (409)."""


class InvalidOperationError(ValueError):
    """Request is well formed but not allowed in the current state (400)."""
