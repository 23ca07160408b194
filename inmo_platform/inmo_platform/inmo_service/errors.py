"""Error taxonomy shared by the stores, services and HTTP layer."""


class InmoError(Exception):
    """Base exception for all listing service errors."""

    status_code = 500
    title = "Internal server error"


class ValidationError(InmoError):
    """Raised when required input is missing or malformed."""

    status_code = 400
    title = "Invalid request"


class InvalidInput(ValidationError):
    """Raised when a plaintext password falls outside the allowed length range."""


class AuthenticationFailed(InmoError):
    """Raised when credentials do not match an active account."""

    status_code = 401
    title = "Unauthorized"


class NotFound(InmoError):
    """Raised when no active record matches the requested id or key."""

    status_code = 404
    title = "Not found"


class ConstraintViolation(InmoError):
    """Raised when a unique field collides with an active record."""

    status_code = 409
    title = "Conflict"


class PersistenceError(InmoError):
    """Raised when the underlying database operation fails."""

    status_code = 500
    title = "Internal server error"
