"""Error taxonomy shared by services, the auth guard, and the HTTP layer.

Learn: Services raise these instead of HTTPException so they stay usable
outside a request. The app factory registers one exception handler that
renders any AppError as {"error": message} with the class's status code.
"""


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    """Duplicate username. Reported as 400 like every other bad registration."""

    status_code = 400
    default_message = "Username already exists"


class AuthError(AppError):
    """Bad login credentials (unknown user or wrong password)."""

    status_code = 400
    default_message = "Invalid credentials"


class UnauthorizedError(AppError):
    """Missing, malformed, tampered, or expired bearer token."""

    status_code = 401
    default_message = "Invalid token"


class NotFoundError(AppError):
    """Resource absent, or owned by someone else."""

    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    """Unexpected store or runtime failure."""
