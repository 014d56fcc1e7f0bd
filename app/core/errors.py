"""
Food Ordering API — Error taxonomy

Every error a handler may surface to a client derives from AppError.
`message` is what the client sees; details belong in the server log.
"""


class AppError(Exception):
    status_code: int = 500
    category: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class AuthError(AppError):
    """Missing, malformed, invalid or expired bearer credential."""
    status_code = 401
    category = "unauthorized"
    default_message = "Unauthorized: Missing or invalid Authorization header"

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AppError):
    status_code = 403
    category = "forbidden"
    default_message = "Forbidden"


class ValidationError(AppError):
    status_code = 400
    category = "validation_error"
    default_message = "Invalid request payload"


class NotFoundError(AppError):
    status_code = 404
    category = "not_found"
    default_message = "Not found"


class MethodNotAllowedError(AppError):
    status_code = 405
    category = "method_not_allowed"
    default_message = "Method not allowed"


class InternalError(AppError):
    pass


class SequencerError(InternalError):
    """The queue counter could not be advanced; no order was written."""
    default_message = "Failed to place order"


class OrderPersistenceError(InternalError):
    """
    The queue counter advanced but the order row could not be written.
    The consumed queue number is never reused or rolled back.
    """
    default_message = "Failed to place order"

    def __init__(self, queue_number: int, message: str | None = None):
        self.queue_number = queue_number
        super().__init__(message)
