class AppError(Exception):
    """Expected failure of an operation; ``message`` is safe to show the caller."""

    kind = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class NotFound(AppError):
    kind = "not_found"

class Conflict(AppError):
    kind = "conflict"

class Forbidden(AppError):
    kind = "forbidden"

    def __init__(self, message: str = "Access Denied"):
        super().__init__(message)

class ValidationFailed(AppError):
    kind = "validation_failed"

class Unauthenticated(AppError):
    kind = "unauthenticated"

    def __init__(self, message: str = "invalid token"):
        super().__init__(message)

class Internal(AppError):
    kind = "internal"
