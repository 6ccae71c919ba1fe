class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str = "Resource", id: str = ""):
        super().__init__(f"{resource} not found: {id}" if id else f"{resource} not found")


class ValidationError(AppError):
    """Raised when an input field is malformed."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(reason)


class ConflictError(AppError):
    """Raised when a write collides with existing state."""

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message)


class AlreadyExistsError(ConflictError):
    """Raised when a unique field is already taken by another user."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"User already exists with {field}: {value}")
