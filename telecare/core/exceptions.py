"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class UnauthorizedException(AppException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Unauthorized"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class ConflictException(AppException):
    """Conflict exception."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class IllegalTransitionException(ConflictException):
    """Requested status change is not allowed from the current status."""

    def __init__(self, entity: str, current: str, target: str | None = None):
        """
        Initialize with the entity name and the rejected transition.

        A missing ``target`` means a plain edit of a closed record.
        """
        self.entity = entity
        self.current = current
        self.target = target
        if target is None:
            message = f"{entity.capitalize()} is {current} and can no longer be changed"
        else:
            message = f"Cannot move {entity} from '{current}' to '{target}'"
        super().__init__(message)


class ProviderUnavailableException(ConflictException):
    """Doctor or transport provider stopped being bookable after it was listed."""

    def __init__(self, message: str = "Provider is no longer available"):
        """Initialize with 409 status code."""
        super().__init__(message)
