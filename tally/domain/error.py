"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class UnauthenticatedError(DomainError):
    """Raised when an operation needs a voter and none was resolved."""

    def __init__(self, message: str = "Authentication required to vote"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when a voter lacks the privilege for an operation."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidArgumentError(ValidationError):
    """Raised for a malformed vote weight, target type or identifier."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when concurrent writes still collide after the retry budget."""

    pass


class StoreUnavailableError(DomainError):
    """Transient infrastructure failure; the caller may retry."""

    pass
