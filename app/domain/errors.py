"""Errors raised by use cases and translated by the API layer."""


class DomainError(ValueError):
    """Base class for expected business errors."""


class NotFoundError(DomainError):
    """The referenced complaint or notification does not exist."""


class ValidationError(DomainError):
    """The request is missing data or carries invalid values."""


class InvalidStatusTransitionError(ValidationError):
    """A complaint cannot move to the requested status."""


__all__ = [
    "DomainError",
    "InvalidStatusTransitionError",
    "NotFoundError",
    "ValidationError",
]
