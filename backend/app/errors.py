"""Domain error types raised by the ordering engine and place resolver."""


class DomainError(Exception):
    """Base class for errors surfaced to route handlers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Referenced activity, bound, itinerary or place does not exist."""

    pass


class InvalidArgumentError(DomainError):
    """Malformed input or a bound/bucket that does not fit the target."""

    pass
