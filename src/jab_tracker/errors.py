"""Error types raised by the tracking engine."""


class InvalidInputError(ValueError):
    """Raised when a caller passes a value outside the accepted domain."""
