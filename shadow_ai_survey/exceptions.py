"""Project-wide custom exception types."""


class CatalogError(ValueError):
    """Raised when an AI tool catalog file cannot be read or is malformed."""

    def __init__(self, message: str) -> None:  # noqa: D401 – simple constructor
        super().__init__(message)


class ResponseFormatError(ValueError):
    """Raised when a stored survey response row does not have a usable shape."""
