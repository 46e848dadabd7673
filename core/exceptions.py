"""Custom exception classes for the new titles map."""


class NewTitlesError(Exception):
    """Base exception for all new titles map errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CatalogLoadError(NewTitlesError):
    """Raised when the bundled book catalog cannot be loaded."""

    pass


class BookNotFoundError(NewTitlesError):
    """Raised when a selection target is not in the current month's list."""

    pass


class ConfigurationError(NewTitlesError):
    """Raised when there's a configuration error."""

    pass
