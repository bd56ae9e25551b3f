"""
Exception types raised by pageflow.
"""


class PageflowError(Exception):
    """Base exception for pageflow errors.

    Args:
        message: Human-readable error message.
        details: Optional technical details for debugging.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(PageflowError):
    """Raised when options or required element references are invalid."""
