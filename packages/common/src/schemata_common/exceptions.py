"""Common exception hierarchy for all schemata packages.

Every error raised by a schemata package derives from :class:`SchemataError`,
which carries an optional context dictionary with structured details about
the failure.

Invalid *user input* is never raised: validators return a failed
``ValidationResult`` instead. The exceptions here are for programmer errors
(malformed schemas, bad arguments) and for host-facing failures that map
directly onto an HTTP response.

Example:
    ```python
    from schemata_common.exceptions import ConfigurationError, SchemataError

    try:
        create_validator({"age": {"type": "integer"}})
    except ConfigurationError as e:
        logger.error(f"Bad schema: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class SchemataError(Exception):
    """Base exception for all schemata packages.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, paths, etc.)
        details: Alternative to context (both are supported)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class ValidationError(SchemataError):
    """Raised when a value must be rejected by raising rather than returning.

    Validators themselves never raise this; it is for collaborators that
    turn a failed result into an exception (e.g. configuration loading).
    """

    pass


class ConfigurationError(SchemataError):
    """Raised when configuration (including a validation schema) is invalid.

    Example:
        ```python
        raise ConfigurationError(
            "A oneOf field must declare at least one possible schema.",
            context={"path": "$root.payment"}
        )
        ```
    """

    pass


class NotFoundError(SchemataError):
    """Raised when a requested item (e.g. a configuration key) is not found."""

    pass


class HttpError(SchemataError):
    """An error that may be returned directly as an HTTP response.

    Args:
        message: Client-facing error message
        status: HTTP status code, must be 4xx or 5xx (default: 500)
        original_error: The error that caused this one, if any
        context: Optional context dictionary
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        status: int = 500,
        original_error: BaseException | None = None,
        context: Dict[str, Any] | None = None,
    ):
        if status < 400 or status >= 600:
            raise ValueError(f"Errors should have 4xx or 5xx status codes, got {status}")
        super().__init__(message, context=context)
        self.status = status
        self.original_error = original_error


class UnsafeInputError(HttpError):
    """Raised when user input attempts something unsafe.

    Path-resolution style collaborators raise this for traversal attempts
    (``../``), prototype-style keys and similar; hosts map it to a 400.
    """

    def __init__(self, message: str, status: int = 400, context: Dict[str, Any] | None = None):
        super().__init__(message, status=status, context=context)


__all__ = [
    "SchemataError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "HttpError",
    "UnsafeInputError",
]
