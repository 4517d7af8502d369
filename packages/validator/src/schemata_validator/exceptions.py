"""Custom exceptions for the validator package.

Built on the common exception framework from schemata_common. Note that an
invalid *value* is never an exception: it is a failed ``ValidationResult``.
"""

from typing import Any, Dict

from schemata_common import ConfigurationError, HttpError


class SchemaConfigurationError(ConfigurationError):
    """Raised by ``create_validator`` when a schema is malformed."""

    pass


class RequestValidationError(HttpError):
    """Raised when a request payload fails validation.

    The message is the (already human-readable) validation failure message.
    """

    def __init__(self, message: str, status: int = 422, context: Dict[str, Any] | None = None):
        super().__init__(message, status=status, context=context)
