"""Custom exceptions for the config package.

Built on the common exception framework from schemata_common.
"""

from schemata_common import (
    ConfigurationError as BaseConfigurationError,
    NotFoundError,
    ValidationError as BaseValidationError,
)

ConfigError = BaseConfigurationError


class ConfigNotFoundError(NotFoundError):
    """Raised when a requested configuration value is not found."""

    pass


class ConfigValidationError(BaseValidationError):
    """Raised when the app configuration fails validation and loading must halt."""

    pass


class UnsupportedValueError(BaseValidationError):
    """Raised when a value cannot be stored in the app configuration."""

    pass
