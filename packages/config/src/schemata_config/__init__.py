"""Application configuration for schemata.

Loads the app configuration table from a mapping or a YAML/JSON file and
validates it against a schema at startup.
"""

from .config import AppConfig, load_app_config, load_app_config_async
from .exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    UnsupportedValueError,
)

__version__ = "1.0.0"

__all__ = [
    "AppConfig",
    "load_app_config",
    "load_app_config_async",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "UnsupportedValueError",
]
