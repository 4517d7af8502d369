"""Application configuration validated against a schema at startup."""

import copy
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from schemata_common import MISSING, resolve_object_deep, set_object_deep
from schemata_validator import ValidationResult, Validator, create_validator

from .exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    UnsupportedValueError,
)

logger = logging.getLogger(__name__)


def _as_validator(schema: Any) -> Validator:
    return schema if isinstance(schema, Validator) else create_validator(schema)


def _subject(app_config: Any) -> Any:
    return app_config if app_config is not None else MISSING


class AppConfig:
    """Holds the application's configuration table.

    If a schema is given and the configuration does not satisfy it, the
    configuration is refused: ``did_fail_validation`` is set and no
    configuration is loaded (or :class:`ConfigValidationError` is raised when
    ``halt_on_failure`` is set).

    Nested values are addressed with period-delimited keys, e.g.
    ``config.get("server.port")``.

    Construction validates synchronously and so cannot run inside an event
    loop; use :meth:`create_async` or :func:`load_app_config_async` there.
    """

    def __init__(
        self,
        app_config: Any = None,
        schema: Union[Any, Validator, None] = None,
        halt_on_failure: bool = False,
    ) -> None:
        """Initialize an AppConfig.

        Args:
            app_config: The configuration mapping (or None for no configuration)
            schema: A validation schema literal or a ready-made validator
            halt_on_failure: Raise instead of dropping an invalid configuration

        Raises:
            ConfigValidationError: If validation fails and halt_on_failure is set
            SchemaConfigurationError: If the schema itself is malformed
        """
        self._app_config: Dict[str, Any] | None = None
        self.did_fail_validation = False

        if schema is None:
            self._app_config = app_config
            return
        result, parsed = _as_validator(schema).validate(_subject(app_config))
        self._accept(result, parsed, halt_on_failure)

    @classmethod
    async def create_async(
        cls,
        app_config: Any = None,
        schema: Union[Any, Validator, None] = None,
        halt_on_failure: bool = False,
    ) -> "AppConfig":
        """Create an AppConfig from inside a running event loop.

        The constructor validates synchronously, which starts its own event
        loop; async applications (e.g. in a startup hook) use this instead.
        """
        config = cls(None)
        if schema is None:
            config._app_config = app_config
            return config
        result, parsed = await _as_validator(schema).validate_async(_subject(app_config))
        config._accept(result, parsed, halt_on_failure)
        return config

    def _accept(self, result: ValidationResult, parsed: Any, halt_on_failure: bool) -> None:
        if result:
            self._app_config = parsed
            return

        self.did_fail_validation = True
        if halt_on_failure:
            logger.error(f"Invalid app configuration: {result.message}")
            raise ConfigValidationError(
                f"Invalid app configuration: {result.message}",
                context={"message": result.message},
            )
        logger.warning(f"Invalid app configuration, ignoring it: {result.message}")

    @property
    def has_app_config(self) -> bool:
        """Whether a configuration is loaded (it may still be empty)."""
        return self._app_config is not None

    def get(self, key: str) -> Any:
        """Retrieve a value from the configuration.

        Args:
            key: Key to look up, nested keys delimited by a period

        Returns:
            The configured value

        Raises:
            ConfigNotFoundError: If no configuration is loaded or nothing is at key
        """
        if self._app_config is None:
            raise ConfigNotFoundError(
                "There is no app configuration loaded. Call set to start a new, empty "
                "configuration, or ensure a valid app configuration was loaded.",
                context={"key": key},
            )

        value = resolve_object_deep(key, self._app_config)
        if value is MISSING:
            raise ConfigNotFoundError(f"No configuration value at key: {key}", context={"key": key})
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a value in the configuration, creating nested mappings as needed.

        The value must survive a JSON round trip unchanged; runtime objects
        cannot be stored. Starts an empty configuration if none is loaded.

        Raises:
            UnsupportedValueError: If the value cannot be stored
        """
        try:
            round_trip = json.loads(json.dumps(value))
        except (TypeError, ValueError) as e:
            raise UnsupportedValueError("This type of value cannot be stored.", context={"key": key}) from e
        if round_trip != value:
            raise UnsupportedValueError("This type of value cannot be stored.", context={"key": key})

        if self._app_config is None:
            self._app_config = {}
        set_object_deep(key, value, self._app_config)

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the loaded configuration (empty if none)."""
        return copy.deepcopy(self._app_config) if self._app_config is not None else {}


def _load_file(path: Union[str, Path]) -> Any:
    path = Path(path).resolve()
    if not path.exists():
        raise ConfigNotFoundError(f"Configuration file not found: {path}", context={"path": str(path)})

    suffix = path.suffix.lower()
    with open(path) as f:
        if suffix in [".yaml", ".yml"]:
            return yaml.safe_load(f)
        elif suffix == ".json":
            return json.load(f)
        raise ConfigError(f"Unsupported file format: {suffix}", context={"path": str(path)})


def _read_source(source: Union[str, Path, Mapping[str, Any], None], section: str | None) -> Any:
    if source is None or isinstance(source, Mapping):
        data = dict(source) if source is not None else None
    elif isinstance(source, (str, Path)):
        data = _load_file(source)
        logger.info(f"Loaded configuration from {source}")
    else:
        raise ConfigError(f"Invalid source type: {type(source)}")

    if section is not None and isinstance(data, Mapping):
        data = data.get(section)

    return data


def load_app_config(
    source: Union[str, Path, Mapping[str, Any], None],
    schema: Any = None,
    halt_on_failure: bool = False,
    section: str | None = None,
) -> AppConfig:
    """Load the app configuration from a mapping or a YAML/JSON file.

    Args:
        source: A mapping, or the path of a ``.yaml``/``.yml``/``.json`` file
        schema: Optional validation schema (or validator) for the configuration
        halt_on_failure: Raise :class:`ConfigValidationError` on invalid configuration
        section: Top-level key holding the app configuration (e.g. ``"app"``);
            the whole document is used when omitted

    Returns:
        The loaded AppConfig

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigError: If the file format is not supported
    """
    data = _read_source(source, section)
    return AppConfig(data, schema=schema, halt_on_failure=halt_on_failure)


async def load_app_config_async(
    source: Union[str, Path, Mapping[str, Any], None],
    schema: Any = None,
    halt_on_failure: bool = False,
    section: str | None = None,
) -> AppConfig:
    """Async variant of :func:`load_app_config` for use inside a running event loop."""
    data = _read_source(source, section)
    return await AppConfig.create_async(data, schema=schema, halt_on_failure=halt_on_failure)
