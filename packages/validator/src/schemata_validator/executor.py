"""Validator construction and top-level dispatch.

Example:
    ```python
    from schemata_validator import create_validator

    validator = create_validator({
        "username": {"type": "string", "required": True, "min_length": 2},
        "age": {"type": "number", "min": 18, "integer": True},
        "tags": [{"type": "string"}],
    })

    result, parsed = validator.validate({"username": "ann", "tags": '["a", "b"]'})
    if not result:
        print(result.message)
    ```
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from schemata_common import MISSING

from .context import ValidationContext, ValidatorOptions
from .result import ValidationResult
from .schema import SchemaNode, compile_schema

logger = logging.getLogger(__name__)


class Validator:
    """A validator bound to a compiled, immutable schema tree.

    Validators hold no per-call state, so one instance can be shared and
    used concurrently.
    """

    def __init__(self, schema: Any, options: ValidatorOptions | None = None):
        """Compile the schema.

        Args:
            schema: The schema literal
            options: Validator options (defaults to ``ValidatorOptions()``)

        Raises:
            SchemaConfigurationError: If the schema is malformed
        """
        self._schema = schema
        self._options = options or ValidatorOptions()
        self._root = compile_schema(schema)
        logger.debug(f"Compiled {self._root.kind.value} schema with options {self._options}")

    @property
    def schema(self) -> Any:
        """The schema literal this validator was created from."""
        return self._schema

    @property
    def root(self) -> SchemaNode:
        """The compiled root node."""
        return self._root

    @property
    def options(self) -> ValidatorOptions:
        return self._options

    async def validate_async(self, value: Any) -> tuple[ValidationResult, Any]:
        """Validate a value, awaiting any asynchronous custom validators.

        Args:
            value: The value to validate (MISSING for "no value at all")

        Returns:
            Tuple of (result, parsed value). The parsed value is the value
            actually checked, reflecting string-to-array coercion, and is
            returned even when validation fails.
        """
        context = ValidationContext(options=self._options, root=value)
        result, parsed = await context.validate(self._root, value, enclosing=MISSING)
        if not result:
            logger.debug(f"Validation failed: {result.message}")
        return result, parsed

    def validate(self, value: Any) -> tuple[ValidationResult, Any]:
        """Validate a value synchronously.

        Runs :meth:`validate_async` in a new event loop, so it must not be
        called from a running loop; await :meth:`validate_async` there.
        """
        return asyncio.run(self.validate_async(value))

    def __repr__(self) -> str:
        return f"Validator(root={self._root.kind.value}, options={self._options})"


def create_validator(
    schema: Any,
    options: ValidatorOptions | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> Validator:
    """Create a validator for a schema.

    Args:
        schema: The schema literal: a field, an object schema, a single-element
            array schema or a oneOf union
        options: A :class:`ValidatorOptions`, or a mapping of options
            (``{"strict_arrays": True}`` or ``{"strictArrays": True}``)
        **kwargs: Options given as keyword arguments

    Returns:
        The validator

    Raises:
        SchemaConfigurationError: If the schema is malformed
    """
    if isinstance(options, Mapping):
        options = ValidatorOptions.from_dict({**options, **kwargs})
    elif kwargs:
        merged = dict(vars(options)) if options is not None else {}
        merged.update(kwargs)
        options = ValidatorOptions.from_dict(merged)
    return Validator(schema, options)
