"""Validation of array schemas.

A string that looks like an array (it starts with ``[`` and ends with ``]``)
is decoded as JSON before validation, unless the validator was created with
``strict_arrays``. Query strings and form fields commonly carry arrays this
way. A string that looks like an array but does not decode to one fails
with the generic invalid-value message.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from schemata_common import MISSING, index_to_ordinal

from .result import EMPTY_ARRAY_MESSAGE, INVALID_ENTRIES_MESSAGE, ValidationResult
from .schema import ArrayNode

if TYPE_CHECKING:
    from .context import ValidationContext

logger = logging.getLogger(__name__)


def _is_sentinel_string(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("[") and value.endswith("]")


def _coerce(value: Any, strict_arrays: bool) -> tuple[bool, Any]:
    """Decode an array-shaped string.

    Returns:
        Tuple of (ok, value); ok is False when an array-shaped string could
        not be decoded into a list
    """
    if strict_arrays or not _is_sentinel_string(value):
        return True, value
    try:
        decoded = json.loads(value)
    except ValueError as e:
        logger.debug(f"Could not decode array-shaped string: {e}")
        return False, value
    return isinstance(decoded, list), decoded


def _rebuild(value: list[Any] | tuple[Any, ...], updates: dict[int, Any]) -> Any:
    if not updates:
        return value
    rebuilt = [updates.get(index, element) for index, element in enumerate(value)]
    return tuple(rebuilt) if isinstance(value, tuple) else rebuilt


def _element_failure(node: ArrayNode, index: int) -> ValidationResult:
    if node.structured:
        return ValidationResult.fail(INVALID_ENTRIES_MESSAGE)
    label = node.label
    position = index_to_ordinal(index)
    if label:
        return ValidationResult.fail(f"The {position} {label} field was invalid.")
    return ValidationResult.fail(f"The {position} field was invalid.")


async def validate_array(
    node: ArrayNode, value: Any, enclosing: Any, context: ValidationContext
) -> tuple[ValidationResult, Any]:
    """Validate a sequence against the array's element schema.

    Args:
        node: The compiled array schema
        value: Value to check; may be an array-shaped string
        enclosing: The mapping the value was taken from, or MISSING
        context: The validation context

    Returns:
        Tuple of (result, parsed value), where the parsed value is the decoded
        list when a string was coerced
    """
    if value is MISSING or value is None:
        if isinstance(enclosing, Mapping) and not node.requires_entry:
            return ValidationResult.ok(), value
        return ValidationResult.fail(), value

    decoded, parsed = _coerce(value, context.options.strict_arrays)
    if not decoded or not isinstance(parsed, (list, tuple)):
        return ValidationResult.fail(), parsed

    if not parsed:
        if node.requires_entry:
            return ValidationResult.fail(EMPTY_ARRAY_MESSAGE), parsed
        return ValidationResult.ok(), parsed

    updates: dict[int, Any] = {}
    for index, element in enumerate(parsed):
        result, element_parsed = await context.validate(node.element, element, MISSING)
        if element_parsed is not element:
            updates[index] = element_parsed
        if not result:
            logger.debug(f"Array entry {index} at {node.path} failed: {result.message}")
            return _element_failure(node, index), _rebuild(parsed, updates)

    return ValidationResult.ok(), _rebuild(parsed, updates)
