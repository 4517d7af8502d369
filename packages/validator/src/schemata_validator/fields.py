"""Validation of scalar fields.

Checks run in a fixed order and the first failure short-circuits the rest:

1. presence and nullability
2. type shape
3. ``equals`` / ``array_equals``
4. ``matches``
5. type-specific bounds (``min_length``/``max_length``, ``min``/``max``/``integer``)
6. ``$eq`` cross-field equality
7. the custom ``validator`` hook
"""

from __future__ import annotations

import inspect
import json
import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from schemata_common import MISSING, array_equals, strict_equals

from .attributes import SmartAttribute, resolve
from .exceptions import SchemaConfigurationError
from .result import ValidationResult
from .schema import FieldNode, FieldType

if TYPE_CHECKING:
    from .context import ValidationContext

logger = logging.getLogger(__name__)


def _subject(node: FieldNode) -> str:
    label = node.label
    return f"The {label} field" if label else "The submitted value"


def _display(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value, default=str)


def _fail(node: FieldNode, value: Any, context: ValidationContext, default: str | None = None) -> ValidationResult:
    """Build a failure using the field's custom message, or the default.

    Args:
        node: The failing field
        value: The value that failed
        context: The validation context (for ``vague_errors``)
        default: Check-specific default message; "was invalid." when omitted
    """
    message = node.invalid_message
    if message is None:
        return ValidationResult.fail(default or f"{_subject(node)} was invalid.")

    if callable(message):
        message = message(value, vague=context.options.vague_errors)
    if node.prefix_error_message and node.field_name:
        message = f"{node.field_name} {message}"
    return ValidationResult.fail(message)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and not math.isnan(value)


def _is_whole(value: Any) -> bool:
    # Arbitrarily large ints cannot be converted to float.
    return isinstance(value, int) or value.is_integer()


def _check_presence(node: FieldNode, value: Any, context: ValidationContext) -> ValidationResult | None:
    if value is MISSING:
        if node.required is True:
            return _fail(node, value, context, f"{_subject(node)} must be set and not null.")
        if node.required == "explicit":
            return _fail(node, value, context, f"{_subject(node)} must be set.")
        return ValidationResult.ok()

    if value is None:
        if node.accepts_null:
            return ValidationResult.ok()
        if node.required is True:
            return _fail(node, value, context, f"{_subject(node)} must be set and not null.")
        return _fail(node, value, context, f"{_subject(node)} must not be null.")

    return None


_TYPE_MESSAGES = {
    FieldType.STRING: "must be a string.",
    FieldType.NUMBER: "must be a number.",
    FieldType.BOOLEAN: "must be either true or false.",
}


def _check_type(node: FieldNode, value: Any) -> bool:
    if node.field_type is FieldType.STRING:
        return isinstance(value, str)
    if node.field_type is FieldType.NUMBER:
        return _is_number(value)
    if node.field_type is FieldType.BOOLEAN:
        return isinstance(value, bool)
    return True


def _check_equals(node: FieldNode, value: Any, context: ValidationContext) -> ValidationResult | None:
    if node.equals is not None:
        if any(strict_equals(value, option) for option in node.equals):
            return None
        if len(node.equals) == 1:
            return _fail(node, value, context, f"{_subject(node)} must be equal to: {_display(node.equals[0])}")
        return _fail(
            node,
            value,
            context,
            f"{_subject(node)} was not set to a valid value. Possible values are: {_display(list(node.equals))}",
        )

    if node.array_equals is not None:
        if any(array_equals(value, option) for option in node.array_equals):
            return None
        if len(node.array_equals) == 1:
            return _fail(
                node, value, context, f"{_subject(node)} must be equal to: {_display(list(node.array_equals[0]))}"
            )
        possible = [list(option) for option in node.array_equals]
        return _fail(
            node,
            value,
            context,
            f"{_subject(node)} was not set to a valid value. Possible values are: {_display(possible)}",
        )

    return None


def _resolve_bound(attribute: SmartAttribute | None, enclosing: Any) -> tuple[bool, Any]:
    """Return (declared, resolved) for a bound attribute."""
    if attribute is None:
        return False, None
    return True, resolve(attribute, enclosing)


def _describe_range(low: tuple[bool, Any], high: tuple[bool, Any], unit: str = "") -> str:
    parts = []
    for declared, bound, word in ((low[0], low[1], "at least"), (high[0], high[1], "at most")):
        if not declared:
            continue
        shown = "undefined" if bound is MISSING or bound is None else _display(bound)
        if unit:
            suffix = unit if bound == 1 else f"{unit}s"
            parts.append(f"{word} {shown} {suffix}")
        else:
            parts.append(f"{word} {shown}")
    return " and ".join(parts)


def _within(measure: float, low: tuple[bool, Any], high: tuple[bool, Any]) -> bool:
    declared, bound = low
    if declared and (not _is_number(bound) or measure < bound):
        return False
    declared, bound = high
    if declared and (not _is_number(bound) or measure > bound):
        return False
    return True


def _check_bounds(
    node: FieldNode, value: Any, enclosing: Any, context: ValidationContext
) -> ValidationResult | None:
    if node.field_type is FieldType.STRING:
        low = _resolve_bound(node.min_length, enclosing)
        high = _resolve_bound(node.max_length, enclosing)
        if not _within(len(value), low, high):
            return _fail(node, value, context, f"{_subject(node)} must be {_describe_range(low, high, 'character')}.")

    elif node.field_type is FieldType.NUMBER:
        if node.integer and not _is_whole(value):
            return _fail(node, value, context, f"{_subject(node)} must be a whole number.")
        low = _resolve_bound(node.min, enclosing)
        high = _resolve_bound(node.max, enclosing)
        if not _within(value, low, high):
            return _fail(node, value, context, f"{_subject(node)} must be {_describe_range(low, high)} in value.")

    return None


async def _run_hook(node: FieldNode, value: Any, context: ValidationContext) -> ValidationResult | None:
    outcome = node.hook.validate(value, context.root)
    if inspect.isawaitable(outcome):
        outcome = await outcome

    if outcome is True or outcome is None:
        return None
    if outcome is False:
        return _fail(node, value, context)
    if isinstance(outcome, str):
        # An empty string carries no message; treat it like False.
        return ValidationResult.fail(outcome) if outcome else _fail(node, value, context)
    raise SchemaConfigurationError(
        f"The validator for {node.path} returned {type(outcome).__name__}; expected a bool, a string or None.",
        context={"path": node.path},
    )


async def validate_field(
    node: FieldNode, value: Any, enclosing: Any, context: ValidationContext
) -> tuple[ValidationResult, Any]:
    """Validate a scalar value against a field node.

    Args:
        node: The compiled field
        value: Value to check (MISSING when absent)
        enclosing: The mapping the value was taken from, used to resolve
            smart attributes and ``$eq``
        context: The validation context

    Returns:
        Tuple of (result, value); fields never transform their value
    """
    result = _check_presence(node, value, context)
    if result is not None:
        return result, value

    if not _check_type(node, value):
        return _fail(node, value, context, f"{_subject(node)} {_TYPE_MESSAGES[node.field_type]}"), value

    result = _check_equals(node, value, context)
    if result is not None:
        return result, value

    if node.matches is not None and (not isinstance(value, str) or not node.matches.test(value)):
        return _fail(node, value, context), value

    result = _check_bounds(node, value, enclosing, context)
    if result is not None:
        return result, value

    if node.eq is not None:
        other = enclosing.get(node.eq, MISSING) if isinstance(enclosing, Mapping) else MISSING
        if not strict_equals(value, other):
            return _fail(node, value, context, f"{_subject(node)} must be equal to the {node.eq_label} field."), value

    if node.hook is not None:
        result = await _run_hook(node, value, context)
        if result is not None:
            logger.debug(f"Custom validator rejected {node.path}")
            return result, value

    return ValidationResult.ok(), value
