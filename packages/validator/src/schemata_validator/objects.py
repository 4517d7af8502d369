"""Validation of object schemas."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from schemata_common import MISSING

from .result import ValidationResult
from .schema import ObjectNode

if TYPE_CHECKING:
    from .context import ValidationContext

logger = logging.getLogger(__name__)


def _rebuild(value: Mapping[str, Any], updates: dict[str, Any]) -> Any:
    if not updates:
        return value
    rebuilt = dict(value)
    rebuilt.update(updates)
    return rebuilt


async def validate_object(
    node: ObjectNode, value: Any, enclosing: Any, context: ValidationContext
) -> tuple[ValidationResult, Any]:
    """Validate a mapping key by key, in schema declaration order.

    A nested object that is absent (or None) passes when nothing beneath it
    is required. The first failing key aborts validation and its message is
    returned unchanged.

    Returns:
        Tuple of (result, parsed value). The parsed value is a new mapping
        only if a child value was transformed (e.g. a coerced array).
    """
    if value is MISSING or value is None:
        if isinstance(enclosing, Mapping) and not node.has_required:
            return ValidationResult.ok(), value
        return ValidationResult.fail(), value

    if not isinstance(value, Mapping):
        return ValidationResult.fail(), value

    updates: dict[str, Any] = {}
    for key, child in node.children:
        child_value = value.get(key, MISSING)
        result, parsed = await context.validate(child, child_value, value)
        if parsed is not child_value:
            updates[key] = parsed
        if not result:
            logger.debug(f"Object validation failed at {child.path}: {result.message}")
            return result, _rebuild(value, updates)

    return ValidationResult.ok(), _rebuild(value, updates)
