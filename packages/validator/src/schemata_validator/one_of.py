"""Validation of oneOf unions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .result import NO_MATCHING_SCHEMA_MESSAGE, ValidationResult
from .schema import OneOfNode

if TYPE_CHECKING:
    from .context import ValidationContext


async def validate_one_of(
    node: OneOfNode, value: Any, enclosing: Any, context: ValidationContext
) -> tuple[ValidationResult, Any]:
    """Accept the first alternative that validates, in declared order.

    The individual failures of the alternatives are discarded: a single
    aggregate message (or the node's ``invalid_message``) is reported.
    """
    for schema in node.possible_schemas:
        result, parsed = await context.validate(schema, value, enclosing)
        if result:
            return result, parsed

    message = node.invalid_message or NO_MATCHING_SCHEMA_MESSAGE
    if callable(message):
        message = message(value, vague=context.options.vague_errors)
    return ValidationResult.fail(message), value
