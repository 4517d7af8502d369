"""Validator options and the per-call validation context.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from .result import ValidationResult
from .schema import NodeKind, SchemaNode

_OPTION_ALIASES = {
    "strictArrays": "strict_arrays",
    "vagueErrors": "vague_errors",
}


@dataclass(frozen=True)
class ValidatorOptions:
    """Options for a validator.

    Attributes:
        strict_arrays: Disable string-to-array coercion; any string submitted
            for an array schema then fails the type check
        vague_errors: Passed as ``vague`` to callable ``invalid_message``
            functions so they can keep messages non-specific
    """

    strict_arrays: bool = False
    vague_errors: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ValidatorOptions:
        """Create options from a mapping (camelCase keys are accepted).

        Raises:
            TypeError: If the mapping has unknown keys
        """
        known = {f.name for f in fields(cls)}
        normalized = {_OPTION_ALIASES.get(key, key): value for key, value in data.items()}
        unknown = set(normalized) - known
        if unknown:
            raise TypeError(f"Unknown validator options: {sorted(unknown)}")
        return cls(**{key: bool(value) for key, value in normalized.items()})


@dataclass(frozen=True)
class ValidationContext:
    """Immutable state shared by one validation call.

    Attributes:
        options: The validator's options
        root: The whole value under validation (passed to custom hooks)
    """

    options: ValidatorOptions
    root: Any

    async def validate(self, node: SchemaNode, value: Any, enclosing: Any) -> tuple[ValidationResult, Any]:
        """Validate value against node, dispatching on the node's kind.

        Args:
            node: Compiled schema node
            value: Value to check (MISSING when absent)
            enclosing: The mapping value was looked up in, or MISSING

        Returns:
            Tuple of (result, parsed value)
        """
        # Imported here: the node validators recurse through this method.
        from .arrays import validate_array
        from .fields import validate_field
        from .objects import validate_object
        from .one_of import validate_one_of

        handlers = {
            NodeKind.FIELD: validate_field,
            NodeKind.OBJECT: validate_object,
            NodeKind.ARRAY: validate_array,
            NodeKind.ONE_OF: validate_one_of,
        }
        return await handlers[node.kind](node, value, enclosing, self)
