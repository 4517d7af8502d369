"""Schema model and one-time classification.

Schemas are authored as plain literals:

- a mapping with a string ``type`` tag is a *field* (``any``, ``string``,
  ``number``, ``boolean``) or a *oneOf* union;
- any other mapping whose values are all schema nodes is an *object schema*;
- a single-element list is an *array schema* whose element is the lone entry.

:func:`compile_schema` classifies every node exactly once and produces an
immutable tree of :class:`FieldNode`, :class:`ObjectNode`, :class:`ArrayNode`
and :class:`OneOfNode`. Validation only ever walks this tree.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from schemata_common import human_readable_field_name
from schemata_common.format import ROOT_PATH

from .attributes import (
    FieldHook,
    FieldRef,
    PatternExpression,
    SmartAttribute,
    parse_hook,
    parse_matches,
    parse_smart_attribute,
)
from .exceptions import SchemaConfigurationError

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Classification of a schema node."""

    FIELD = "field"
    OBJECT = "object"
    ARRAY = "array"
    ONE_OF = "oneOf"


class FieldType(Enum):
    """Scalar field types."""

    ANY = "any"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


ONE_OF_TAGS = frozenset({"oneOf", "OneOf"})

# camelCase spellings accepted for schemas shared with other tooling
ATTRIBUTE_ALIASES = {
    "minLength": "min_length",
    "maxLength": "max_length",
    "arrayEquals": "array_equals",
    "invalidMessage": "invalid_message",
    "fieldName": "field_name",
    "prefixErrorMessage": "prefix_error_message",
    "possibleSchemas": "possible_schemas",
}

COMMON_ATTRIBUTES = frozenset({
    "type",
    "required",
    "nullable",
    "equals",
    "array_equals",
    "matches",
    "validator",
    "field_name",
    "invalid_message",
    "prefix_error_message",
    "$eq",
})

TYPE_ATTRIBUTES: dict[FieldType, frozenset[str]] = {
    FieldType.ANY: frozenset(),
    FieldType.STRING: frozenset({"min_length", "max_length"}),
    FieldType.NUMBER: frozenset({"min", "max", "integer"}),
    FieldType.BOOLEAN: frozenset(),
}

InvalidMessage = Union[str, Callable[..., str]]


@dataclass(frozen=True, kw_only=True)
class SchemaNode:
    """Base class for compiled schema nodes."""

    path: str

    @property
    def kind(self) -> NodeKind:
        raise NotImplementedError

    @property
    def label(self) -> str | None:
        """Human-readable name of the node, or None at the root."""
        return human_readable_field_name(self.path) or None


@dataclass(frozen=True, kw_only=True)
class FieldNode(SchemaNode):
    """A leaf field with a scalar type and constraints."""

    field_type: FieldType
    required: bool | str = False
    nullable: bool | None = None
    equals: tuple[Any, ...] | None = None
    array_equals: tuple[Any, ...] | None = None
    matches: PatternExpression | None = None
    min_length: SmartAttribute | None = None
    max_length: SmartAttribute | None = None
    min: SmartAttribute | None = None
    max: SmartAttribute | None = None
    integer: bool = False
    eq: str | None = None
    eq_label: str | None = None
    hook: FieldHook | None = None
    field_name: str | None = None
    invalid_message: InvalidMessage | None = None
    prefix_error_message: bool = True

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FIELD

    @property
    def label(self) -> str | None:
        return self.field_name or super().label

    @property
    def accepts_null(self) -> bool:
        """Whether None passes the presence check; required=True always rejects it."""
        if self.required is True:
            return False
        return self.nullable is not False


@dataclass(frozen=True, kw_only=True)
class ObjectNode(SchemaNode):
    """A keyed mapping of sub-schemas, in declaration order."""

    children: tuple[tuple[str, SchemaNode], ...]
    has_required: bool = False

    @property
    def kind(self) -> NodeKind:
        return NodeKind.OBJECT


@dataclass(frozen=True, kw_only=True)
class ArrayNode(SchemaNode):
    """An ordered sequence whose entries all match ``element``."""

    element: SchemaNode
    requires_entry: bool = False
    structured: bool = False

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ARRAY


@dataclass(frozen=True, kw_only=True)
class OneOfNode(SchemaNode):
    """A union accepting the first alternative that validates."""

    possible_schemas: tuple[SchemaNode, ...]
    invalid_message: InvalidMessage | None = None

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ONE_OF


def _is_schema_literal(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def classify(node: Any) -> NodeKind:
    """Classify a schema literal.

    A mapping carrying a string ``type`` key is always a field (or oneOf),
    never a nested object, whatever its other keys look like.

    Raises:
        SchemaConfigurationError: If the literal is not a schema node
    """
    if isinstance(node, Mapping):
        type_tag = node.get("type")
        if isinstance(type_tag, str):
            return NodeKind.ONE_OF if type_tag in ONE_OF_TAGS else NodeKind.FIELD
        if all(isinstance(key, str) and _is_schema_literal(value) for key, value in node.items()):
            return NodeKind.OBJECT
        raise SchemaConfigurationError(
            "A mapping without a 'type' must consist solely of nested schemas.",
            context={"keys": list(node.keys())},
        )
    if isinstance(node, (list, tuple)):
        if len(node) == 1:
            return NodeKind.ARRAY
        raise SchemaConfigurationError(
            "An array schema must contain exactly one element schema.",
            context={"length": len(node)},
        )
    raise SchemaConfigurationError(
        f"Invalid schema node of type {type(node).__name__}.",
        context={"node": repr(node)},
    )


def has_required(node: SchemaNode) -> bool:
    """Whether the node (or any descendant) declares a required field."""
    if isinstance(node, FieldNode):
        return node.required is True or node.required == "explicit"
    if isinstance(node, ObjectNode):
        return node.has_required
    if isinstance(node, ArrayNode):
        return has_required(node.element)
    if isinstance(node, OneOfNode):
        return any(has_required(schema) for schema in node.possible_schemas)
    return False


def contains_object(node: SchemaNode) -> bool:
    """Whether the node is, or nests, an object schema."""
    if isinstance(node, ObjectNode):
        return True
    if isinstance(node, ArrayNode):
        return contains_object(node.element)
    if isinstance(node, OneOfNode):
        return any(contains_object(schema) for schema in node.possible_schemas)
    return False


def compile_schema(
    schema: Any,
    path: str = ROOT_PATH,
    siblings: Mapping[str, Any] | None = None,
) -> SchemaNode:
    """Classify and compile a schema literal into an immutable node tree.

    Args:
        schema: The schema literal
        path: Dotted path of the node (``$root`` for the root)
        siblings: The raw enclosing object schema, when the node is one of its keys

    Returns:
        The compiled node

    Raises:
        SchemaConfigurationError: If the schema is malformed
    """
    kind = classify(schema)
    if kind is NodeKind.FIELD:
        return _compile_field(schema, path, siblings)
    if kind is NodeKind.ONE_OF:
        return _compile_one_of(schema, path, siblings)
    if kind is NodeKind.OBJECT:
        return _compile_object(schema, path)
    return _compile_array(schema, path)


def _normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {ATTRIBUTE_ALIASES.get(key, key): value for key, value in raw.items()}


def _check_reference(name: str, attribute: str, path: str, siblings: Mapping[str, Any] | None) -> None:
    if siblings is None:
        raise SchemaConfigurationError(
            f"The $eq operator on '{attribute}' may not be used on a field outside of an object context.",
            context={"path": path, "attribute": attribute},
        )
    if name not in siblings:
        raise SchemaConfigurationError(
            f"The $eq operator on '{attribute}' refers to '{name}', which is not a sibling field.",
            context={"path": path, "attribute": attribute, "siblings": list(siblings.keys())},
        )


def _sibling_label(name: str, siblings: Mapping[str, Any]) -> str:
    sibling = siblings.get(name)
    if isinstance(sibling, Mapping):
        field_name = sibling.get("field_name", sibling.get("fieldName"))
        if isinstance(field_name, str) and field_name:
            return field_name
    return human_readable_field_name(name)


def _parse_required(value: Any, path: str) -> bool | str:
    if value is None or value is False:
        return False
    if value is True or value == "explicit":
        return value
    raise SchemaConfigurationError(
        "You may only set a field's required property to True, False or 'explicit'.",
        context={"path": path, "required": repr(value)},
    )


def _parse_message(value: Any, path: str) -> InvalidMessage | None:
    if value is None or isinstance(value, str) or callable(value):
        return value
    raise SchemaConfigurationError(
        "A field's invalid_message must be a string or a function.",
        context={"path": path},
    )


def _compile_field(raw: Mapping[str, Any], path: str, siblings: Mapping[str, Any] | None) -> FieldNode:
    attrs = _normalize_keys(raw)
    type_tag = attrs["type"]
    try:
        field_type = FieldType(type_tag)
    except ValueError:
        raise SchemaConfigurationError(
            f"Invalid or unimplemented validation type '{type_tag}' encountered!",
            context={"path": path},
        ) from None

    allowed = COMMON_ATTRIBUTES | TYPE_ATTRIBUTES[field_type]
    unknown = sorted(set(attrs) - allowed)
    if unknown:
        logger.warning(f"Ignoring unsupported attributes {unknown} on {field_type.value} field at {path}")

    if attrs.get("equals") is not None and attrs.get("array_equals") is not None:
        raise SchemaConfigurationError(
            "You may not specify equals AND array_equals; they are mutually exclusive.",
            context={"path": path},
        )

    if attrs.get("matches") is not None and field_type in (FieldType.NUMBER, FieldType.BOOLEAN):
        raise SchemaConfigurationError(
            f"The matches property only applies to string values, not {field_type.value} fields.",
            context={"path": path},
        )

    nullable = attrs.get("nullable")
    if nullable is not None and not isinstance(nullable, bool):
        raise SchemaConfigurationError("A field's nullable property must be a boolean.", context={"path": path})

    bounds: dict[str, SmartAttribute | None] = {}
    for name in TYPE_ATTRIBUTES[field_type] - {"integer"}:
        if attrs.get(name) is None:
            continue
        attribute = parse_smart_attribute(attrs[name], name)
        if isinstance(attribute, FieldRef):
            _check_reference(attribute.name, name, path, siblings)
        bounds[name] = attribute

    eq = attrs.get("$eq")
    eq_label = None
    if eq is not None:
        if not isinstance(eq, str):
            raise SchemaConfigurationError("The $eq operator must name a sibling field.", context={"path": path})
        _check_reference(eq, "$eq", path, siblings)
        eq_label = _sibling_label(eq, siblings or {})

    field_name = attrs.get("field_name")
    if field_name is not None and not isinstance(field_name, str):
        raise SchemaConfigurationError("A field's field_name must be a string.", context={"path": path})

    return FieldNode(
        path=path,
        field_type=field_type,
        required=_parse_required(attrs.get("required"), path),
        nullable=nullable,
        equals=_parse_equals(attrs.get("equals")),
        array_equals=_parse_array_equals(attrs.get("array_equals")),
        matches=parse_matches(attrs["matches"]) if attrs.get("matches") is not None else None,
        integer=bool(attrs.get("integer", False)) if field_type is FieldType.NUMBER else False,
        eq=eq,
        eq_label=eq_label,
        hook=parse_hook(attrs["validator"]) if attrs.get("validator") is not None else None,
        field_name=field_name,
        invalid_message=_parse_message(attrs.get("invalid_message"), path),
        prefix_error_message=bool(attrs.get("prefix_error_message", True)),
        **bounds,
    )


def _parse_equals(value: Any) -> tuple[Any, ...] | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _parse_array_equals(value: Any) -> tuple[Any, ...] | None:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise SchemaConfigurationError("array_equals must be an array, or an array of arrays.")
    # An array of arrays lists alternatives; otherwise it is the single expected array.
    if value and all(isinstance(entry, (list, tuple)) for entry in value):
        return tuple(tuple(entry) for entry in value)
    return (tuple(value),)


def _compile_one_of(raw: Mapping[str, Any], path: str, siblings: Mapping[str, Any] | None) -> OneOfNode:
    attrs = _normalize_keys(raw)
    possible = attrs.get("possible_schemas")
    if not isinstance(possible, (list, tuple)) or not possible:
        raise SchemaConfigurationError(
            "A oneOf field must declare at least one possible schema.",
            context={"path": path},
        )
    return OneOfNode(
        path=path,
        possible_schemas=tuple(compile_schema(schema, path, siblings) for schema in possible),
        invalid_message=_parse_message(attrs.get("invalid_message"), path),
    )


def _compile_object(raw: Mapping[str, Any], path: str) -> ObjectNode:
    children = tuple(
        (key, compile_schema(child, f"{path}.{key}", siblings=raw))
        for key, child in raw.items()
    )
    return ObjectNode(
        path=path,
        children=children,
        has_required=any(has_required(child) for _, child in children),
    )


def _compile_array(raw: Any, path: str) -> ArrayNode:
    element = compile_schema(raw[0], path)
    return ArrayNode(
        path=path,
        element=element,
        requires_entry=has_required(element),
        structured=contains_object(element),
    )


__all__ = [
    "NodeKind",
    "FieldType",
    "SchemaNode",
    "FieldNode",
    "ObjectNode",
    "ArrayNode",
    "OneOfNode",
    "classify",
    "compile_schema",
    "has_required",
    "contains_object",
]
