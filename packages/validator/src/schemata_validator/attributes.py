"""Smart attributes, pattern aggregates and the custom validator hook.

Two small closed sum types are parsed out of schema literals once, when the
schema is compiled, and evaluated on every validation call:

- Smart attributes (bounds such as ``min_length`` or ``max``):
  :class:`Literal` | :class:`FieldRef` (``{"$eq": "sibling"}``) |
  :class:`Eval` (``{"$eval": fn}``).
- Pattern expressions (``matches``): :class:`AllPatterns` (``{"$all": [...]}``
  or a bare pattern) | :class:`AnyPatterns` (``{"$any": [...]}``).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Awaitable, Protocol, Union, runtime_checkable

from schemata_common import MISSING

from .exceptions import SchemaConfigurationError


@dataclass(frozen=True)
class Literal:
    """A constant attribute value."""

    value: Any

    def resolve(self, enclosing: Any) -> Any:
        return self.value


@dataclass(frozen=True)
class FieldRef:
    """An attribute equal to the value of a sibling property."""

    name: str

    def resolve(self, enclosing: Any) -> Any:
        # Flat lookup only; no nested paths.
        if isinstance(enclosing, Mapping):
            return enclosing.get(self.name, MISSING)
        return MISSING


@dataclass(frozen=True)
class Eval:
    """An attribute computed from the enclosing object."""

    fn: Callable[[Any], Any]

    def resolve(self, enclosing: Any) -> Any:
        return self.fn(enclosing)


SmartAttribute = Union[Literal, FieldRef, Eval]


def parse_smart_attribute(raw: Any, name: str = "attribute") -> SmartAttribute:
    """Parse a schema attribute literal into a smart attribute.

    Args:
        raw: ``{"$eq": str}``, ``{"$eval": callable}`` or any literal value
        name: Attribute name, used in error messages

    Returns:
        The parsed smart attribute

    Raises:
        SchemaConfigurationError: If the operators are malformed
    """
    if isinstance(raw, Mapping) and ("$eq" in raw or "$eval" in raw):
        if "$eq" in raw and "$eval" in raw:
            raise SchemaConfigurationError(
                f"You cannot set both $eq and $eval on '{name}'; they are mutually exclusive.",
                context={"attribute": name},
            )
        if "$eq" in raw:
            if not isinstance(raw["$eq"], str) or not raw["$eq"]:
                raise SchemaConfigurationError(
                    f"The $eq operator on '{name}' must name a sibling property.",
                    context={"attribute": name},
                )
            return FieldRef(raw["$eq"])
        if not callable(raw["$eval"]):
            raise SchemaConfigurationError(
                f"The $eval operator on '{name}' must be a function.",
                context={"attribute": name},
            )
        return Eval(raw["$eval"])
    return Literal(raw)


def resolve(attribute: SmartAttribute | None, enclosing: Any) -> Any:
    """Resolve an attribute against the enclosing object (MISSING when unset)."""
    if attribute is None:
        return MISSING
    return attribute.resolve(enclosing)


def _compile_pattern(pattern: Any) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    if isinstance(pattern, str):
        try:
            return re.compile(pattern)
        except re.error as e:
            raise SchemaConfigurationError(
                f"Invalid regular expression {pattern!r}: {e}",
                context={"pattern": pattern},
            ) from e
    raise SchemaConfigurationError(
        "Invalid matches property. Must be a regular expression, or an aggregate "
        "expression with the $any or $all operator.",
        context={"pattern": repr(pattern)},
    )


@dataclass(frozen=True)
class AllPatterns:
    """Passes only if every pattern matches."""

    patterns: tuple[re.Pattern[str], ...]

    def test(self, value: str) -> bool:
        return all(pattern.search(value) is not None for pattern in self.patterns)


@dataclass(frozen=True)
class AnyPatterns:
    """Passes if at least one pattern matches."""

    patterns: tuple[re.Pattern[str], ...]

    def test(self, value: str) -> bool:
        return any(pattern.search(value) is not None for pattern in self.patterns)


PatternExpression = Union[AllPatterns, AnyPatterns]


def parse_matches(raw: Any) -> PatternExpression:
    """Parse a ``matches`` literal.

    A bare pattern behaves as a single-pattern ``$all``.

    Raises:
        SchemaConfigurationError: If both operators are given, or a pattern is invalid
    """
    if isinstance(raw, Mapping):
        if "$any" in raw and "$all" in raw:
            raise SchemaConfigurationError(
                "You may not have $any and $all specified on a field's 'matches' "
                "property; they are mutually exclusive."
            )
        for operator, kind in (("$any", AnyPatterns), ("$all", AllPatterns)):
            if operator in raw:
                patterns = raw[operator]
                if isinstance(patterns, (str, re.Pattern)):
                    patterns = [patterns]
                return kind(tuple(_compile_pattern(p) for p in patterns))
    return AllPatterns((_compile_pattern(raw),))


HookOutcome = Union[bool, str, None]


@runtime_checkable
class FieldHook(Protocol):
    """A custom per-field validator.

    Returns True or None to pass, False to fail with the field's generic
    message, or a non-empty string to fail with that string as the message.
    Implementations may be synchronous or return an awaitable.
    """

    def validate(self, value: Any, whole_object: Any) -> HookOutcome | Awaitable[HookOutcome]:
        ...


@dataclass(frozen=True)
class CallableHook:
    """Adapts a plain (sync or async) function to :class:`FieldHook`."""

    fn: Callable[[Any, Any], Any]

    def validate(self, value: Any, whole_object: Any) -> Any:
        return self.fn(value, whole_object)


def parse_hook(raw: Any) -> FieldHook:
    """Wrap a schema ``validator`` attribute as a :class:`FieldHook`."""
    if isinstance(raw, FieldHook):
        return raw
    if callable(raw):
        return CallableHook(raw)
    raise SchemaConfigurationError(
        "A field's validator must be a function or an object with a validate(value, whole_object) method."
    )
