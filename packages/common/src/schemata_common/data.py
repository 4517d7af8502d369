"""Helpers for inspecting and manipulating plain data structures.

Nested keys use a period as delimiter (``"server.port"``). Keys that name
Python object internals (``__class__``, ``__dict__``) and the JavaScript-style
``__proto__``/``constructor``/``prototype`` keys are refused when resolving
or setting and skipped when merging, since these helpers are routinely fed
user-supplied keys.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from .exceptions import UnsafeInputError

NESTED_OBJECT_DELIMITER = "."

UNSAFE_KEYS = frozenset({"__proto__", "constructor", "prototype", "__class__", "__dict__"})


class _Missing:
    """Marker for a value that is absent (as opposed to present but ``None``)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def is_missing(value: Any) -> bool:
    """Return True if value is the MISSING sentinel."""
    return value is MISSING


def array_equals(a: Any, b: Any) -> bool:
    """Compare two sequences for equality of their values, out of order.

    Both arguments must be lists or tuples with the same length, and every
    value in one must be matched by a distinct equal value in the other.

    Args:
        a: A sequence to check
        b: The sequence to check against ``a``

    Returns:
        True if the sequences hold the same values (and only those values)
    """
    if not isinstance(a, (list, tuple)) or not isinstance(b, (list, tuple)):
        return False
    if len(a) != len(b):
        return False

    remaining = list(a)
    for element in b:
        for index, candidate in enumerate(remaining):
            if _strict_equals(candidate, element):
                del remaining[index]
                break
    return not remaining


def _strict_equals(a: Any, b: Any) -> bool:
    # True == 1 in Python; keep booleans distinct from numbers.
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return bool(a == b)


def strict_equals(a: Any, b: Any) -> bool:
    """Equality that does not treat booleans as numbers (``True != 1``)."""
    return _strict_equals(a, b)


def _split_key(obj: Any, key: str) -> tuple[str, str | None]:
    if not isinstance(obj, Mapping):
        raise TypeError("Cannot deep-resolve a key in a non-mapping.")
    if not isinstance(key, str):
        raise TypeError("Cannot deep-resolve a non-string key.")

    immediate, _, rest = key.partition(NESTED_OBJECT_DELIMITER)
    if immediate in UNSAFE_KEYS:
        raise UnsafeInputError(
            f"Cannot deep-resolve a key that names an object internal: {key}",
            context={"key": key},
        )
    return immediate, (rest if rest else None)


def resolve_object_deep(key: str, obj: Mapping[str, Any]) -> Any:
    """Resolve a (possibly nested) key in a mapping.

    Args:
        key: Key to look up, nested keys delimited by a period
        obj: Mapping to look the key up in

    Returns:
        The value at key, or MISSING if any part of the key is absent

    Raises:
        TypeError: If obj is not a mapping or key is not a string
        UnsafeInputError: If a key part names an object internal
    """
    immediate, rest = _split_key(obj, key)
    if immediate not in obj:
        return MISSING
    if rest is None:
        return obj[immediate]

    child = obj[immediate]
    if not isinstance(child, Mapping):
        return MISSING
    return resolve_object_deep(rest, child)


def set_object_deep(
    key: str,
    value: Any,
    obj: MutableMapping[str, Any],
    create_children_if_needed: bool = True,
    overwrite_parent_if_needed: bool = True,
) -> None:
    """Set a (possibly nested) key in a mapping, in place.

    Args:
        key: Key to set, nested keys delimited by a period
        value: Value to store
        obj: Mapping to modify
        create_children_if_needed: Create missing intermediate mappings
        overwrite_parent_if_needed: Replace a non-mapping ancestor with a mapping

    Raises:
        KeyError: If an intermediate mapping is absent and may not be created
        TypeError: If an ancestor is not a mapping and may not be overwritten
    """
    parts = key.split(NESTED_OBJECT_DELIMITER)
    current = obj
    for depth, part in enumerate(parts[:-1]):
        _split_key(current, part)
        if part not in current:
            if not create_children_if_needed:
                raise KeyError(f"Failed to define key: {key}.")
            current[part] = {}
        elif not isinstance(current[part], MutableMapping):
            if not overwrite_parent_if_needed:
                ancestor = NESTED_OBJECT_DELIMITER.join(parts[: depth + 1])
                raise TypeError(
                    f'Failed to define key due to a conflict: "{key}". '
                    f'"{ancestor}" is {type(current[part]).__name__}, not a mapping.'
                )
            current[part] = {}
        current = current[part]

    _split_key(current, parts[-1])
    current[parts[-1]] = value


def merge_object_deep(target: Any, source: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge source into target, source values taking precedence.

    Nested mappings are merged; all other values in source replace those in
    target. Neither argument is modified.

    Args:
        target: Base mapping (or None for an empty base)
        source: Overriding mapping

    Returns:
        New merged dictionary

    Raises:
        TypeError: If source is not a mapping, or target is neither None nor a mapping
    """
    if not isinstance(source, Mapping):
        raise TypeError("Cannot merge a non-mapping into a mapping.")
    if target is None:
        target = {}
    if not isinstance(target, Mapping):
        raise TypeError("Cannot merge a mapping into a non-mapping.")

    result = dict(target)
    for key, value in source.items():
        if key in UNSAFE_KEYS:
            continue
        if isinstance(result.get(key), Mapping) and isinstance(value, Mapping):
            result[key] = merge_object_deep(result[key], value)
        else:
            result[key] = value
    return result
