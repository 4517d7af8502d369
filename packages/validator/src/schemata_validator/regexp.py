"""Common regular expressions and the Matcher built from them.

The patterns can be used directly in a schema (``"matches": CommonRegExp.email``)
or through :data:`Matcher`, which exposes an ``is_<name>`` predicate and an
``assert_<name>`` assertion for every preset.

Example:
    ```python
    from schemata_validator import Matcher

    Matcher.is_email("me@example.com")          # True
    Matcher.assert_username("a")                # 'is too short (must be at least 2 characters)'
    Matcher.assert_username("a", vague_errors=True)  # 'is not a valid username'
    ```
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Union


class CommonRegExp:
    """A collection of popular regular expressions.

    Every preset is anchored with ``\\Z`` so a trailing newline is rejected.
    """

    #: Matches an RFC 2822 e-mail address.
    email = re.compile(
        r"""^(?:[a-z\d!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z\d!#$%&'*+/=?^_`{|}~-]+)*|"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21\x23-\x5b\x5d-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])*")@(?:(?:[a-z\d](?:[a-z\d-]*[a-z\d])?\.)+[a-z\d](?:[a-z\d-]*[a-z\d])?|\[(?:(2(5[0-5]|[0-4]\d)|1\d\d|[1-9]?\d)\.){3}(?:(2(5[0-5]|[0-4]\d)|1\d\d|[1-9]?\d)|[a-z\d-]*[a-z\d]:(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21-\x5a\x53-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])+)\])\Z""",
        re.ASCII,
    )

    #: Matches any version of UUID.
    UUID = re.compile(
        r"^[\dA-F]{8}\b-[\dA-F]{4}\b-[\dA-F]{4}\b-[\dA-F]{4}\b-[\dA-F]{12}\Z",
        re.IGNORECASE | re.ASCII,
    )

    #: Matches a (random) version 4 UUID.
    UUIDv4 = re.compile(
        r"^[\dA-F]{8}\b-[\dA-F]{4}\b-4[\dA-F]{3}\b-[89AB][\dA-F]{3}\b-[\dA-F]{12}\Z",
        re.IGNORECASE | re.ASCII,
    )

    #: Letters, digits, underscores and periods; 2 to 30 characters, no spaces.
    username = re.compile(r"^[\w.]{2,30}\Z", re.ASCII)

    #: A lowercase letter, an uppercase letter and a digit; 8 to 255 characters.
    password = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,255}\Z", re.ASCII)


PRESET_NAMES: tuple[str, ...] = ("email", "UUID", "UUIDv4", "username", "password")

MessageFn = Callable[..., str]
RegExpMessage = Union[str, MessageFn]


def _username_message(value: Any, vague: bool = False) -> str:
    if vague or not isinstance(value, str):
        return "is not a valid username"
    if len(value) < 2:
        return "is too short (must be at least 2 characters)"
    if len(value) > 30:
        return "is too long (must be at most 30 characters)"
    return "is not a valid username (may contain only letters, numbers, periods or underscores)"


def _password_message(value: Any, vague: bool = False) -> str:
    if vague or not isinstance(value, str):
        return "is not a valid password"
    if len(value) < 8:
        return "is too short (must be at least 8 characters)"
    if len(value) > 255:
        return "is too long (must be at most 255 characters)"
    return (
        "is not a complex enough password (must contain at least one lowercase letter, "
        "one uppercase letter and one number)"
    )


#: Default failure message for each preset. Callables take the value and a
#: ``vague`` flag that keeps the message non-specific.
COMMON_REGEXP_MESSAGES: dict[str, RegExpMessage] = {
    "email": "is not a valid e-mail address",
    "UUID": "is not a valid ID",
    "UUIDv4": "is not a valid ID",
    "username": _username_message,
    "password": _password_message,
}


def get_preset(name: str) -> re.Pattern[str]:
    """Look up a preset pattern by name."""
    if name not in PRESET_NAMES:
        raise KeyError(f"Unknown regular expression preset: {name}")
    return getattr(CommonRegExp, name)


def preset_message(name: str, value: Any, vague: bool = False) -> str:
    """Evaluate the default failure message for a preset."""
    message = COMMON_REGEXP_MESSAGES[name]
    if isinstance(message, str):
        return message
    return message(value, vague=vague)


def _make_matcher(pattern: re.Pattern[str]) -> Callable[[Any, Any], bool]:
    def matcher(self: Any, value: Any) -> bool:
        return isinstance(value, str) and pattern.search(value) is not None

    return matcher


def _make_assertion(name: str, pattern: re.Pattern[str]) -> Callable[..., str | None]:
    def assertion(self: Any, value: Any, vague_errors: bool = False) -> str | None:
        if isinstance(value, str) and pattern.search(value) is not None:
            return None
        return preset_message(name, value, vague=vague_errors)

    return assertion


class _MatcherImpl:
    """Matches values against the :class:`CommonRegExp` presets.

    For every preset ``P`` an ``is_p(value) -> bool`` predicate and an
    ``assert_p(value, vague_errors=False) -> str | None`` assertion are
    generated, e.g. ``is_email``/``assert_email`` and ``is_uuidv4``/``assert_uuidv4``.
    Assertions return None when the value matches, or the preset's failure
    message otherwise.
    """

    is_email: Callable[[Any], bool]
    is_uuid: Callable[[Any], bool]
    is_uuidv4: Callable[[Any], bool]
    is_username: Callable[[Any], bool]
    is_password: Callable[[Any], bool]
    assert_email: Callable[..., str | None]
    assert_uuid: Callable[..., str | None]
    assert_uuidv4: Callable[..., str | None]
    assert_username: Callable[..., str | None]
    assert_password: Callable[..., str | None]


for _name in PRESET_NAMES:
    _pattern = get_preset(_name)
    setattr(_MatcherImpl, f"is_{_name.lower()}", _make_matcher(_pattern))
    setattr(_MatcherImpl, f"assert_{_name.lower()}", _make_assertion(_name, _pattern))

del _name, _pattern

#: Shared matcher instance.
Matcher = _MatcherImpl()
