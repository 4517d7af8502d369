"""Formatting helpers for human-readable messages."""

from __future__ import annotations

import re

ROOT_PATH = "$root"

_CAPITAL_NOT_AT_START = re.compile(r"(?<!^)(?<![\s>])[A-Z]")


def ordinal_suffix(n: int) -> str:
    """Return the English ordinal suffix for n ("st", "nd", "rd" or "th")."""
    if 11 <= n % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def to_ordinal(n: int) -> str:
    """Format n as an English ordinal.

    Examples:
        >>> to_ordinal(1), to_ordinal(12), to_ordinal(21), to_ordinal(205)
        ('1st', '12th', '21st', '205th')
    """
    return f"{n}{ordinal_suffix(n)}"


def index_to_ordinal(index: int) -> str:
    """Format a 0-based index as a 1-based English ordinal (0 -> "1st")."""
    return to_ordinal(index + 1)


def human_readable_field_name(path: str) -> str:
    """Convert a dotted field path into a human-readable label.

    The leading ``$root`` segment is dropped, path segments are joined with
    `` > ``, underscores and hyphens become spaces and camelCase words are
    split and lower-cased.

    Examples:
        >>> human_readable_field_name("$root.user.firstName")
        'user > first name'
        >>> human_readable_field_name("confirm_password")
        'confirm password'
    """
    segments = [segment for segment in path.split(".") if segment and segment != ROOT_PATH]
    label = " > ".join(segments)
    label = label.replace("_", " ").replace("-", " ")
    label = _CAPITAL_NOT_AT_START.sub(lambda match: " " + match.group(0).lower(), label)
    return label
