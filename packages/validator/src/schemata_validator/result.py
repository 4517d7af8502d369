"""Validation result type.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SUCCESS_MESSAGE = "The submitted value is valid."
INVALID_VALUE_MESSAGE = "The submitted value is invalid."
EMPTY_ARRAY_MESSAGE = "The submitted value must contain at least one entry."
INVALID_ENTRIES_MESSAGE = "The submitted value contains invalid entries."
NO_MATCHING_SCHEMA_MESSAGE = "The submitted value does not match any of the expected values."


@dataclass(frozen=True)
class ValidationResult:
    """Immutable outcome of a validation.

    ``message`` is set if and only if validation failed. Messages are already
    human-readable (and field-prefixed where configured) so callers may
    surface them verbatim.
    """

    success: bool
    message: str | None = None

    def __post_init__(self) -> None:
        if not self.success and not self.message:
            raise ValueError("A failed ValidationResult requires a message")
        if self.success and self.message is not None:
            raise ValueError("A successful ValidationResult must not carry a message")

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.success

    @classmethod
    def ok(cls) -> ValidationResult:
        """Create a successful validation result."""
        return _SUCCESS

    @classmethod
    def fail(cls, message: str = INVALID_VALUE_MESSAGE) -> ValidationResult:
        """Create a failed validation result.

        Args:
            message: Human-readable failure message

        Returns:
            Failed ValidationResult
        """
        return cls(success=False, message=message)

    def describe(self) -> str:
        """Return the failure message, or a default message on success."""
        return self.message if self.message is not None else DEFAULT_SUCCESS_MESSAGE


_SUCCESS = ValidationResult(success=True)
