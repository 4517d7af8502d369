"""Helpers for validating request payloads.

Request handlers validate a decoded payload and, on failure, answer with the
failure message. :func:`validate_request` raises a
:class:`RequestValidationError` carrying an HTTP status so that a handler
(or a framework error hook) can map it straight to a response.
"""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import RequestValidationError
from .executor import Validator

logger = logging.getLogger(__name__)


def validate_request(validator: Validator, payload: Any, status: int = 422) -> Any:
    """Validate a request payload.

    Runs the validator synchronously; inside a running event loop use
    :func:`validate_request_async`.

    Args:
        validator: Validator for the payload
        payload: Decoded request payload
        status: HTTP status to report on failure (a 4xx code)

    Returns:
        The parsed payload

    Raises:
        RequestValidationError: If the payload is invalid
    """
    result, parsed = validator.validate(payload)
    if not result:
        logger.info(f"Rejected request payload: {result.message}")
        raise RequestValidationError(result.message, status=status)
    return parsed


async def validate_request_async(validator: Validator, payload: Any, status: int = 422) -> Any:
    """Async variant of :func:`validate_request` for handlers running in an event loop."""
    result, parsed = await validator.validate_async(payload)
    if not result:
        logger.info(f"Rejected request payload: {result.message}")
        raise RequestValidationError(result.message, status=status)
    return parsed
