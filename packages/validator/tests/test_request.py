"""Tests for request payload validation."""

import pytest

from schemata_common import HttpError
from schemata_validator import RequestValidationError, create_validator, validate_request, validate_request_async

SIGNUP = create_validator({
    "email": {"type": "string", "required": True, "field_name": "E-mail", "invalid_message": "is not valid"},
    "tags": [{"type": "string"}],
})


class TestValidateRequest:
    """Test mapping validation failures onto HTTP errors."""

    def test_returns_parsed_payload(self):
        parsed = validate_request(SIGNUP, {"email": "me@example.com", "tags": '["a"]'})
        assert parsed == {"email": "me@example.com", "tags": ["a"]}

    def test_raises_with_message_and_status(self):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request(SIGNUP, {})
        assert str(exc_info.value) == "E-mail is not valid"
        assert exc_info.value.status == 422
        assert isinstance(exc_info.value, HttpError)

    def test_custom_status(self):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request(SIGNUP, {}, status=400)
        assert exc_info.value.status == 400

    @pytest.mark.asyncio
    async def test_async(self):
        assert await validate_request_async(SIGNUP, {"email": "a@b.co"}) == {"email": "a@b.co"}
        with pytest.raises(RequestValidationError):
            await validate_request_async(SIGNUP, {"email": None})
