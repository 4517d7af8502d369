"""Tests for the common regular expressions and the Matcher."""

import re

import pytest

from schemata_validator import COMMON_REGEXP_MESSAGES, CommonRegExp, Matcher, preset_message

V4_UUID = "50ff8298-c019-40cd-bdc2-99ccf238731b"
V1_UUID = "837514c4-ed1b-11ec-8ea0-0242ac120002"

COMPLEXITY_MESSAGE = (
    "is not a complex enough password (must contain at least one lowercase letter, "
    "one uppercase letter and one number)"
)


class TestCommonRegExp:
    """Test the preset patterns."""

    def test_email(self):
        """Test the e-mail pattern."""
        assert CommonRegExp.email.search("me@example.com")
        assert CommonRegExp.email.search("first.last+tag@sub.example.co.uk")
        assert not CommonRegExp.email.search("not an email")
        assert not CommonRegExp.email.search("me@")

    def test_uuid(self):
        """Test that UUID matches every version."""
        assert CommonRegExp.UUID.search(V4_UUID)
        assert CommonRegExp.UUID.search(V1_UUID)
        assert CommonRegExp.UUID.search(V4_UUID.upper())
        assert not CommonRegExp.UUID.search("not a UUID")

    def test_uuidv4(self):
        """Test that UUIDv4 only matches version 4 identifiers."""
        assert CommonRegExp.UUIDv4.search(V4_UUID)
        assert not CommonRegExp.UUIDv4.search(V1_UUID)
        assert not CommonRegExp.UUIDv4.search("not a UUID")

    @pytest.mark.parametrize("username", [
        "sam", "Sam", "samjakob", "SamJakob", "sam_jakob", "Sam_Jakob",
        "sam.jakob", "Sam.Jakob", "SamJakob1", "Sam.Jakob1", "Sam_Jakob1",
    ])
    def test_valid_usernames(self, username):
        """Test usernames that should match."""
        assert CommonRegExp.username.search(username)

    @pytest.mark.parametrize("username", ["", "test username", "a", "a" * 31, "sám"])
    def test_invalid_usernames(self, username):
        """Test usernames that should not match."""
        assert not CommonRegExp.username.search(username)

    def test_passwords(self):
        """Test the password complexity pattern."""
        assert CommonRegExp.password.search("Password1")
        assert CommonRegExp.password.search("Password1$£@%")

        assert not CommonRegExp.password.search("a")
        assert not CommonRegExp.password.search("A1" + "a" * 254)
        assert not CommonRegExp.password.search("abcdefg1")
        assert not CommonRegExp.password.search("abcdefgH")
        assert not CommonRegExp.password.search("ABCDEFG1")
        assert not CommonRegExp.password.search("abcdefgh")
        assert not CommonRegExp.password.search("ABCDEFGH")

    def test_presets_are_compiled(self):
        """Test that presets can be used directly as schema patterns."""
        assert isinstance(CommonRegExp.email, re.Pattern)
        assert isinstance(CommonRegExp.password, re.Pattern)


class TestMatcher:
    """Test the generated is_* predicates."""

    def test_email(self):
        assert Matcher.is_email("me@example.com") is True
        assert Matcher.is_email("not an email") is False

    def test_uuid(self):
        assert Matcher.is_uuid("bc2f974a-526e-4f66-b75e-fd7a54204ef7") is True
        assert Matcher.is_uuid("not a UUID") is False
        assert Matcher.is_uuidv4(V1_UUID) is False

    def test_non_strings_never_match(self):
        """Test that non-string values are rejected rather than raising."""
        assert Matcher.is_email(None) is False
        assert Matcher.is_username(12345) is False
        assert Matcher.is_password(["Password1"]) is False

    @pytest.mark.parametrize("value", [
        "me@example.com\n", "ab\n", "Abcdefg1\n", V4_UUID + "\n", V1_UUID + "\n",
    ])
    def test_trailing_newline_is_rejected(self, value):
        """Test that the presets are anchored at the very end of the string."""
        for name in ("email", "uuid", "uuidv4", "username", "password"):
            assert getattr(Matcher, f"is_{name}")(value) is False

    def test_embedded_control_characters_are_rejected(self):
        assert Matcher.is_username("ab\ncd") is False
        assert Matcher.is_username("ab\x00") is False
        assert Matcher.is_email("me@example.com\r\n") is False

    def test_every_preset_has_methods(self):
        """Test that a predicate and an assertion exist for each preset."""
        for name in ("email", "uuid", "uuidv4", "username", "password"):
            assert callable(getattr(Matcher, f"is_{name}"))
            assert callable(getattr(Matcher, f"assert_{name}"))


class TestMatcherAssertions:
    """Test the generated assert_* methods."""

    @pytest.mark.parametrize("vague", [False, True])
    def test_email(self, vague):
        assert Matcher.assert_email("me@example.com", vague_errors=vague) is None
        assert Matcher.assert_email("not an email", vague_errors=vague) == "is not a valid e-mail address"

    @pytest.mark.parametrize("vague", [False, True])
    def test_uuid(self, vague):
        valid = "497acc9e-07e0-4113-a830-553e7c2a9099"
        assert Matcher.assert_uuid(valid, vague_errors=vague) is None
        assert Matcher.assert_uuid("not a UUID", vague_errors=vague) == "is not a valid ID"
        assert Matcher.assert_uuidv4(valid, vague_errors=vague) is None
        assert Matcher.assert_uuidv4("not a UUID", vague_errors=vague) == "is not a valid ID"

    def test_username(self):
        """Test specific and vague username messages."""
        assert Matcher.assert_username("valid_username") is None
        assert Matcher.assert_username("valid_username", vague_errors=True) is None

        assert Matcher.assert_username("a") == "is too short (must be at least 2 characters)"
        assert Matcher.assert_username("a", vague_errors=False) == "is too short (must be at least 2 characters)"
        assert Matcher.assert_username("a", vague_errors=True) == "is not a valid username"

        assert Matcher.assert_username("a" * 31) == "is too long (must be at most 30 characters)"
        assert Matcher.assert_username("a" * 31, vague_errors=True) == "is not a valid username"

        assert Matcher.assert_username("$$$") == (
            "is not a valid username (may contain only letters, numbers, periods or underscores)"
        )
        assert Matcher.assert_username("$$$", vague_errors=True) == "is not a valid username"

    def test_password(self):
        """Test specific and vague password messages."""
        assert Matcher.assert_password("ValidPassword1") is None
        assert Matcher.assert_password("ValidPassword1", vague_errors=True) is None

        assert Matcher.assert_password("a") == "is too short (must be at least 8 characters)"
        assert Matcher.assert_password("a", vague_errors=True) == "is not a valid password"

        assert Matcher.assert_password("a" * 256) == "is too long (must be at most 255 characters)"
        assert Matcher.assert_password("a" * 256, vague_errors=True) == "is not a valid password"

        assert Matcher.assert_password("password") == COMPLEXITY_MESSAGE
        assert Matcher.assert_password("password", vague_errors=True) == "is not a valid password"

    def test_trailing_newline_fails_assertions(self):
        assert Matcher.assert_password("Abcdefg1\n") == COMPLEXITY_MESSAGE
        assert Matcher.assert_email("me@example.com\n") == "is not a valid e-mail address"
        assert Matcher.assert_username("ab\n", vague_errors=True) == "is not a valid username"

    def test_non_string_gets_vague_message(self):
        assert Matcher.assert_username(None) == "is not a valid username"


class TestPresetMessages:
    """Test the message table."""

    def test_static_and_dynamic_messages(self):
        assert COMMON_REGEXP_MESSAGES["email"] == "is not a valid e-mail address"
        assert callable(COMMON_REGEXP_MESSAGES["username"])
        assert preset_message("UUIDv4", "nope") == "is not a valid ID"
        assert preset_message("password", "short") == "is too short (must be at least 8 characters)"
        assert preset_message("password", "short", vague=True) == "is not a valid password"
