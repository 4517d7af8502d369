"""Pytest configuration and fixtures for validator package tests."""

import pytest

from schemata_validator import create_validator


def person_schema(required=True):
    """Array-of-object schema used across the array tests."""
    return [
        {
            "name": {
                "type": "string",
                "required": required,
                "min_length": 3,
                "max_length": 255,
            },
            "age": {
                "type": "number",
                "required": required,
                "min": 18,
                "max": 100,
                "integer": True,
            },
        }
    ]


@pytest.fixture
def people_validator():
    """Factory for validators of the person array schema."""

    def make(required=True, **options):
        return create_validator(person_schema(required), **options)

    return make


@pytest.fixture
def resident_validator():
    """OneOf validator distinguishing US residents from non-residents."""
    return create_validator({
        "type": "oneOf",
        "possible_schemas": [
            {
                "us_resident": {"type": "boolean", "required": True, "equals": True},
                "ssn": {"type": "string", "required": True, "matches": r"^\d{9}$"},
            },
            {
                "us_resident": {"type": "boolean", "required": True, "equals": False},
                "other_number": {"type": "string", "required": True, "matches": r"^\d{4}$"},
            },
        ],
    })
