"""Pytest configuration and fixtures for config package tests."""

import pytest


@pytest.fixture
def app_schema():
    """Validation schema for the sample app configuration."""
    return {
        "server": {
            "host": {"type": "string", "required": True},
            "port": {"type": "number", "required": True, "integer": True, "min": 1, "max": 65535},
        },
        "features": [{"type": "string"}],
        "debug": {"type": "boolean"},
    }


@pytest.fixture
def sample_app_config():
    """Sample app configuration satisfying app_schema."""
    return {
        "server": {"host": "localhost", "port": 8080},
        "features": ["signup", "search"],
        "debug": False,
    }
