"""
Tests for API key authentication.
"""

import pytest
from types import SimpleNamespace
from fastapi import HTTPException

from climate_bridge.utils.auth import verify_api_key


def make_request(api_key):
    """Build the minimal request shape verify_api_key reads."""
    context = SimpleNamespace(config=SimpleNamespace(api_key=api_key))
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(context=context)))


def test_verify_api_key_missing_header():
    """Test that missing API key header raises 401."""
    with pytest.raises(HTTPException) as exc_info:
        verify_api_key(make_request("test-key"), x_api_key=None)

    assert exc_info.value.status_code == 401
    assert "Missing x-api-key header" in exc_info.value.detail


def test_verify_api_key_invalid():
    """Test that invalid API key raises 401."""
    with pytest.raises(HTTPException) as exc_info:
        verify_api_key(make_request("correct-key"), x_api_key="wrong-key")

    assert exc_info.value.status_code == 401
    assert "Invalid API key" in exc_info.value.detail


def test_verify_api_key_valid():
    """Test that valid API key is accepted."""
    result = verify_api_key(make_request("test-key-12345"), x_api_key="test-key-12345")

    assert result == "test-key-12345"


def test_verify_api_key_not_configured():
    """Test that authentication is skipped without a configured key."""
    assert verify_api_key(make_request(None), x_api_key=None) is None
    assert verify_api_key(make_request(None), x_api_key="anything") is None
