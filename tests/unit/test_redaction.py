"""Unit tests for sensitive data redaction."""

import pytest

from jserver.bootstrap.logging_setup import redact_sensitive


@pytest.mark.parametrize(
    "value",
    [
        "Authorization: Bearer token123",
        "Cookie: session=1",
        "token=abc123def456",
        "api_key=secret",
        "api-key=secret",
        "Password: mypass",
        "YWJjZGVmZ2hpamtsbW5vcHFyc3R1dnd4eXo=",
    ],
)
def test_sensitive_values_are_redacted(value):
    """Credential-like values are replaced."""
    assert redact_sensitive(value) == "[REDACTED]"


@pytest.mark.parametrize("value", ["/index", "example.com", "GET", "RequestLineError"])
def test_safe_values_pass_through(value):
    """Ordinary request details are left alone."""
    assert redact_sensitive(value) == value


def test_empty_and_none_values():
    """Falsy values are returned unchanged."""
    assert redact_sensitive("") == ""
    assert redact_sensitive(None) is None
