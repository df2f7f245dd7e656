"""
Unit tests for the Request Gate.

Covers the pure authorize() decision and header-based trust classification.
"""

import pytest

from pdf_generator.auth import authorize, is_internal_request


SECRET = "s3cr3t-value"


class TestIsInternalRequest:
    """Tests for is_internal_request."""

    def test_no_forwarding_header_is_internal(self):
        assert is_internal_request({}) is True

    def test_forwarding_header_is_external(self):
        assert is_internal_request({"x-forwarded-for": "198.51.100.1"}) is False

    def test_empty_forwarding_header_is_still_external(self):
        """Presence of the header, not its value, marks a proxied request."""
        assert is_internal_request({"x-forwarded-for": ""}) is False


class TestAuthorize:
    """Tests for the authorize decision function."""

    @pytest.mark.parametrize("credential", [None, "", "Bearer wrong", f"Bearer {SECRET}"])
    @pytest.mark.parametrize("secret", [None, SECRET])
    def test_internal_always_allowed(self, credential, secret):
        assert authorize(True, credential, secret) is True

    def test_external_with_correct_bearer_allowed(self):
        assert authorize(False, f"Bearer {SECRET}", SECRET) is True

    def test_external_with_wrong_secret_denied(self):
        assert authorize(False, "Bearer nope", SECRET) is False

    def test_external_without_credential_denied(self):
        assert authorize(False, None, SECRET) is False

    def test_external_requires_exact_bearer_prefix(self):
        """Scheme and spacing must match exactly."""
        assert authorize(False, SECRET, SECRET) is False
        assert authorize(False, f"bearer {SECRET}", SECRET) is False
        assert authorize(False, f"Bearer  {SECRET}", SECRET) is False

    def test_external_denied_when_no_secret_configured(self):
        """Fails closed: even 'Bearer None' or 'Bearer ' cannot match."""
        assert authorize(False, "Bearer None", None) is False
        assert authorize(False, "Bearer ", None) is False
        assert authorize(False, "Bearer ", "") is False
