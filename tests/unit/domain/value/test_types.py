"""Unit tests for domain value objects."""

import pydantic
import pytest

from credo.domain.value import AuthProvider, Email, ExternalProfile


class TestEmail:
    """Tests for Email normalization."""

    def test_normalizes_case_and_whitespace(self):
        assert Email("  Alice@Example.COM ").root == "alice@example.com"

    def test_spellings_compare_equal(self):
        assert Email("BOB@example.com") == Email("bob@example.com")

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "alice",
            "alice@",
            "@example.com",
            "a b@example.com",
            "john..doe@example.com",
        ],
    )
    def test_rejects_malformed(self, value):
        with pytest.raises(pydantic.ValidationError):
            Email(value)

    def test_rejects_overlong(self):
        with pytest.raises(pydantic.ValidationError):
            Email("a" * 250 + "@example.com")


class TestExternalProfile:
    """Tests for ExternalProfile."""

    def test_email_normalized(self):
        profile = ExternalProfile(
            provider=AuthProvider.GOOGLE, external_id="1", email="Alice@Example.com"
        )
        assert profile.email == "alice@example.com"

    def test_empty_external_id_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ExternalProfile(
                provider=AuthProvider.GOOGLE, external_id="", email="a@example.com"
            )
