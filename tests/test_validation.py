"""
Test suite for contact form validation.
"""
import pytest

from modules.domain import FormSubmission, ValidationError
from modules.validation import (
    validate_submission,
    ensure_valid,
    ValidationBlocked,
    EMAIL_PATTERN,
)


def make_submission(**overrides):
    values = {
        "name": "Jane",
        "email": "jane@test.com",
        "selected_product": "Mini Pizza",
        "message": "Cute!",
    }
    values.update(overrides)
    return FormSubmission(**values)


class TestValidateSubmission:
    """Test field-level validation rules."""

    def test_valid_submission_has_no_errors(self):
        assert validate_submission(make_submission()) == []

    def test_message_is_optional(self):
        assert validate_submission(make_submission(message="")) == []

    def test_empty_name(self):
        errors = validate_submission(make_submission(name=""))
        assert [error.field for error in errors] == ["name"]

    def test_whitespace_name_counts_as_filled(self):
        """Required means non-empty, like the browser's required attribute."""
        assert validate_submission(make_submission(name="   ")) == []

    def test_email_surrounding_whitespace_trimmed(self):
        assert validate_submission(make_submission(email="  jane@test.com  ")) == []

    def test_empty_email(self):
        errors = validate_submission(make_submission(email=""))
        assert errors == [ValidationError("email", "Please fill out this field.")]

    @pytest.mark.parametrize(
        "email",
        [
            "plain",
            "@example.com",
            "a b@example.com",
            "a@b..c",
            "a<b>@x.io",
            "a@-x.io",
            "a@x-.io",
            "a@x.io\nextra",
        ],
    )
    def test_malformed_email(self, email):
        errors = validate_submission(make_submission(email=email))
        assert [error.field for error in errors] == ["email"]

    def test_placeholder_product_rejected(self):
        """The placeholder option has an empty value."""
        errors = validate_submission(make_submission(selected_product=""))
        assert [error.field for error in errors] == ["product"]

    def test_all_errors_collected(self):
        errors = validate_submission(FormSubmission("", "", "", ""))
        assert [error.field for error in errors] == ["name", "email", "product"]

    def test_message_length_limit(self):
        errors = validate_submission(make_submission(message="x" * 6), max_message_length=5)
        assert [error.field for error in errors] == ["message"]

    def test_message_at_limit_is_valid(self):
        assert validate_submission(make_submission(message="x" * 5), max_message_length=5) == []

    def test_no_limit_by_default(self):
        assert validate_submission(make_submission(message="x" * 10000)) == []


class TestEnsureValid:
    """Test the raising form of validation."""

    def test_valid_does_not_raise(self):
        ensure_valid(make_submission())

    def test_invalid_raises_with_errors(self):
        with pytest.raises(ValidationBlocked) as exc_info:
            ensure_valid(make_submission(name="", email="bad"))

        assert [error.field for error in exc_info.value.errors] == ["name", "email"]
        assert "name" in str(exc_info.value)


class TestEmailPattern:
    """Test the email syntax pattern."""

    @pytest.mark.parametrize(
        "email",
        [
            "john@example.com",
            "zoe+shop@example.co.uk",
            "a.b-c@d.io",
            "owner@localhost",
            "o'brien@example.ie",
        ],
    )
    def test_accepts_addresses_the_browser_accepts(self, email):
        assert EMAIL_PATTERN.fullmatch(email)
        assert validate_submission(make_submission(email=email)) == []
