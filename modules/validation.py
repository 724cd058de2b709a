"""
Contact form validation.

Mirrors the constraints a browser enforces on the form (required fields,
email syntax) so the same rules hold outside a browser.
"""
import re
from typing import List, Optional

from modules.domain import FormSubmission, ValidationError


# WHATWG "valid e-mail address", the check behind <input type="email">
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


class ValidationBlocked(Exception):
    """Raised when a submission fails validation and must not be sent."""

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        fields = ", ".join(error.field for error in errors)
        super().__init__(f"Submission blocked, invalid fields: {fields}")


def validate_submission(
    submission: FormSubmission,
    max_message_length: Optional[int] = None,
) -> List[ValidationError]:
    """
    Check a form submission against the field constraints.

    Rules:
    - name: required (any non-empty value, whitespace included)
    - email: required, must look like an email address
    - selected_product: required (the placeholder has an empty value)
    - message: optional, at most max_message_length characters if given

    "Required" means non-empty, as the browser's required attribute does.
    Leading and trailing whitespace is trimmed from the email first, the
    way the browser sanitizes an email input's value.

    Args:
        submission: Raw form values
        max_message_length: Optional limit for the message field

    Returns:
        List of ValidationError, empty when the submission is valid

    Example:
        >>> validate_submission(FormSubmission("", "a@b.co", "Mini Pizza"))
        [ValidationError(field='name', message='Please fill out this field.')]
    """
    errors = []

    if not submission.name:
        errors.append(ValidationError("name", "Please fill out this field."))

    if not submission.email.strip():
        errors.append(ValidationError("email", "Please fill out this field."))
    elif not EMAIL_PATTERN.fullmatch(submission.email.strip()):
        errors.append(ValidationError("email", "Please enter an email address."))

    if not submission.selected_product:
        errors.append(ValidationError("product", "Please select an item in the list."))

    if max_message_length is not None and len(submission.message) > max_message_length:
        errors.append(
            ValidationError(
                "message",
                f"Please shorten this text to {max_message_length} characters or less.",
            )
        )

    return errors


def ensure_valid(
    submission: FormSubmission,
    max_message_length: Optional[int] = None,
) -> None:
    """
    Raise ValidationBlocked if the submission has any invalid field.

    Raises:
        ValidationBlocked: With the full list of field errors
    """
    errors = validate_submission(submission, max_message_length)
    if errors:
        raise ValidationBlocked(errors)
