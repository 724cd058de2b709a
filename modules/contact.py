"""
Contact Module

Turns contact form values into a mailto link and confirms to the user.
Nothing is sent from here: the link is handed to the visitor's mail client.
"""

import logging
import re
from typing import Callable, Optional
from urllib.parse import quote

from modules.domain import ContactOutcome, FormSubmission, MailMessage
from modules.settings import Settings, get_settings
from modules.validation import validate_submission

logger = logging.getLogger(__name__)


CONFIRMATION_MESSAGE = (
    "Thank you for your interest! Your email client should open with "
    "your message ready to send."
)

# Characters encodeURIComponent leaves alone, besides letters and digits
URI_COMPONENT_SAFE = "-_.!~*'()"

# Opening or closing tag: "<" (or "</") followed by a letter, up to ">".
HTML_TAG_PATTERN = re.compile(r"</?[A-Za-z][^>]*>")


def encode_component(text: str) -> str:
    """
    Percent-encode text for use inside a URI query component.

    Matches the browser's encodeURIComponent: spaces become %20, newlines
    %0A, and reserved characters such as & = ? / are escaped.
    """
    return quote(text, safe=URI_COMPONENT_SAFE)


def sanitize_text(text: str) -> str:
    """Strip HTML tags from user input."""
    return HTML_TAG_PATTERN.sub("", text)


def build_subject(selected_product: str) -> str:
    """Subject line for an inquiry about a product."""
    return f"Inquiry about: {selected_product}"


def build_body(submission: FormSubmission) -> str:
    """
    Mail body listing every form field verbatim.

    Example:
        Name: John Doe
        Email: john@example.com
        Product: Rainbow Sunset Painting

        Message:
        I love this painting!
    """
    body_parts = []
    body_parts.append(f"Name: {submission.name}")
    body_parts.append(f"Email: {submission.email}")
    body_parts.append(f"Product: {submission.selected_product}")
    body_parts.append("")
    body_parts.append("Message:")
    body_parts.append(submission.message)

    return "\n".join(body_parts)


def build_mail_message(
    submission: FormSubmission,
    recipient: str,
    sanitize: bool = False,
) -> MailMessage:
    """
    Build a mail message and its mailto link from a form submission.

    Subject and body are percent-encoded independently, so decoding
    either one gives back the exact text. The same input always gives
    the same URI.

    Args:
        submission: Form values read at submit time
        recipient: Destination address (the site owner)
        sanitize: Strip HTML tags from every field first. Off by default:
            user text is otherwise passed through as typed.

    Returns:
        MailMessage with subject, body and encoded mailto: URI

    Example:
        mailto:owner@example.com?subject=Inquiry%20about%3A%20Mini%20Pizza&body=Name%3A...
    """
    if sanitize:
        submission = FormSubmission(
            name=sanitize_text(submission.name),
            email=sanitize_text(submission.email),
            selected_product=sanitize_text(submission.selected_product),
            message=sanitize_text(submission.message),
        )

    subject = build_subject(submission.selected_product)
    body = build_body(submission)

    encoded_subject = encode_component(subject)
    encoded_body = encode_component(body)

    mailto_url = f"mailto:{recipient}?subject={encoded_subject}&body={encoded_body}"

    return MailMessage(
        recipient=recipient,
        subject=subject,
        body=body,
        encoded_uri=mailto_url,
    )


def submit_contact_form(
    submission: FormSubmission,
    recipient: str,
    open_mail_client: Callable[[str], None],
    notify: Callable[[str], None],
    settings: Optional[Settings] = None,
) -> ContactOutcome:
    """
    Handle one contact form submission.

    Sequence:
    1. Validate the fields (stop here if any is invalid)
    2. Build the mail message and mailto link
    3. Hand the link to the mail client
    4. Show the confirmation once

    A rejected submission builds no link, opens nothing and shows no
    confirmation. Whether the mail client actually opened cannot be
    observed, so a dispatched link always counts as confirmed.

    Args:
        submission: Form values read at submit time
        recipient: Destination address
        open_mail_client: Callback receiving the mailto: URI
        notify: Callback receiving the confirmation text
        settings: Settings to use (defaults to get_settings())

    Returns:
        ContactOutcome with the final state
    """
    settings = settings or get_settings()

    logger.info("Validating contact form submission")
    errors = validate_submission(submission, settings.MESSAGE_MAX_LENGTH)
    if errors:
        logger.warning(
            f"Submission rejected, invalid fields: {', '.join(e.field for e in errors)}"
        )
        return ContactOutcome(state="rejected", errors=errors)

    logger.info(f"Building mail message for product '{submission.selected_product}'")
    mail_message = build_mail_message(
        submission, recipient, sanitize=settings.SANITIZE_INPUT
    )

    logger.info(f"Opening mail client for {recipient}")
    open_mail_client(mail_message.encoded_uri)

    notify(CONFIRMATION_MESSAGE)
    logger.info("Submission confirmed")

    return ContactOutcome(
        state="confirmed",
        mail_message=mail_message,
        confirmation=CONFIRMATION_MESSAGE,
    )
