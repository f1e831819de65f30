from __future__ import annotations

import logging
import re
import smtplib
from typing import Any, Mapping

from app.core.email import MailRelay
from app.core.email_config import email_config
from app.core.errors import FormValidationError, RelayError
from app.schemas.submission import (
    FORM_TYPES,
    VALID_PRODUCTS,
    ContactSubmission,
    EmailContent,
    FormSubmission,
    QuoteSubmission,
    SubmissionResult,
    SubmitMailResponse,
    SupportSubmission,
    ValidationResult,
    form_submission_adapter,
)

logger = logging.getLogger(__name__)

# Whitespace as browsers define it for String.prototype.trim and regex \s.
# Validation must agree with the client-side check in the website forms.
BROWSER_WHITESPACE = (
    "\t\n\v\f\r "
    + "".join(chr(c) for c in (0x00A0, 0x1680))
    + "".join(chr(c) for c in range(0x2000, 0x200B))
    + "".join(chr(c) for c in (0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF))
)

_NOT_SPACE_OR_AT = f"[^@{re.escape(BROWSER_WHITESPACE)}]"
EMAIL_PATTERN = re.compile(
    rf"^{_NOT_SPACE_OR_AT}+@{_NOT_SPACE_OR_AT}+\.{_NOT_SPACE_OR_AT}+$"
)

SUCCESS_MESSAGE = "Thank you! Your message has been sent successfully."


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def _is_blank(value: Any) -> bool:
    return (
        not value
        or not isinstance(value, str)
        or value.strip(BROWSER_WHITESPACE) == ""
    )


def _is_missing(value: Any) -> bool:
    """Falsy the way a browser sees it: empty lists and objects count as present."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False


def _header_text(value: str) -> str:
    """Fold line breaks so the value fits on one header line."""
    return " ".join(value.splitlines())


def _relay_error_message(exc: Exception) -> str:
    if isinstance(exc, smtplib.SMTPResponseException):
        detail = exc.smtp_error
        if isinstance(detail, bytes):
            detail = detail.decode("utf-8", errors="replace")
        return f"{exc.smtp_code} {detail}".strip()
    return str(exc)


def validate_form_data(data: Any) -> ValidationResult:
    """Check a raw JSON payload against the form rules.

    Rules are applied in a fixed order and the first failure is reported.
    """
    if not isinstance(data, Mapping):
        return ValidationResult(valid=False, error="Invalid request data")

    form_type = data.get("formType")
    if _is_missing(form_type):
        return ValidationResult(valid=False, error="formType is required")

    if form_type not in FORM_TYPES:
        return ValidationResult(
            valid=False,
            error="Invalid formType. Must be contact, support, or quote",
        )

    if _is_blank(data.get("name")):
        return ValidationResult(valid=False, error="name is required")

    email = data.get("email")
    if not email or not isinstance(email, str) or not is_valid_email(email):
        return ValidationResult(valid=False, error="Valid email is required")

    if form_type in ("contact", "support"):
        if _is_blank(data.get("phone")):
            return ValidationResult(
                valid=False, error="phone is required for contact and support forms"
            )
        if _is_blank(data.get("message")):
            return ValidationResult(
                valid=False,
                error="message is required for contact and support forms",
            )

    if form_type == "quote":
        product = data.get("product")
        if _is_blank(product):
            return ValidationResult(
                valid=False, error="product is required for quote form"
            )
        if product not in VALID_PRODUCTS:
            return ValidationResult(
                valid=False,
                error=f"product must be one of: {', '.join(VALID_PRODUCTS)}",
            )

    return ValidationResult(valid=True)


def parse_form_data(data: Any) -> FormSubmission:
    """Validate ``data`` and return the typed submission.

    Raises:
        FormValidationError: when any form rule fails.
    """
    result = validate_form_data(data)
    if not result.valid:
        raise FormValidationError(result.error or "Validation failed")

    payload = dict(data)
    if payload.get("formType") == "quote":
        mobile = payload.get("mobile")
        payload["mobile"] = str(mobile) if mobile else None
    return form_submission_adapter.validate_python(payload)


def _message_html(message: str) -> str:
    return message.replace("\n", "<br>")


def _format_message_form(
    heading: str, subject: str, submission: ContactSubmission | SupportSubmission
) -> EmailContent:
    html = (
        f"<h2>{heading}</h2>\n"
        f"<p><strong>Name:</strong> {submission.name}</p>\n"
        f"<p><strong>Email:</strong> {submission.email}</p>\n"
        f"<p><strong>Phone:</strong> {submission.phone}</p>\n"
        f"<p><strong>Message:</strong></p>\n"
        f"<p>{_message_html(submission.message)}</p>\n"
    )
    text = (
        f"{heading}\n"
        "\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Phone: {submission.phone}\n"
        f"Message: {submission.message}\n"
    )
    return EmailContent(subject=subject, html=html, text=text)


def _format_quote(submission: QuoteSubmission) -> EmailContent:
    heading = "New Quote Request"
    mobile_html = (
        f"<p><strong>Mobile:</strong> {submission.mobile}</p>\n"
        if submission.mobile
        else ""
    )
    mobile_text = f"Mobile: {submission.mobile}\n" if submission.mobile else ""

    html = (
        f"<h2>{heading}</h2>\n"
        f"<p><strong>Name:</strong> {submission.name}</p>\n"
        f"<p><strong>Email:</strong> {submission.email}</p>\n"
        f"{mobile_html}"
        f"<p><strong>Product:</strong> {submission.product}</p>\n"
    )
    text = (
        f"{heading}\n"
        "\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"{mobile_text}"
        f"Product: {submission.product}\n"
    )
    return EmailContent(
        subject=f"{heading} - {_header_text(submission.name)} - {submission.product}",
        html=html,
        text=text,
    )


def format_email_content(submission: FormSubmission) -> EmailContent:
    if isinstance(submission, ContactSubmission):
        return _format_message_form(
            "New Contact Form Submission",
            f"New Contact Form Submission - {_header_text(submission.name)}",
            submission,
        )
    if isinstance(submission, SupportSubmission):
        return _format_message_form(
            "New Support Request",
            f"New Support Request - {_header_text(submission.name)}",
            submission,
        )
    if isinstance(submission, QuoteSubmission):
        return _format_quote(submission)
    raise TypeError(f"Unsupported submission type: {type(submission).__name__}")


class FormSubmissionService:
    """Validate, format and relay one website form submission."""

    def __init__(self, relay: MailRelay):
        self.relay = relay

    async def relay_submission(self, submission: FormSubmission) -> None:
        content = format_email_content(submission)
        try:
            await self.relay.send(
                sender=email_config.FORM_FROM,
                to=email_config.FORM_TO,
                subject=content.subject,
                html=content.html,
                text=content.text,
                reply_to=submission.email,
            )
        except Exception as exc:
            raise RelayError(_relay_error_message(exc)) from exc

    async def submit(self, data: Any) -> SubmissionResult:
        """Run one submission through validate, format and relay.

        Never raises for validation or relay failures; both are turned into
        an error result with the matching status code.
        """
        try:
            submission = parse_form_data(data)
        except FormValidationError as exc:
            logger.info("Form submission rejected: %s", exc.message)
            return SubmissionResult(
                status_code=exc.status_code,
                body=SubmitMailResponse(status="error", message=exc.message),
            )

        try:
            await self.relay_submission(submission)
        except RelayError as exc:
            logger.error(
                "Error sending email form_type=%s error=%s",
                submission.form_type,
                exc.message,
                exc_info=exc.__cause__,
            )
            return SubmissionResult(
                status_code=exc.status_code,
                body=SubmitMailResponse(status="error", message=exc.public_message),
            )

        logger.info(
            "Form submission relayed form_type=%s reply_to=%s",
            submission.form_type,
            submission.email,
        )
        return SubmissionResult(
            status_code=200,
            body=SubmitMailResponse(status="success", message=SUCCESS_MESSAGE),
        )
