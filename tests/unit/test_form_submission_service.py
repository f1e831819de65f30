import asyncio
import smtplib
from unittest.mock import MagicMock

from app.core.email import MailRelay
from app.core.errors import GENERIC_ERROR_MESSAGE
from app.services.form_submission_service import FormSubmissionService


def _submit(relay, payload):
    return asyncio.run(FormSubmissionService(relay).submit(payload))


def test_success_result(fake_relay, contact_payload):
    result = _submit(fake_relay, contact_payload)

    assert result.status_code == 200
    assert result.body.status == "success"
    assert result.body.message == "Thank you! Your message has been sent successfully."
    assert len(fake_relay.sent) == 1


def test_validation_failure_skips_relay(fake_relay):
    result = _submit(fake_relay, {"formType": "quote", "name": "Omar"})

    assert result.status_code == 400
    assert result.body.status == "error"
    assert result.body.message == "Valid email is required"
    assert fake_relay.sent == []


def test_relay_error_message_surfaced(fake_relay, quote_payload):
    fake_relay.error = smtplib.SMTPAuthenticationError(535, b"Incorrect authentication data")

    result = _submit(fake_relay, quote_payload)

    assert result.status_code == 500
    assert "Incorrect authentication data" in result.body.message


def test_relay_error_without_message(fake_relay, quote_payload):
    fake_relay.error = ConnectionResetError()

    result = _submit(fake_relay, quote_payload)

    assert result.status_code == 500
    assert result.body.message == GENERIC_ERROR_MESSAGE


def test_quote_mobile_reaches_relay(fake_relay, quote_payload):
    quote_payload["mobile"] = "0501234567"

    _submit(fake_relay, quote_payload)

    assert "Mobile: 0501234567" in fake_relay.sent[0]["text"]
    assert fake_relay.sent[0]["reply_to"] == "omar@example.ae"


def test_relay_error_message_is_readable(fake_relay, quote_payload):
    fake_relay.error = smtplib.SMTPAuthenticationError(535, b"Incorrect authentication data")

    result = _submit(fake_relay, quote_payload)

    assert result.body.message == "535 Incorrect authentication data"


def test_relay_error_message_with_text_detail(fake_relay, quote_payload):
    fake_relay.error = smtplib.SMTPResponseException(421, "Service not available")

    result = _submit(fake_relay, quote_payload)

    assert result.body.message == "421 Service not available"


def test_multiline_name_relayed_through_smtp(monkeypatch, contact_payload):
    server = MagicMock()
    smtp_ssl = MagicMock()
    smtp_ssl.return_value.__enter__.return_value = server
    monkeypatch.setattr(smtplib, "SMTP_SSL", smtp_ssl)
    relay = MailRelay(
        host="smtp.test", port=465, username="noreply@caduae.com", password="pass"
    )
    contact_payload["name"] = "Jane\nDoe"

    result = _submit(relay, contact_payload)

    assert result.status_code == 200
    server.send_message.assert_called_once()
    sent = server.send_message.call_args.args[0]
    assert sent["Subject"] == "New Contact Form Submission - Jane Doe"
    assert "Name: Jane\nDoe" in sent.get_body(preferencelist=("plain",)).get_content()
