import asyncio
import smtplib
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from app.core.config import Settings
from app.core.email import MailRelay, build_message


def _relay(**overrides):
    values = dict(
        host="smtp.test",
        port=465,
        username="noreply@caduae.com",
        password="pass",
        use_ssl=True,
        timeout=5.0,
    )
    values.update(overrides)
    return MailRelay(**values)


def _send(relay):
    asyncio.run(
        relay.send(
            sender="noreply@caduae.com",
            to="info@caduae.com",
            subject="New Quote Request - Omar - LANDMARK",
            html="<h2>New Quote Request</h2>",
            text="New Quote Request",
            reply_to="omar@example.ae",
        )
    )


def test_build_message_headers_and_parts():
    message = build_message(
        sender="noreply@caduae.com",
        to="info@caduae.com",
        subject="New Support Request - Jane",
        html="<p>Hi<br>There</p>",
        text="Hi\nThere",
        reply_to="jane@x.com",
    )

    assert message["From"] == "noreply@caduae.com"
    assert message["To"] == "info@caduae.com"
    assert message["Reply-To"] == "jane@x.com"
    assert message["Subject"] == "New Support Request - Jane"
    assert message.get_body(preferencelist=("plain",)).get_content().rstrip() == "Hi\nThere"
    assert "Hi<br>There" in message.get_body(preferencelist=("html",)).get_content()


def test_build_message_without_reply_to():
    message = build_message(
        sender="a@b.com", to="c@d.com", subject="s", html="<p>x</p>", text="x"
    )

    assert message["Reply-To"] is None


def test_send_uses_implicit_tls(monkeypatch):
    server = MagicMock()
    smtp_ssl = MagicMock()
    smtp_ssl.return_value.__enter__.return_value = server
    monkeypatch.setattr(smtplib, "SMTP_SSL", smtp_ssl)

    _send(_relay())

    smtp_ssl.assert_called_once_with("smtp.test", 465, timeout=5.0)
    server.login.assert_called_once_with("noreply@caduae.com", "pass")
    server.send_message.assert_called_once()
    sent = server.send_message.call_args.args[0]
    assert sent["Reply-To"] == "omar@example.ae"


def test_send_with_starttls(monkeypatch):
    server = MagicMock()
    smtp = MagicMock(return_value=server)
    server.__enter__.return_value = server
    monkeypatch.setattr(smtplib, "SMTP", smtp)

    _send(_relay(port=587, use_ssl=False))

    smtp.assert_called_once_with("smtp.test", 587, timeout=5.0)
    server.starttls.assert_called_once()
    server.send_message.assert_called_once()


def test_send_propagates_auth_failure(monkeypatch):
    server = MagicMock()
    server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
    smtp_ssl = MagicMock()
    smtp_ssl.return_value.__enter__.return_value = server
    monkeypatch.setattr(smtplib, "SMTP_SSL", smtp_ssl)

    with pytest.raises(smtplib.SMTPAuthenticationError):
        _send(_relay(password=""))

    server.send_message.assert_not_called()


def test_from_settings_defaults(monkeypatch):
    monkeypatch.delenv("SMTP_PASSWORD", raising=False)
    settings = Settings(_env_file=None)

    relay = MailRelay.from_settings(settings)

    assert relay.host == "mail.caduae.com"
    assert relay.port == 465
    assert relay.use_ssl is True
    assert relay.username == "noreply@caduae.com"
    assert relay.password == ""


def test_from_settings_reads_secret():
    settings = Settings(_env_file=None, SMTP_PASSWORD=SecretStr("s3cret"))

    assert MailRelay.from_settings(settings).password == "s3cret"


def test_relay_is_immutable():
    relay = _relay()

    with pytest.raises(AttributeError):
        relay.host = "other"
