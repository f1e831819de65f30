from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_mail_relay
from app.core.config import settings
from app.main import app

# -----------------------------------------------------------------------------
# Relay doubles
# -----------------------------------------------------------------------------


class FakeMailRelay:
    """Records every send instead of talking to an SMTP server."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.sent: List[Dict[str, Any]] = []

    async def send(self, **kwargs) -> None:
        self.sent.append(kwargs)
        if self.error is not None:
            raise self.error


@pytest.fixture()
def fake_relay() -> FakeMailRelay:
    return FakeMailRelay()


@pytest.fixture(autouse=True)
def _local_environment(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "local", raising=False)
    monkeypatch.setattr(settings, "DEBUG", False, raising=False)


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def client(fake_relay):
    """
    TestClient with the mail relay dependency replaced by ``fake_relay``.
    """
    app.dependency_overrides[get_mail_relay] = lambda: fake_relay

    # Using 'with' context manager to trigger lifespan events (startup/shutdown)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def production(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production", raising=False)


@pytest.fixture()
def contact_payload() -> Dict[str, Any]:
    return {
        "formType": "contact",
        "name": "Jane",
        "email": "jane@x.com",
        "phone": "123",
        "message": "Hi\nThere",
    }


@pytest.fixture()
def quote_payload() -> Dict[str, Any]:
    return {
        "formType": "quote",
        "name": "Omar",
        "email": "omar@example.ae",
        "product": "LANDMARK",
    }
