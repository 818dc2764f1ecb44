"""Pytest shared fixtures for the user API clients."""
import json
import pathlib
import sys
from typing import Optional

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from user_api.core.exceptions import TransportFailure
from user_api.core.models import Role, User
from user_api.core.users.transport import TransportResponse


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from sending real HTTP requests.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _stub_request(self, method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")

    monkeypatch.setattr(requests.Session, "request", _stub_request)


# ─────────────────────────────────────────────────────────────────────────────
# Transport Stub
# ─────────────────────────────────────────────────────────────────────────────
class StubTransport:
    """Records requests and replies with a canned response or error."""

    def __init__(self, status_code: int = 200, body: str = "", error: Optional[Exception] = None):
        self.status_code = status_code
        self.body = body
        self.error = error
        self.calls = []

    def send(self, method, url, headers=None, body=None):
        self.calls.append({"method": method, "url": url, "headers": headers or {}, "body": body})
        if self.error is not None:
            raise self.error
        return TransportResponse(status_code=self.status_code, body=self.body)


@pytest.fixture()
def alice():
    return User(username="alice", institution="inst-1", roles=(Role("Creator"), Role("Curator")))


@pytest.fixture()
def alice_json(alice):
    return json.dumps({
        "username": alice.username,
        "institution": alice.institution,
        "roles": [{"name": role.name} for role in alice.roles],
    })


@pytest.fixture()
def stub_transport():
    """Factory for StubTransport instances."""
    def _make(status_code=200, body="", error=None):
        return StubTransport(status_code=status_code, body=body, error=error)
    return _make


@pytest.fixture()
def connection_error():
    return TransportFailure("GET http://example.org/users/alice failed: connection refused",
                            url="http://example.org/users/alice")
