from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

# Ensure repo root is on sys.path so `import eve_sso` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from eve_sso.services.sso_client import SingleSignOn  # noqa: E402

CLIENT_ID = "abc"
SECRET_KEY = "xyz"
CALLBACK_URI = "https://app.example/cb"

TOKEN_PAYLOAD = {
    "access_token": "ACCESS-1",
    "token_type": "Bearer",
    "expires_in": 1199,
    "refresh_token": "REFRESH-1",
}


class FakeSSO:
    """Records every request and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json: object = dict(TOKEN_PAYLOAD)
        self.raw: bytes | None = None
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def fake_sso() -> FakeSSO:
    return FakeSSO()


@pytest.fixture
def make_sso(fake_sso: FakeSSO) -> Callable[..., SingleSignOn]:
    """Build a client wired to the fake SSO; keyword args override defaults."""

    def _make(**kwargs) -> SingleSignOn:
        kwargs.setdefault("transport", fake_sso.transport)
        return SingleSignOn(CLIENT_ID, SECRET_KEY, CALLBACK_URI, **kwargs)

    return _make


@pytest.fixture
def sso(make_sso: Callable[..., SingleSignOn]) -> SingleSignOn:
    return make_sso()
