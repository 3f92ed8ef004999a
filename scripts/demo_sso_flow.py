"""Demo: walk the SSO authorization code → refresh flow against a fake SSO.

No network access is needed; requests are answered in-process by an
httpx.MockTransport standing in for login.eveonline.com.

Run with:
    python scripts/demo_sso_flow.py
"""

from __future__ import annotations

import asyncio
import base64
import logging
import secrets
from urllib.parse import parse_qs, urlparse

import httpx

from eve_sso import SingleSignOn, TokenResponse
from eve_sso.core.config import load_settings
from eve_sso.core.logging import setup_logging

CLIENT_ID = "demo-client"
SECRET_KEY = "demo-secret"
CALLBACK_URI = "http://localhost/callback"
SCOPES = "publicData esi-mail.read_mail.v1"

logger = logging.getLogger("demo")


def _fake_sso(request: httpx.Request) -> httpx.Response:
    expected = base64.b64encode(f"{CLIENT_ID}:{SECRET_KEY}".encode()).decode()
    if request.headers.get("authorization") != f"Basic {expected}":
        return httpx.Response(401, json={"error": "invalid_client"})

    form = parse_qs(request.content.decode())
    grant_type = form["grant_type"][0]
    if grant_type not in ("authorization_code", "refresh_token"):
        return httpx.Response(400, json={"error": "unsupported_grant_type"})

    return httpx.Response(
        200,
        json={
            "access_token": secrets.token_urlsafe(24),
            "token_type": "Bearer",
            "expires_in": 1199,
            "refresh_token": secrets.token_urlsafe(16),
        },
    )


async def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)

    sso = SingleSignOn.from_settings(
        CLIENT_ID,
        SECRET_KEY,
        CALLBACK_URI,
        settings=settings,
        scopes=SCOPES,
        transport=httpx.MockTransport(_fake_sso),
    )

    # ── Step 1: redirect the browser ────────────────────────────────
    state = secrets.token_urlsafe(16)
    url = sso.get_redirect_url(state)
    print(f"1. redirect user to       → {url}")

    query = parse_qs(urlparse(url).query)
    assert query["state"] == [state]
    assert query["scope"] == [SCOPES]

    # ── Step 2: exchange the code from the callback ─────────────────
    tokens = TokenResponse.model_validate(await sso.get_access_token("demo-code"))
    print(f"2. code exchanged         → expires_in={tokens.expires_in}")

    # ── Step 3: refresh with a narrower scope ───────────────────────
    assert tokens.refresh_token is not None
    refreshed = TokenResponse.model_validate(
        await sso.refresh_token(tokens.refresh_token, ["publicData"])
    )
    print(f"3. token refreshed        → token_type={refreshed.token_type}")

    # ── Step 4: a wrong secret is rejected by the SSO ───────────────
    bad = SingleSignOn(
        CLIENT_ID,
        "wrong-secret",
        CALLBACK_URI,
        transport=httpx.MockTransport(_fake_sso),
    )
    try:
        await bad.get_access_token("demo-code")
    except httpx.HTTPStatusError as exc:
        print(f"4. bad secret             → {exc.response.status_code} {exc.response.json()}")


if __name__ == "__main__":
    asyncio.run(main())
