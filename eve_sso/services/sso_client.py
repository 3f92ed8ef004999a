"""EVE Online SSO client: authorization code + refresh token.

Endpoints (all relative to ``endpoint``):
  GET  /v2/oauth/authorize  — where the user's browser is sent
  POST /v2/oauth/token      — code exchange and refresh, Basic-authenticated

The client holds no per-call state.  Each token request opens its own
``httpx.AsyncClient``, so one instance can be shared across concurrent
requests and never needs closing.
"""

from __future__ import annotations

import base64
import logging
import time
from typing import Any
from urllib.parse import quote, urlencode, urlsplit

import httpx

from eve_sso.core.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT_SECONDS,
    Settings,
    load_settings,
)
from eve_sso.core.metrics import TOKEN_REQUEST_DURATION, TOKEN_REQUESTS
from eve_sso.core.user_agent import build_user_agent
from eve_sso.services.scopes import ScopesInput, join_scopes, normalize_scopes

logger = logging.getLogger(__name__)

AUTHORIZE_PATH = "/v2/oauth/authorize"
TOKEN_PATH = "/v2/oauth/token"


class InvalidEndpointError(ValueError):
    """The configured endpoint has no usable scheme or hostname."""


def _encode(params: dict[str, str]) -> str:
    # quote (not quote_plus): spaces go out as %20, which is what the SSO
    # documents for the scope parameter
    return urlencode(params, quote_via=quote)


def _derive_host(endpoint: str) -> str:
    try:
        parts = urlsplit(endpoint)
    except ValueError as exc:
        # e.g. unbalanced IPv6 brackets
        raise InvalidEndpointError(
            f"endpoint must be an http(s) URL (got {endpoint!r})"
        ) from exc
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidEndpointError(f"endpoint must be an http(s) URL (got {endpoint!r})")
    return parts.hostname


class SingleSignOn:
    __slots__ = (
        "_client_id",
        "_callback_uri",
        "_endpoint",
        "_user_agent",
        "_scopes",
        "_authorization",
        "_host",
        "_transport",
        "_timeout",
    )

    def __init__(
        self,
        client_id: str,
        secret_key: str,
        callback_uri: str,
        *,
        endpoint: str | None = None,
        user_agent: str | None = None,
        scopes: ScopesInput = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self._client_id = client_id
        self._callback_uri = callback_uri
        self._endpoint = (endpoint or DEFAULT_ENDPOINT).rstrip("/")
        self._user_agent = user_agent or build_user_agent()
        self._scopes = normalize_scopes(scopes)

        # Derived once.  The secret key itself is not kept on the instance.
        self._host = _derive_host(self._endpoint)
        self._authorization = base64.b64encode(
            f"{client_id}:{secret_key}".encode("utf-8")
        ).decode("ascii")

        self._transport = transport
        self._timeout = DEFAULT_TIMEOUT_SECONDS if timeout is None else timeout

    @classmethod
    def from_settings(
        cls,
        client_id: str,
        secret_key: str,
        callback_uri: str,
        *,
        settings: Settings | None = None,
        scopes: ScopesInput = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> SingleSignOn:
        if settings is None:
            settings = load_settings()
        return cls(
            client_id,
            secret_key,
            callback_uri,
            endpoint=settings.endpoint,
            user_agent=settings.user_agent,
            scopes=scopes,
            transport=transport,
            timeout=settings.timeout,
        )

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def callback_uri(self) -> str:
        return self._callback_uri

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def scopes(self) -> tuple[str, ...] | None:
        return self._scopes

    def __repr__(self) -> str:
        return (
            f"SingleSignOn(client_id={self._client_id!r}, "
            f"callback_uri={self._callback_uri!r}, endpoint={self._endpoint!r})"
        )

    # ------------------------------------------------------------------ #
    # Authorization redirect
    # ------------------------------------------------------------------ #

    def get_redirect_url(
        self, state: str | None = None, scopes: ScopesInput = None
    ) -> str:
        """Build the URL to send the user's browser to.

        ``scopes`` overrides the defaults given at construction; with neither,
        the ``scope`` parameter is sent empty rather than dropped.  ``state``
        is passed through untouched and only included when non-empty; checking
        it on the callback is the caller's job.
        """
        requested = normalize_scopes(scopes)
        if requested is None:
            requested = self._scopes or ()

        query = {
            "response_type": "code",
            "redirect_uri": self._callback_uri,
            "client_id": self._client_id,
            "scope": join_scopes(requested),
        }
        if state:
            query["state"] = state

        return f"{self._endpoint}{AUTHORIZE_PATH}?{_encode(query)}"

    # ------------------------------------------------------------------ #
    # Token endpoint
    # ------------------------------------------------------------------ #

    async def get_access_token(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code for an access/refresh token pair.

        Codes are single use; calling this twice with the same code fails at
        the SSO.  Returns the decoded JSON body as-is.

        Raises:
            httpx.HTTPStatusError: non-2xx response (provider error body on
                ``exc.response``)
            httpx.TransportError: connection failure or timeout
        """
        payload = {
            "grant_type": "authorization_code",
            "code": code,
        }
        return await self._request_token(payload)

    async def refresh_token(
        self, refresh_token: str, scopes: ScopesInput = None
    ) -> dict[str, Any]:
        """Exchange a refresh token for a new token pair.

        ``scope`` is only sent when ``scopes`` is given here; construction
        defaults do not apply.  The SSO may rotate the refresh token, so the
        returned one should replace the old.
        """
        payload = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        }
        requested = normalize_scopes(scopes)
        if requested is not None:
            payload["scope"] = join_scopes(requested)

        return await self._request_token(payload)

    def _token_headers(self) -> dict[str, str]:
        return {
            "Host": self._host,
            "Authorization": f"Basic {self._authorization}",
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": self._user_agent,
        }

    async def _request_token(self, payload: dict[str, str]) -> dict[str, Any]:
        grant_type = payload["grant_type"]
        # NOTE: never log the payload — it carries the code or refresh token.
        logger.debug(
            "SSO token request  grant_type=%s host=%s",
            grant_type,
            self._host,
            extra={"grant_type": grant_type, "host": self._host},
        )

        start = time.perf_counter()
        outcome = "error"
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.post(
                    f"{self._endpoint}{TOKEN_PATH}",
                    content=_encode(payload),
                    headers=self._token_headers(),
                )
            response.raise_for_status()
            body = response.json()
            outcome = "success"
        finally:
            duration = time.perf_counter() - start
            TOKEN_REQUESTS.labels(grant_type=grant_type, outcome=outcome).inc()
            TOKEN_REQUEST_DURATION.labels(grant_type=grant_type).observe(duration)

        logger.debug(
            "SSO token response  grant_type=%s status=%s",
            grant_type,
            response.status_code,
            extra={
                "grant_type": grant_type,
                "status_code": response.status_code,
                "duration_ms": round(duration * 1000, 1),
            },
        )
        return body
