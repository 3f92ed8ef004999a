"""Client for the EVE Online SSO (OAuth2 authorization code + refresh token)."""

from __future__ import annotations

from eve_sso.core.user_agent import VERSION as __version__
from eve_sso.models.token import TokenResponse
from eve_sso.services.sso_client import InvalidEndpointError, SingleSignOn

__all__ = [
    "InvalidEndpointError",
    "SingleSignOn",
    "TokenResponse",
    "__version__",
]
