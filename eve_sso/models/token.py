from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TokenResponse(BaseModel):
    """Typed view over a token endpoint payload.

    SingleSignOn always returns the raw dict; callers that want attribute
    access can validate it with ``TokenResponse.model_validate(payload)``.
    Fields the SSO adds later are kept as extras rather than rejected.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    access_token: str
    token_type: str
    expires_in: int
    refresh_token: str | None = None
