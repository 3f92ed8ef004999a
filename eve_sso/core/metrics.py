"""Token request metrics using the Prometheus client library.

All metrics live on the default registry so that an application exposing
``prometheus_client.generate_latest()`` picks them up without extra wiring.

  sso_token_requests_total — one increment per POST to the token
    endpoint, labelled by grant type and outcome ("success" / "error").
    rate(sso_token_requests_total{outcome="error"}[5m]) is the usual
    alert on a broken client secret or an SSO outage.

  sso_token_request_duration_seconds — round-trip latency of the same
    requests, including failed ones.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

TOKEN_REQUESTS = Counter(
    "sso_token_requests_total",
    "Token endpoint requests by grant type and outcome",
    ["grant_type", "outcome"],
)

TOKEN_REQUEST_DURATION = Histogram(
    "sso_token_request_duration_seconds",
    "Token endpoint round-trip time in seconds",
    ["grant_type"],
    # The SSO usually answers in 100-300ms; anything past 2.5s is an outage
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
