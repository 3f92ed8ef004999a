from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from eve_sso.services.sso_client import SingleSignOn

from tests.conftest import CALLBACK_URI, CLIENT_ID


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query, keep_blank_values=True)


def test_redirect_url_matches_documented_example(sso: SingleSignOn) -> None:
    url = sso.get_redirect_url("s1", "esi-mail.read_mail.v1 publicData")
    assert url == (
        "https://login.eveonline.com/v2/oauth/authorize"
        "?response_type=code"
        "&redirect_uri=https%3A%2F%2Fapp.example%2Fcb"
        "&client_id=abc"
        "&scope=esi-mail.read_mail.v1%20publicData"
        "&state=s1"
    )


def test_required_parameters_round_trip(sso: SingleSignOn) -> None:
    query = _query(sso.get_redirect_url("xyz", ["publicData"]))
    assert query == {
        "response_type": ["code"],
        "redirect_uri": [CALLBACK_URI],
        "client_id": [CLIENT_ID],
        "scope": ["publicData"],
        "state": ["xyz"],
    }


def test_url_targets_authorize_path(sso: SingleSignOn) -> None:
    parts = urlsplit(sso.get_redirect_url())
    assert parts.scheme == "https"
    assert parts.netloc == "login.eveonline.com"
    assert parts.path == "/v2/oauth/authorize"


# ---- state ----


@pytest.mark.parametrize("state", [None, ""])
def test_state_omitted_when_not_supplied(sso: SingleSignOn, state) -> None:
    assert "state" not in _query(sso.get_redirect_url(state))


@pytest.mark.parametrize(
    "state",
    ["plain", "with space", "a&b=c", "ünïcødé", "slash/and?question"],
)
def test_state_survives_round_trip(sso: SingleSignOn, state: str) -> None:
    assert _query(sso.get_redirect_url(state))["state"] == [state]


# ---- scopes ----


def test_string_and_sequence_scopes_are_equivalent(sso: SingleSignOn) -> None:
    as_string = sso.get_redirect_url("s", "publicData esi-mail.read_mail.v1")
    as_list = sso.get_redirect_url("s", ["publicData", "esi-mail.read_mail.v1"])
    assert as_string == as_list


def test_no_scopes_anywhere_sends_empty_scope(sso: SingleSignOn) -> None:
    url = sso.get_redirect_url()
    assert "&scope=" in url
    assert _query(url)["scope"] == [""]


def test_default_scopes_used_when_none_given(make_sso) -> None:
    sso = make_sso(scopes="publicData esi-skills.read_skills.v1")
    assert _query(sso.get_redirect_url())["scope"] == [
        "publicData esi-skills.read_skills.v1"
    ]


def test_explicit_scopes_override_defaults(make_sso) -> None:
    sso = make_sso(scopes=["publicData"])
    assert _query(sso.get_redirect_url("s", ["esi-mail.read_mail.v1"]))["scope"] == [
        "esi-mail.read_mail.v1"
    ]


def test_empty_string_scopes_fall_back_to_defaults(make_sso) -> None:
    sso = make_sso(scopes=["publicData"])
    assert _query(sso.get_redirect_url("s", ""))["scope"] == ["publicData"]


def test_empty_sequence_overrides_defaults(make_sso) -> None:
    sso = make_sso(scopes=["publicData"])
    assert _query(sso.get_redirect_url("s", []))["scope"] == [""]


def test_space_encoded_as_percent_20(sso: SingleSignOn) -> None:
    url = sso.get_redirect_url(scopes=["a", "b"])
    assert "scope=a%20b" in url
    assert "+" not in url


# ---- endpoint ----


def test_custom_endpoint_is_used(make_sso) -> None:
    sso = make_sso(endpoint="https://sso.example.test")
    assert sso.get_redirect_url().startswith(
        "https://sso.example.test/v2/oauth/authorize?"
    )


def test_trailing_slash_on_endpoint_is_dropped(make_sso) -> None:
    sso = make_sso(endpoint="https://sso.example.test/")
    assert sso.endpoint == "https://sso.example.test"
    assert "//v2" not in sso.get_redirect_url()


def test_all_trailing_slashes_on_endpoint_are_dropped(make_sso) -> None:
    sso = make_sso(endpoint="https://sso.example.test///")
    assert sso.endpoint == "https://sso.example.test"


def test_redirect_url_does_no_io(sso: SingleSignOn, fake_sso) -> None:
    sso.get_redirect_url("s", "publicData")
    assert fake_sso.requests == []
