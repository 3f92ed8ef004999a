from __future__ import annotations

from collections.abc import Iterable

# Scopes arrive either as one space-delimited string ("publicData esi-mail.read_mail.v1")
# or as a sequence of tokens.  Everything past the public API works on the tuple form.

ScopesInput = str | Iterable[str] | None


def normalize_scopes(value: ScopesInput) -> tuple[str, ...] | None:
    # None and "" both mean "not supplied"; an empty sequence is an explicit
    # request for no scopes.
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return tuple(value.split(" "))
    return tuple(value)


def join_scopes(scopes: Iterable[str]) -> str:
    return " ".join(scopes)
