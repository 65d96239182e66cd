"""
Recovery Token Extractor.

Supabase sends password-reset links with the tokens either in the query
string or in the URL fragment, depending on the auth flow. Both are read
as `key=value&key=value` lists; the query string is tried first and the
fragment only when the query lacks part of the triple. The two sources
are never merged.
"""

from typing import Optional
from urllib.parse import parse_qs, urlsplit

from .models import (
    RECOVERY_TYPE,
    ParamPresence,
    RecoveryIntent,
    RecoveryUrlReport,
    TokenSource,
)

_TYPE = "type"
_ACCESS_TOKEN = "access_token"
_REFRESH_TOKEN = "refresh_token"


def _parse_params(raw: str) -> dict[str, str]:
    # First value wins for repeated keys
    return {key: values[0] for key, values in parse_qs(raw, keep_blank_values=True).items()}


def _triple(params: dict[str, str]) -> Optional[tuple[str, str, str]]:
    token_type = params.get(_TYPE)
    access_token = params.get(_ACCESS_TOKEN)
    refresh_token = params.get(_REFRESH_TOKEN)
    if not token_type or not access_token or not refresh_token:
        return None
    return token_type, access_token, refresh_token


def extract_recovery_intent(url: str) -> Optional[RecoveryIntent]:
    """
    Extract a recovery intent from a URL.

    Args:
        url: Full URL, or just its "?query" / "#fragment" part

    Returns:
        RecoveryIntent if one source carries a complete triple with
        type "recovery", None otherwise
    """
    parts = urlsplit(url)

    source = TokenSource.QUERY
    triple = _triple(_parse_params(parts.query))
    if triple is None:
        source = TokenSource.FRAGMENT
        triple = _triple(_parse_params(parts.fragment))
    if triple is None:
        return None

    token_type, access_token, refresh_token = triple
    if token_type != RECOVERY_TYPE:
        return None

    return RecoveryIntent(
        type=token_type,
        access_token=access_token,
        refresh_token=refresh_token,
        source=source,
    )


def _presence(params: dict[str, str]) -> ParamPresence:
    return ParamPresence(
        type=params.get(_TYPE) or None,
        access_token=bool(params.get(_ACCESS_TOKEN)),
        refresh_token=bool(params.get(_REFRESH_TOKEN)),
    )


def describe_recovery_url(url: str) -> RecoveryUrlReport:
    """
    Report which recovery parameters a URL carries, per source.

    Used when a reset link "doesn't work" to see whether the tokens
    arrived at all and where. Token values are reduced to presence flags.
    """
    parts = urlsplit(url)
    intent = extract_recovery_intent(url)
    return RecoveryUrlReport(
        url=url,
        query=_presence(_parse_params(parts.query)),
        fragment=_presence(_parse_params(parts.fragment)),
        source=intent.source if intent else None,
    )
