"""Signed, self-contained edit capability tokens.

A token is ``<payload>.<mac>`` where ``payload`` is base64url JSON
``{"iat": ms, "exp": ms}`` and ``mac`` is the base64url HMAC-SHA256 of the
encoded payload under the shared edit secret. Nothing is stored server side.
"""
import hashlib
import hmac
import json
from datetime import datetime, timedelta
from typing import Any, Optional

from jose.utils import base64url_decode, base64url_encode

from taskboard.utils.timestamps import utcnow


def _to_ms(value: datetime) -> int:
    return round(value.timestamp() * 1000)


def _sign(body: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), body.encode("ascii"), hashlib.sha256).digest()
    return base64url_encode(digest).decode("ascii")


def constant_time_equals(a: str, b: str) -> bool:
    """Compare two strings without leaking where they differ."""
    a_bytes = a.encode("utf-8")
    b_bytes = b.encode("utf-8")
    if len(a_bytes) != len(b_bytes):
        return False
    return hmac.compare_digest(a_bytes, b_bytes)


def issue_token(secret: str, now: Optional[datetime] = None) -> str:
    """Return a token valid for TOKEN_TTL_DAYS from ``now``.

    Raises ValueError when no secret is configured: an empty secret would let
    anyone mint a valid token.
    """
    if not secret:
        raise ValueError("cannot issue an edit token without a secret")
    # read ttl at call-time so overrides in taskboard.config take effect
    import taskboard.config as _cfg
    issued = now or utcnow()
    expires = issued + timedelta(days=_cfg.TOKEN_TTL_DAYS)
    payload = {"iat": _to_ms(issued), "exp": _to_ms(expires)}
    body = base64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8")).decode("ascii")
    return f"{body}.{_sign(body, secret)}"


def verify_token(token: Optional[str], secret: str, now: Optional[datetime] = None) -> Optional[dict[str, Any]]:
    """Return the token payload, or None if the token is unusable for any reason."""
    if not secret or not token:
        return None
    body, _, sig = token.partition(".")
    if not body or not sig:
        return None
    try:
        expected = _sign(body, secret)
    except UnicodeEncodeError:
        return None
    if not constant_time_equals(expected, sig):
        return None
    try:
        payload = json.loads(base64url_decode(body.encode("ascii")).decode("utf-8"))
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    exp = payload.get("exp")
    if not isinstance(exp, int) or isinstance(exp, bool):
        return None
    if _to_ms(now or utcnow()) > exp:
        return None
    return payload

