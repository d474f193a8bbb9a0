import hashlib
import hmac
from datetime import datetime, timedelta, UTC

import pytest
from jose.utils import base64url_encode

from taskboard.utils.auth import constant_time_equals, issue_token, verify_token

SECRET = "shared-secret"
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def test_issue_then_verify_round_trip():
    token = issue_token(SECRET, now=NOW)
    payload = verify_token(token, SECRET, now=NOW)
    assert payload is not None
    assert payload["exp"] - payload["iat"] == 30 * 24 * 60 * 60 * 1000


def test_token_is_cookie_safe():
    token = issue_token(SECRET, now=NOW)
    body, sig = token.split(".")
    allowed = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")
    assert set(body) <= allowed
    assert set(sig) <= allowed


def test_wrong_secret_rejected():
    token = issue_token(SECRET, now=NOW)
    assert verify_token(token, "other-secret", now=NOW) is None


def test_tampered_payload_rejected():
    token = issue_token(SECRET, now=NOW)
    _, sig = token.split(".")
    forged = base64url_encode(b'{"iat":0,"exp":99999999999999}').decode("ascii")
    assert verify_token(f"{forged}.{sig}", SECRET, now=NOW) is None


def test_tampered_signature_rejected():
    token = issue_token(SECRET, now=NOW)
    body, sig = token.split(".")
    flipped = ("A" if sig[0] != "A" else "B") + sig[1:]
    assert verify_token(f"{body}.{flipped}", SECRET, now=NOW) is None
    assert verify_token(f"{body}.{sig[:-2]}", SECRET, now=NOW) is None


def test_expired_token_rejected():
    token = issue_token(SECRET, now=NOW)
    assert verify_token(token, SECRET, now=NOW + timedelta(days=29)) is not None
    assert verify_token(token, SECRET, now=NOW + timedelta(days=30, seconds=1)) is None


def test_malformed_tokens_rejected():
    for bad in ["", "no-separator", ".sig", "body.", "ü.ü", None]:
        assert verify_token(bad, SECRET, now=NOW) is None


def _signed(raw: bytes) -> str:
    body = base64url_encode(raw).decode("ascii")
    sig = base64url_encode(hmac.new(SECRET.encode(), body.encode(), hashlib.sha256).digest()).decode("ascii")
    return f"{body}.{sig}"


def test_payload_without_expiry_rejected():
    assert verify_token(_signed(b'{"iat":1}'), SECRET, now=NOW) is None
    assert verify_token(_signed(b'{"iat":1,"exp":"tomorrow"}'), SECRET, now=NOW) is None
    assert verify_token(_signed(b"not json"), SECRET, now=NOW) is None


def test_no_secret_never_issues_or_validates():
    with pytest.raises(ValueError):
        issue_token("", now=NOW)
    token = issue_token(SECRET, now=NOW)
    assert verify_token(token, "", now=NOW) is None


def test_constant_time_equals():
    assert constant_time_equals("abc", "abc")
    assert not constant_time_equals("abc", "abd")
    assert not constant_time_equals("abc", "abcd")
