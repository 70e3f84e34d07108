import base64
import json

import pytest
from jose import jwt

from jobportal.auth.tokens import Authenticated, Unauthenticated, decode_token, issue_token
from jobportal.config import settings

NOW = 1_700_000_000


def _clock(value):
    return lambda: value


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


def test_issue_without_remember_me_expires_in_one_day():
    _, claims = issue_token(1, "demo@example.com", remember_me=False, now=_clock(NOW))
    assert claims.issued_at == NOW
    assert claims.expires_at == NOW + 86400


def test_issue_with_remember_me_expires_in_thirty_days():
    _, claims = issue_token(1, "demo@example.com", remember_me=True, now=_clock(NOW))
    assert claims.expires_at == NOW + 2_592_000


def test_issue_floors_fractional_clock():
    _, claims = issue_token(1, "demo@example.com", now=_clock(NOW + 0.9))
    assert claims.issued_at == NOW
    assert claims.expires_at == NOW + 86400


def test_issued_token_round_trips_claims():
    token, claims = issue_token(7, "user@example.com", now=_clock(NOW))
    result = decode_token(token, now=_clock(NOW + 60))
    assert isinstance(result, Authenticated)
    assert result.claims == claims


@pytest.mark.parametrize("token", [None, "", "abc", "a.b", "a.b.c.d"])
def test_absent_or_wrongly_segmented_token_is_rejected(token):
    assert isinstance(decode_token(token, now=_clock(NOW)), Unauthenticated)


def test_undecodable_payload_is_rejected():
    token, _ = issue_token(1, "demo@example.com", now=_clock(NOW))
    header, _, signature = token.split(".")
    assert isinstance(decode_token(f"{header}.%%%not-base64%%%.{signature}", now=_clock(NOW)), Unauthenticated)
    not_json = _b64(b"definitely not json")
    assert isinstance(decode_token(f"{header}.{not_json}.{signature}", now=_clock(NOW)), Unauthenticated)


def test_tampered_payload_is_rejected():
    token, _ = issue_token(1, "demo@example.com", now=_clock(NOW))
    header, _, signature = token.split(".")
    forged = _b64(json.dumps({"userId": 2, "email": "x@example.com", "exp": NOW + 10**6}).encode())
    assert isinstance(decode_token(f"{header}.{forged}.{signature}", now=_clock(NOW)), Unauthenticated)


def test_tampered_signature_is_rejected():
    token, _ = issue_token(1, "demo@example.com", now=_clock(NOW))
    header, payload, signature = token.split(".")
    swapped = ("A" if signature[0] != "A" else "B") + signature[1:]
    assert isinstance(decode_token(f"{header}.{payload}.{swapped}", now=_clock(NOW)), Unauthenticated)


def test_token_signed_with_another_key_is_rejected():
    token = jwt.encode({"userId": 1, "email": "demo@example.com", "exp": NOW + 100}, "other-key", algorithm="HS256")
    assert isinstance(decode_token(token, now=_clock(NOW)), Unauthenticated)


def test_token_without_expiry_is_rejected():
    token = jwt.encode(
        {"userId": 1, "email": "demo@example.com"},
        settings.session.secret_key,
        algorithm=settings.session.algorithm
    )
    result = decode_token(token, now=_clock(NOW))
    assert isinstance(result, Unauthenticated)
    assert result.reason == "missing expiry"


def test_expiry_is_strict():
    token, claims = issue_token(1, "demo@example.com", now=_clock(NOW))
    assert isinstance(decode_token(token, now=_clock(claims.expires_at)), Authenticated)

    result = decode_token(token, now=_clock(claims.expires_at + 1))
    assert isinstance(result, Unauthenticated)
    assert result.expired
