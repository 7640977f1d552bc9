from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from devconnector.config import settings
from devconnector.utils.jwt_handler import (
    InvalidSignature,
    MalformedToken,
    TokenExpired,
    issue_token,
    verify_token,
)


def _flip(token: str, index: int) -> str:
    replacement = "A" if token[index] != "A" else "B"
    return token[:index] + replacement + token[index + 1 :]


@pytest.mark.parametrize("user_id", [1, 42, 987654321])
def test_issue_then_verify_returns_user_id(user_id: int) -> None:
    assert verify_token(issue_token(user_id)) == user_id


def test_token_carries_user_claim_and_expiry() -> None:
    token = issue_token(7)
    claims = jwt.get_unverified_claims(token)
    assert claims["user"] == {"id": 7}
    assert claims["exp"] - claims["iat"] == settings.jwt_expires_in_seconds


def test_expired_token_is_rejected() -> None:
    token = issue_token(7, expires_in=-10)
    with pytest.raises(TokenExpired):
        verify_token(token)


def test_flipping_any_character_breaks_the_signature() -> None:
    token = issue_token(7)
    positions = [index for index, char in enumerate(token) if char != "."]

    for index in positions:
        with pytest.raises(InvalidSignature):
            verify_token(_flip(token, index))


def test_token_signed_with_other_secret_is_rejected() -> None:
    forged = jwt.encode(
        {"user": {"id": 7}, "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "not-the-secret",
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(InvalidSignature):
        verify_token(forged)


@pytest.mark.parametrize("token", ["", "garbage", "a.b", "a..c", "a.b.c.d"])
def test_unparseable_token_is_malformed(token: str) -> None:
    with pytest.raises(MalformedToken):
        verify_token(token)


def test_token_without_user_id_is_malformed() -> None:
    token = jwt.encode(
        {"sub": "7", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(MalformedToken):
        verify_token(token)


def test_signature_with_trailing_bits_changed_is_rejected() -> None:
    alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
    token = issue_token(7)
    last = token[-1]
    # Only the two unused low bits of the final character differ.
    tampered = token[:-1] + alphabet[alphabet.index(last) ^ 1]
    with pytest.raises(InvalidSignature):
        verify_token(tampered)
