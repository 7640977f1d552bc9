# jwt_handler.py
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from jose.utils import base64url_decode, base64url_encode

from devconnector.config import settings


class TokenError(Exception):
    """Raised when a presented token cannot be turned back into a user id."""


class MalformedToken(TokenError):
    pass


class InvalidSignature(TokenError):
    pass


class TokenExpired(TokenError):
    pass


def issue_token(user_id: int, *, expires_in: int | None = None) -> str:
    """Sign a token carrying ``{"user": {"id": user_id}}`` and an absolute expiry."""
    seconds = settings.jwt_expires_in_seconds if expires_in is None else expires_in
    issued_at = datetime.now(timezone.utc)
    to_encode: dict[str, Any] = {
        "user": {"id": user_id},
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=seconds),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _is_canonical_segment(segment: str) -> bool:
    """Reject base64url text whose unused trailing bits are set; decoders ignore them."""
    try:
        raw = segment.encode("ascii")
        return base64url_encode(base64url_decode(raw)) == raw
    except (UnicodeEncodeError, ValueError, TypeError):
        return False


def verify_token(token: str) -> int:
    """Check signature and expiry, then return the embedded user id.

    Only the ``user.id`` claim is trusted; everything else in the payload is ignored.
    """
    if not isinstance(token, str) or token.count(".") != 2 or not all(token.split(".")):
        raise MalformedToken("Token is not a signed JWT")
    if not _is_canonical_segment(token.rsplit(".", 1)[1]):
        raise InvalidSignature("Token signature is invalid")

    try:
        # jose verifies the signature before looking at exp, so an expired
        # token always has an intact signature.
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise TokenExpired("Token expired") from exc
    except JWTError as exc:
        raise InvalidSignature("Token signature is invalid") from exc

    user = payload.get("user")
    user_id = user.get("id") if isinstance(user, dict) else None
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise MalformedToken("Token payload carries no user id")
    return user_id
