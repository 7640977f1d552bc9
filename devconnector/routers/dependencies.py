# dependencies.py
from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from devconnector.database import get_db
from devconnector.errors import Unauthorized
from devconnector.models.user import User
from devconnector.services.auth_service import get_user
from devconnector.utils.jwt_handler import TokenError, verify_token


@dataclass(frozen=True)
class Principal:
    """Identity resolved from a verified token; carries nothing but the user id."""

    user_id: int


def get_principal(x_auth_token: str | None = Header(default=None, alias="x-auth-token")) -> Principal:
    token = (x_auth_token or "").strip()
    if not token:
        raise Unauthorized("No token, authorization denied")
    try:
        user_id = verify_token(token)
    except TokenError as exc:
        raise Unauthorized("Token is not valid") from exc
    # Signature and expiry are enough; the user row is not re-read here.
    return Principal(user_id=user_id)


def get_current_user(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)) -> User:
    return get_user(db, principal.user_id)
