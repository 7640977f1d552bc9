# auth_service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devconnector.errors import Unauthorized, ValidationFailed
from devconnector.models.user import User
from devconnector.schemas.user import LoginRequest, RegisterRequest
from devconnector.utils.avatar import gravatar_url
from devconnector.utils.jwt_handler import issue_token
from devconnector.utils.password_hash import hash_password, verify_password


logger = logging.getLogger(__name__)


def register_user(db: Session, user_in: RegisterRequest) -> str:
    existing_user = db.query(User).filter(User.email == user_in.email).first()
    if existing_user:
        raise ValidationFailed.single("User already exists")
    user = User(
        name=user_in.name,
        email=user_in.email,
        password=hash_password(user_in.password),
        avatar=gravatar_url(user_in.email),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise ValidationFailed.single("User already exists") from None
    db.refresh(user)
    logger.info("auth.register user_id=%s", user.id)
    return issue_token(user.id)


def login_user(db: Session, user_in: LoginRequest) -> str:
    user = db.query(User).filter(User.email == user_in.email).first()
    # Same answer for unknown email and wrong password.
    if not user or not verify_password(user_in.password, user.password):
        raise ValidationFailed.single("Invalid credentials")
    return issue_token(user.id)


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise Unauthorized("User not found")
    return user
