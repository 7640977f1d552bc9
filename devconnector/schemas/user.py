from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from devconnector.schemas.common import require_text


# bcrypt only reads the first 72 bytes; recent releases reject longer input.
MAX_PASSWORD_BYTES = 72


def _validate_email_like(v: str) -> str:
    value = (v or "").strip().lower()
    if "@" not in value:
        raise PydanticCustomError("email", "Please include a valid email")
    left, right = value.split("@", 1)
    if not left or not right or "." not in right:
        raise PydanticCustomError("email", "Please include a valid email")
    return value


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        return require_text(v, "Name is required")

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return _validate_email_like(v)

    @field_validator("password")
    @classmethod
    def _validate_password(cls, v: str) -> str:
        if len(v or "") < 6:
            raise PydanticCustomError("password", "Please enter a password with 6 or more characters")
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError("password", "Password cannot be longer than 72 bytes")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return _validate_email_like(v)

    @field_validator("password")
    @classmethod
    def _validate_password(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("required", "Password is required")
        return v


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserPublic(BaseModel):
    id: int
    name: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    msg: str
