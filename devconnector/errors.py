"""Application errors mapped onto HTTP responses by ``error_handlers``."""

from __future__ import annotations

from typing import Any

from fastapi import status


class APIError(Exception):
    """Base class for errors that carry their own status code and message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_content(self) -> dict[str, Any]:
        return {"msg": self.message}


class ValidationFailed(APIError):
    """Input rejected before touching the store; rendered as ``{"errors": [...]}``."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        message = "; ".join(str(item.get("msg", "")) for item in errors) or "Validation failed"
        super().__init__(message)

    @classmethod
    def single(cls, msg: str, param: str | None = None) -> "ValidationFailed":
        item: dict[str, Any] = {"msg": msg}
        if param:
            item["param"] = param
        return cls([item])

    def to_content(self) -> dict[str, Any]:
        return {"errors": self.errors}


class Unauthorized(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ProfileNotFound(APIError):
    # Clients of this API expect 400 rather than 404 for a missing profile.
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Profile not found") -> None:
        super().__init__(message)


class GithubProfileNotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "No Github profile found") -> None:
        super().__init__(message)
