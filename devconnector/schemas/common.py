from __future__ import annotations

from pydantic_core import PydanticCustomError


def require_text(value: str | None, message: str) -> str:
    """Strip ``value`` and reject it when nothing is left."""
    text = (value or "").strip()
    if not text:
        raise PydanticCustomError("required", message)
    return text


def strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
