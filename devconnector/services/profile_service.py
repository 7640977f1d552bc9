# profile_service.py
import logging
import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devconnector.errors import ProfileNotFound
from devconnector.models.profile import Profile
from devconnector.schemas.profile import SOCIAL_KEYS, EducationCreate, ExperienceCreate, ProfileUpsert
from devconnector.services import account_service


logger = logging.getLogger(__name__)

# Ids outside a signed 64-bit integer cannot exist in the store.
_MAX_ID = 2**63 - 1

_SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


def split_skills(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def build_profile_fields(payload: ProfileUpsert) -> dict[str, Any]:
    """Turn a validated request body into the column values to write.

    Unset or blank fields are dropped so an update leaves them untouched.
    ``social`` is always present and replaces the stored mapping.
    """
    data = payload.model_dump()
    fields: dict[str, Any] = {name: data[name] for name in _SCALAR_FIELDS if data.get(name)}
    if data.get("skills"):
        fields["skills"] = split_skills(data["skills"])
    fields["social"] = {key: data[key] for key in SOCIAL_KEYS if data.get(key)}
    return fields


def _find_profile(db: Session, user_id: int) -> Profile | None:
    return db.query(Profile).filter(Profile.user_id == user_id).one_or_none()


def _require_profile(db: Session, user_id: int) -> Profile:
    profile = _find_profile(db, user_id)
    if profile is None:
        raise ProfileNotFound("There is no profile for this user")
    return profile


def _apply_fields(profile: Profile, fields: dict[str, Any]) -> None:
    for name, value in fields.items():
        setattr(profile, name, value)


def get_own(db: Session, user_id: int) -> Profile:
    return _require_profile(db, user_id)


def get_all(db: Session) -> list[Profile]:
    return db.query(Profile).order_by(Profile.id).all()


def get_by_user_id(db: Session, raw_user_id: str) -> Profile:
    # A malformed id and an unknown id look the same to the caller.
    try:
        user_id = int(str(raw_user_id).strip())
    except ValueError:
        raise ProfileNotFound() from None
    if not -_MAX_ID - 1 <= user_id <= _MAX_ID:
        raise ProfileNotFound()
    profile = _find_profile(db, user_id)
    if profile is None:
        raise ProfileNotFound()
    return profile


def upsert(db: Session, user_id: int, fields: dict[str, Any]) -> Profile:
    profile = _find_profile(db, user_id)
    if profile is not None:
        _apply_fields(profile, fields)
        db.commit()
        db.refresh(profile)
        return profile

    profile = Profile(user_id=user_id, skills=[], social={}, experience=[], education=[])
    _apply_fields(profile, fields)
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the profile between our read and insert;
        # the unique user_id constraint rejected ours, so update theirs.
        db.rollback()
        logger.info("profile.upsert conflict user_id=%s, retrying as update", user_id)
        profile = _find_profile(db, user_id)
        if profile is None:
            raise
        _apply_fields(profile, fields)
        db.commit()
    db.refresh(profile)
    return profile


def delete(db: Session, user_id: int) -> None:
    account_service.delete_account(db, user_id)


def _new_entry_id() -> str:
    return uuid.uuid4().hex


def _prepend(entries: list[dict[str, Any]] | None, entry: dict[str, Any]) -> list[dict[str, Any]]:
    return [entry, *(entries or [])]


def _without(entries: list[dict[str, Any]] | None, entry_id: str) -> list[dict[str, Any]] | None:
    """Return ``entries`` minus the entry with ``entry_id``, or None when no entry matches."""
    current = list(entries or [])
    for index, item in enumerate(current):
        if item.get("id") == entry_id:
            return current[:index] + current[index + 1 :]
    return None


def add_experience(db: Session, user_id: int, entry: ExperienceCreate) -> Profile:
    profile = _require_profile(db, user_id)
    record = {"id": _new_entry_id(), **entry.model_dump(mode="json", by_alias=True)}
    profile.experience = _prepend(profile.experience, record)
    db.commit()
    db.refresh(profile)
    return profile


def remove_experience(db: Session, user_id: int, entry_id: str) -> Profile:
    profile = _require_profile(db, user_id)
    remaining = _without(profile.experience, entry_id)
    if remaining is None:
        logger.info("profile.experience remove: no entry id=%s user_id=%s", entry_id, user_id)
        return profile
    profile.experience = remaining
    db.commit()
    db.refresh(profile)
    return profile


def add_education(db: Session, user_id: int, entry: EducationCreate) -> Profile:
    profile = _require_profile(db, user_id)
    record = {"id": _new_entry_id(), **entry.model_dump(mode="json", by_alias=True)}
    profile.education = _prepend(profile.education, record)
    db.commit()
    db.refresh(profile)
    return profile


def remove_education(db: Session, user_id: int, entry_id: str) -> Profile:
    profile = _require_profile(db, user_id)
    remaining = _without(profile.education, entry_id)
    if remaining is None:
        logger.info("profile.education remove: no entry id=%s user_id=%s", entry_id, user_id)
        return profile
    profile.education = remaining
    db.commit()
    db.refresh(profile)
    return profile
