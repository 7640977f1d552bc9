from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devconnector.schemas.common import require_text, strip_or_none
from devconnector.schemas.user import UserPublic


SOCIAL_KEYS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class ProfileUpsert(BaseModel):
    status: str
    skills: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None

    # Social links arrive flat and are folded into ``social`` by the service.
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("status")
    @classmethod
    def _validate_status(cls, v: str) -> str:
        return require_text(v, "Status is required")

    @field_validator("skills")
    @classmethod
    def _validate_skills(cls, v: str) -> str:
        return require_text(v, "Skills is required")

    @field_validator(
        "company", "website", "location", "bio", "githubusername", *SOCIAL_KEYS, mode="before"
    )
    @classmethod
    def _blank_to_none(cls, v):
        return strip_or_none(v)


class _DatedEntry(BaseModel):
    from_date: date = Field(alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("to_date", "description", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str):
            return strip_or_none(v)
        return v


class ExperienceCreate(_DatedEntry):
    title: str
    company: str
    location: str | None = None

    @field_validator("title")
    @classmethod
    def _validate_title(cls, v: str) -> str:
        return require_text(v, "Title is required")

    @field_validator("company")
    @classmethod
    def _validate_company(cls, v: str) -> str:
        return require_text(v, "Company is required")

    @field_validator("location", mode="before")
    @classmethod
    def _location_blank_to_none(cls, v):
        return strip_or_none(v)


class EducationCreate(_DatedEntry):
    school: str
    degree: str
    fieldofstudy: str

    @field_validator("school")
    @classmethod
    def _validate_school(cls, v: str) -> str:
        return require_text(v, "School is required")

    @field_validator("degree")
    @classmethod
    def _validate_degree(cls, v: str) -> str:
        return require_text(v, "Degree is required")

    @field_validator("fieldofstudy")
    @classmethod
    def _validate_fieldofstudy(cls, v: str) -> str:
        return require_text(v, "Field of study is required")


class ExperienceRead(ExperienceCreate):
    id: str


class EducationRead(EducationCreate):
    id: str


class ProfileRead(BaseModel):
    id: int
    user: UserPublic
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str
    githubusername: str | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceRead] = Field(default_factory=list)
    education: list[EducationRead] = Field(default_factory=list)
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
