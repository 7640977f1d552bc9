from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devconnector.database import get_db
from devconnector.routers.dependencies import Principal, get_principal
from devconnector.schemas.profile import EducationCreate, ExperienceCreate, ProfileRead, ProfileUpsert
from devconnector.schemas.user import MessageResponse
from devconnector.services import github_service, profile_service


router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=ProfileRead)
def read_my_profile(db: Session = Depends(get_db), principal: Principal = Depends(get_principal)) -> ProfileRead:
    profile = profile_service.get_own(db, principal.user_id)
    return ProfileRead.model_validate(profile)


@router.post("", response_model=ProfileRead)
def upsert_my_profile(
    payload: ProfileUpsert,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> ProfileRead:
    fields = profile_service.build_profile_fields(payload)
    profile = profile_service.upsert(db, principal.user_id, fields)
    return ProfileRead.model_validate(profile)


@router.get("", response_model=list[ProfileRead])
def read_profiles(db: Session = Depends(get_db)) -> list[ProfileRead]:
    return [ProfileRead.model_validate(profile) for profile in profile_service.get_all(db)]


@router.get("/user/{user_id}", response_model=ProfileRead)
def read_profile_by_user(user_id: str, db: Session = Depends(get_db)) -> ProfileRead:
    profile = profile_service.get_by_user_id(db, user_id)
    return ProfileRead.model_validate(profile)


@router.delete("", response_model=MessageResponse)
def delete_my_account(db: Session = Depends(get_db), principal: Principal = Depends(get_principal)) -> MessageResponse:
    profile_service.delete(db, principal.user_id)
    return MessageResponse(msg="User deleted")


@router.put("/experience", response_model=ProfileRead)
def add_experience(
    payload: ExperienceCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> ProfileRead:
    profile = profile_service.add_experience(db, principal.user_id, payload)
    return ProfileRead.model_validate(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileRead)
def remove_experience(
    exp_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> ProfileRead:
    profile = profile_service.remove_experience(db, principal.user_id, exp_id)
    return ProfileRead.model_validate(profile)


@router.put("/education", response_model=ProfileRead)
def add_education(
    payload: EducationCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> ProfileRead:
    profile = profile_service.add_education(db, principal.user_id, payload)
    return ProfileRead.model_validate(profile)


@router.delete("/education/{edu_id}", response_model=ProfileRead)
def remove_education(
    edu_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> ProfileRead:
    profile = profile_service.remove_education(db, principal.user_id, edu_id)
    return ProfileRead.model_validate(profile)


@router.get("/github/{username}")
def read_github_repos(username: str) -> list[dict[str, Any]]:
    return github_service.list_recent_repos(username)
