from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devconnector.database import get_db
from devconnector.models.user import User
from devconnector.routers.dependencies import Principal, get_current_user, get_principal
from devconnector.schemas.post import PostCreate, PostRead
from devconnector.services.post_service import create_post, list_posts


router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostRead)
def add_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PostRead:
    post = create_post(db, current_user, payload.text)
    return PostRead.model_validate(post)


@router.get("", response_model=list[PostRead])
def read_posts(db: Session = Depends(get_db), principal: Principal = Depends(get_principal)) -> list[PostRead]:
    return [PostRead.model_validate(post) for post in list_posts(db)]
