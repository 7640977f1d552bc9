# auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from devconnector.database import get_db
from devconnector.models.user import User
from devconnector.routers.dependencies import get_current_user
from devconnector.schemas.user import LoginRequest, TokenResponse, UserRead
from devconnector.services.auth_service import login_user


router = APIRouter()


@router.get("", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.post("", response_model=TokenResponse)
def login(user_in: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    return TokenResponse(token=login_user(db, user_in))
