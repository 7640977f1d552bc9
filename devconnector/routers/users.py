# users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from devconnector.database import get_db
from devconnector.schemas.user import RegisterRequest, TokenResponse
from devconnector.services.auth_service import register_user


router = APIRouter()


@router.post("", response_model=TokenResponse)
def register(user_in: RegisterRequest, db: Session = Depends(get_db)) -> TokenResponse:
    return TokenResponse(token=register_user(db, user_in))
