"""User management routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from domain.models import get_db_session
from domain.schemas.user_schemas import UserCreate, UserCreatedResponse, UserResponse
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("macroplate.api.users")


@router.post(
    "", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED
)
def create_user(user: UserCreate, db: Session = Depends(get_db_session)):
    """Register a user signed in through the auth provider"""
    new_user = UserService.create_user(db, user.clerk_id, user.email, user.provider)
    return UserCreatedResponse(success=True, user_id=new_user.id)


@router.get("/{clerk_id}", response_model=UserResponse)
def get_user(clerk_id: str, db: Session = Depends(get_db_session)):
    """Get a user by the auth provider's id."""
    return UserResponse.model_validate(UserService.get_user(db, clerk_id))


@router.delete("/{clerk_id}")
def delete_user(clerk_id: str, db: Session = Depends(get_db_session)):
    """Delete a user and their stored meal plans."""
    removed = UserService.delete_user(db, clerk_id)
    return {"status": "ok", "deleted": clerk_id, "plan_rows_removed": removed}
