from typing import Optional
import logging

from sqlalchemy.orm import Session

from domain.models import AppUser
from repositories import MealPlanRepository, UserRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("macroplate.users")


class UserService:
    """Business logic for app users"""

    @staticmethod
    def create_user(
        db: Session, clerk_id: str, email: Optional[str] = None, provider: Optional[str] = None
    ) -> AppUser:
        user = UserRepository(db).create_user(clerk_id, email=email, provider=provider)
        logger.info(f"user_created clerk_id={clerk_id} provider={provider}")
        return user

    @staticmethod
    def get_user(db: Session, clerk_id: str) -> AppUser:
        user = UserRepository(db).get_by_clerk_id(clerk_id)
        if not user:
            logger.warning(f"user_not_found clerk_id={clerk_id}")
            raise NotFoundError(f"User {clerk_id} not found")
        return user

    @staticmethod
    def delete_user(db: Session, clerk_id: str) -> int:
        """Delete the user and every stored plan row; returns the number of rows removed"""
        if not UserRepository(db).delete_user(clerk_id):
            raise NotFoundError(f"User {clerk_id} not found")
        removed = MealPlanRepository(db).delete_for_user(clerk_id)
        db.commit()
        logger.info(f"user_deleted clerk_id={clerk_id} plan_rows={removed}")
        return removed
