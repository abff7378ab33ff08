"""
User Repository - Data access layer for user-related operations
"""

from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import AppUser
from app.exceptions import ConflictError


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_clerk_id(self, clerk_id: str) -> Optional[AppUser]:
        """Get user by the auth provider's id"""
        return self.db.query(AppUser).filter(AppUser.clerk_id == clerk_id).first()

    def create_user(
        self, clerk_id: str, email: Optional[str] = None, provider: Optional[str] = None
    ) -> AppUser:
        """Create a new user"""
        user = AppUser(clerk_id=clerk_id, email=email, provider=provider)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"User {clerk_id} already exists")

    def delete_user(self, clerk_id: str) -> bool:
        """Delete a user; the caller commits"""
        user = self.get_by_clerk_id(clerk_id)
        if user:
            self.db.delete(user)
            self.db.flush()
            return True
        return False
