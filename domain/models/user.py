"""
User-related database models.
"""

from sqlalchemy import Column, Integer, Text, TIMESTAMP
from sqlalchemy.sql import func

from domain.models.database import Base


class AppUser(Base):
    """User account, keyed externally by the auth provider's id"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    clerk_id = Column(Text, unique=True, nullable=False, index=True)
    email = Column(Text)
    provider = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
