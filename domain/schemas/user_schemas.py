from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    clerk_id: str = Field(..., min_length=1)
    email: Optional[str] = None
    provider: Optional[str] = Field(default=None, description="email, google or apple")


class UserCreatedResponse(BaseModel):
    success: bool = True
    user_id: int


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    clerk_id: str
    email: Optional[str] = None
    provider: Optional[str] = None
    created_at: Optional[datetime] = None
