"""
Stored meal plans: one row per chosen recipe of a user's day.
"""

from sqlalchemy import (
    Column,
    Date,
    Integer,
    Numeric,
    Text,
    TIMESTAMP,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from domain.models.database import Base


class UserMealPlanEntry(Base):
    """A scaled recipe placed in one meal of a user's day"""

    __tablename__ = "user_meal_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    clerk_id = Column(Text, nullable=False, index=True)
    recipe_id = Column(Integer, nullable=False)
    meal_type = Column(Text, nullable=False)  # breakfast, lunch, dinner
    servings = Column(Integer, nullable=False, default=1)
    plan_date = Column(Date, nullable=False)
    scaled_calories = Column(Numeric(10, 2))
    scaled_protein = Column(Numeric(10, 2))
    scaled_carbs = Column(Numeric(10, 2))
    scaled_fat = Column(Numeric(10, 2))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "clerk_id", "plan_date", "meal_type", "recipe_id", name="uq_user_meal_plan_row"
        ),
    )
