"""
Recipe reference data: recipes and their per-serving ingredient quantities.
Maintained by external data management; the planner only reads these tables.
"""

from sqlalchemy import Column, Integer, Numeric, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from domain.models.database import Base


class Recipe(Base):
    """A recipe with per-serving macros and time/diet metadata"""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    image = Column(Text)
    diet = Column(Text, nullable=False, default="anything")

    # per serving
    calories = Column(Numeric(10, 2))
    protein = Column(Numeric(10, 2))
    fat = Column(Numeric(10, 2))
    carbs = Column(Numeric(10, 2))

    prep_time = Column(Numeric(10, 2))
    cook_time = Column(Numeric(10, 2))
    makes_x_servings = Column(Numeric(10, 2))
    health_score = Column(Numeric(10, 2))
    cost = Column(Numeric(10, 2))
    allergies = Column(Text)
    instructions = Column(Text)

    ingredients = relationship(
        "RecipeIngredient", back_populates="recipe", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_recipes_diet", "diet"),)

    def __repr__(self):
        return f"<Recipe(id={self.id}, name='{self.name}', diet='{self.diet}')>"


class RecipeIngredient(Base):
    """Quantity of one ingredient needed for a single serving of a recipe"""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    quantity = Column(Numeric(10, 3))
    unit = Column(Text)

    recipe = relationship("Recipe", back_populates="ingredients")
