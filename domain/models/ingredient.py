"""
Ingredient model - Master ingredient table.
Recipe ingredient rows reference ingredients by id; names are looked up here.
"""

from sqlalchemy import Column, Integer, Text

from domain.models.database import Base


class Ingredient(Base):
    """Master ingredient table"""

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Ingredient(id={self.id}, name='{self.name}')>"
