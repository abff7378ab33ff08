"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    AppError,
    NotFoundError,
    ConflictError,
    MealPlanError,
    InsufficientCandidatesError,
    ConstraintUnsatisfiableError,
)

__all__ = [
    "settings",
    "AppError",
    "NotFoundError",
    "ConflictError",
    "MealPlanError",
    "InsufficientCandidatesError",
    "ConstraintUnsatisfiableError",
]
