"""Recipe detail routes"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from domain.models import get_db_session
from domain.schemas.recipe_schemas import RecipeDetailRequest, RecipeDetailResponse
from services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("macroplate.api.recipes")


@router.post("", response_model=RecipeDetailResponse)
def get_recipe_detail(body: RecipeDetailRequest, db: Session = Depends(get_db_session)):
    """
    Original (per serving) and scaled views of one recipe.

    The scaled view uses ``servings`` or, when absent, the servings of the
    ``scaledRecipe`` the client is showing.
    """
    return RecipeService.get_recipe_detail(db, body.id, body.resolved_servings())
