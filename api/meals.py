"""Meals API router.

Exposes the meal lookup under `/meal`:

- ``GET /meal``        -> JSON array of every valid meal, in store order
- ``GET /meal/<id>``   -> JSON object for one meal
- any other shape      -> 400

The path after the prefix is handed to `MealLookupService.resolve` as is, so
``/meal/1/`` reaches the service as ``"/1/"`` and is rejected there.
"""

from fastapi import APIRouter, Depends
from typing import List

from database.deps import get_meal_lookup
from core.logger import get_logger
from schemas import Meal
from services.meal_lookup import MealLookupService

logger = get_logger("api.meals")
router = APIRouter(prefix="/meal", tags=["meals"])


@router.get("", response_model=List[Meal])
def list_meals(lookup: MealLookupService = Depends(get_meal_lookup)):
    """Return all meals as a list of `Meal` objects."""
    return lookup.resolve("")


@router.get("/{path_info:path}", response_model=Meal)
def get_meal(path_info: str, lookup: MealLookupService = Depends(get_meal_lookup)):
    """Return the meal addressed by the rest of the path.

    Raises:
        BadRequestError: If the path is not a single numeric segment.
        NotFoundError: If no valid meal has the id.
        DuplicateMealError: If several stored meals share the id.
    """
    logger.debug("Resolving meal path %r", path_info)
    return lookup.resolve("/" + path_info)
