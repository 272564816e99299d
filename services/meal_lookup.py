"""Meal lookup service.

Resolves the path fragment that follows the `/meal` prefix into either a
single-meal lookup or a full listing, and reports failures using the
exceptions from `core.exceptions`:

- ``""``        -> every valid meal, in store order
- ``"/<digits>"`` -> the meal with that id
- anything else -> `BadRequestError`
"""

import re
from typing import List, Optional, Union

from pydantic import ValidationError

from core.datastore import Datastore, StoredEntity
from core.exceptions import BadRequestError, DuplicateMealError, NotFoundError
from core.logger import get_logger
from schemas.meal_schema import INT64_MAX, Meal

logger = get_logger("services.meal_lookup")

MEAL_KIND = "Meal"
_ID_PATH = re.compile(r"/([0-9]+)")


class InvalidMealEntity(ValueError):
    """Raised when a stored entity cannot be turned into a `Meal`."""


def entity_to_meal(entity: StoredEntity) -> Meal:
    """Materialize a stored entity into a typed `Meal`.

    Raises:
        InvalidMealEntity: If a property is missing, null or mistyped, or if
            the entity is the empty sentinel record.
    """
    try:
        meal = Meal.model_validate(entity.properties)
    except ValidationError as exc:
        raise InvalidMealEntity(f"entity {entity.key} is not a valid meal: {exc.error_count()} error(s)") from exc
    if meal.is_sentinel():
        raise InvalidMealEntity(f"entity {entity.key} is the empty sentinel meal")
    return meal


def parse_path(path_fragment: Optional[str]) -> Optional[int]:
    """Return the requested meal id, or None when the whole list is requested.

    Raises:
        BadRequestError: If the fragment is neither empty nor ``/<digits>``.
    """
    if not path_fragment:
        return None
    match = _ID_PATH.fullmatch(path_fragment)
    if match is None:
        raise BadRequestError(f"Malformed meal path '{path_fragment}'", field="path")
    meal_id = int(match.group(1))
    if meal_id > INT64_MAX:
        raise BadRequestError(f"Meal id '{match.group(1)}' is out of range", field="path")
    return meal_id


class MealLookupService:
    """Read-only access to meals stored in a `Datastore`.

    Attributes:
        datastore: Storage capability used for every query.
        kind: Entity kind holding meals.
    """

    def __init__(self, datastore: Datastore, kind: str = MEAL_KIND):
        self.datastore = datastore
        self.kind = kind

    def resolve(self, path_fragment: Optional[str]) -> Union[Meal, List[Meal]]:
        """Dispatch a path fragment to `get_by_id` or `list_all`."""
        meal_id = parse_path(path_fragment)
        if meal_id is None:
            return self.list_all()
        return self.get_by_id(meal_id)

    def get_by_id(self, meal_id: int) -> Meal:
        """Return the single meal stored under `meal_id`.

        Raises:
            NotFoundError: If no entity has this id, or the only one is invalid.
            DuplicateMealError: If several entities share this id.
        """
        entities = self.datastore.query_by_field(self.kind, "id", meal_id)
        if not entities:
            raise NotFoundError(self.kind, meal_id)
        if len(entities) > 1:
            logger.error("Duplicate %s id %s across %s entities", self.kind, meal_id, len(entities))
            raise DuplicateMealError(meal_id, len(entities))
        try:
            meal = entity_to_meal(entities[0])
        except InvalidMealEntity as exc:
            logger.warning("Treating invalid %s %s as missing: %s", self.kind, meal_id, exc)
            raise NotFoundError(self.kind, meal_id) from exc
        logger.info("Resolved %s %s", self.kind, meal_id)
        return meal

    def list_all(self) -> List[Meal]:
        """Return every valid meal in store order, skipping invalid entities."""
        meals = []
        for entity in self.datastore.query_all(self.kind):
            try:
                meals.append(entity_to_meal(entity))
            except InvalidMealEntity as exc:
                logger.warning("Skipping %s entity: %s", self.kind, exc)
        logger.info("Listed %s %s record(s)", len(meals), self.kind)
        return meals
