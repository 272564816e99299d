"""Schemas for meal records returned by the API."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Meal(BaseModel):
    """A meal record.

    Field order is the order used in JSON responses. Validation is strict so
    a stored `"1"` or `true` is never accepted as an id.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    id: int = Field(ge=INT64_MIN, le=INT64_MAX)
    title: str
    description: str
    ingredients: List[str]
    type: str

    def is_sentinel(self) -> bool:
        """True for the all-empty record with id 0 left by malformed storage."""
        return (
            self.id == 0
            and not self.title
            and not self.description
            and not self.ingredients
            and not self.type
        )
