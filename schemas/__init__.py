"""Pydantic schema package for response models."""

from .meal_schema import Meal

__all__ = [
    "Meal",
]
