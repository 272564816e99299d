"""Database package: entity model, engines and session helpers."""

from .database import MEAL_KIND, init_db, get_read_session
from . import models

__all__ = ["MEAL_KIND", "init_db", "get_read_session", "models"]
