"""Dependency helpers for FastAPI endpoints.

`get_db_read` yields a request-scoped read session; `get_datastore` and
`get_meal_lookup` build the datastore capability and the lookup service on
top of it. Tests override these with `app.dependency_overrides`.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_read_session, MEAL_KIND


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()


def get_datastore(db: Session = Depends(get_db_read)):
    """Return a read-side `SqlDatastore` bound to the request session."""
    from core.datastore import SqlDatastore

    return SqlDatastore(db)


def get_meal_lookup(datastore=Depends(get_datastore)):
    """Return a `MealLookupService` for the configured meal kind."""
    from services.meal_lookup import MealLookupService

    return MealLookupService(datastore, kind=MEAL_KIND)
