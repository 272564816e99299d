"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and a simple `init_db` helper that
creates the entity table and seeds the default meals when the store is empty.
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .models import Base
from data.meals_dataset import MEALS_DATA

# Read/Write partitioning pattern
# In production, set WRITE_DATABASE_URL and READ_DATABASE_URL to different DB instances.
# For SQLite/demo this defaults to the same file but the interfaces are separated.
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///meals.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

MEAL_KIND = os.getenv("MEAL_KIND", "Meal")
SEED_MEALS = os.getenv("SEED_MEALS", "1").strip().lower() not in ("0", "false", "no", "")


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


# Engines
write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db(engine=None, seed: bool = SEED_MEALS) -> int:
    """Initialize the database schema and seed meals.

    Creates the entity table and, when the meal kind is empty and `seed` is
    enabled, stores the entries of `MEALS_DATA`.

    Args:
        engine: Engine to initialize; defaults to the write engine.
        seed: Whether to seed default meals into an empty store.

    Returns:
        Number of meals seeded.
    """
    from core.datastore import SqlDatastore

    engine = engine or write_engine
    Base.metadata.create_all(bind=engine)
    if not seed:
        return 0
    session = sessionmaker(bind=engine)()
    try:
        store = SqlDatastore(session)
        if store.count(MEAL_KIND) > 0:
            return 0
        for item in MEALS_DATA:
            store.put(MEAL_KIND, item)
        return len(MEALS_DATA)
    finally:
        session.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency so the session is closed
    after the request; reads go to the replica when one is configured.
    """
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
