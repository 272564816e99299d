"""Shared fixtures: an isolated in-memory datastore and an HTTP client bound to it."""

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from database.models import Base  # noqa: E402
from core.datastore import SqlDatastore  # noqa: E402

MEAL_EMPTY = {"id": 0, "title": "", "description": "", "ingredients": [], "type": ""}
MEAL_1 = {
    "id": 1, "title": "Fried potato", "description": "Fried potato with mushrooms and onion.",
    "ingredients": ["potato", "onion", "oil"], "type": "Main",
}
MEAL_1_DUPLICATE = {
    "id": 1, "title": "Vegetable soup", "description": "Vegetable soup with onion.",
    "ingredients": ["potato", "onion"], "type": "Soup",
}
MEAL_2 = {
    "id": 2, "title": "Chocolate cake", "description": "Chocolate cake with butter cream and strawberry.",
    "ingredients": ["flour", "water", "butter", "strawberry"], "type": "Dessert",
}


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    db = sessionmaker(bind=engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(session):
    return SqlDatastore(session)


@pytest.fixture
def client(store):
    """TestClient whose meal lookup reads from the `store` fixture."""
    from fastapi.testclient import TestClient
    from main import app
    from database.deps import get_datastore

    app.dependency_overrides[get_datastore] = lambda: store
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
