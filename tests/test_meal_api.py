"""HTTP tests for the `/meal` endpoints."""

import json

from conftest import MEAL_1, MEAL_1_DUPLICATE, MEAL_2, MEAL_EMPTY


def test_get_meal_by_id(client, store):
    """An existing meal is returned as a JSON object with fields in record order."""
    store.put("Meal", MEAL_1)
    store.put("Meal", MEAL_2)

    resp = client.get("/meal/2")

    assert resp.status_code == 200
    assert resp.json() == MEAL_2
    assert list(json.loads(resp.text).keys()) == ["id", "title", "description", "ingredients", "type"]


def test_get_meal_by_id_from_empty_store(client):
    resp = client.get("/meal/2")
    assert resp.status_code == 404
    assert resp.json()["error"]["status_code"] == 404


def test_get_meal_by_duplicated_id(client, store):
    """Two stored meals sharing an id is an internal error, not a pick."""
    store.put("Meal", MEAL_1)
    store.put("Meal", MEAL_1_DUPLICATE)

    resp = client.get("/meal/1")

    assert resp.status_code == 500
    assert resp.json()["error"]["details"] == {"type": "duplicate_id"}


def test_get_empty_meal_by_id(client, store):
    store.put("Meal", MEAL_EMPTY)
    store.put("Meal", MEAL_1)

    assert client.get("/meal/0").status_code == 404
    assert client.get("/meal/1").json() == MEAL_1


def test_get_meal_list(client, store):
    store.put("Meal", MEAL_1)
    store.put("Meal", MEAL_2)

    resp = client.get("/meal")

    assert resp.status_code == 200
    assert resp.json() == [MEAL_1, MEAL_2]


def test_get_meal_list_empty_store(client):
    resp = client.get("/meal")
    assert resp.status_code == 200
    assert resp.json() == []


def test_get_meal_list_skips_sentinel(client, store):
    store.put("Meal", MEAL_2)
    store.put("Meal", MEAL_EMPTY)
    store.put("Meal", MEAL_1)

    assert client.get("/meal").json() == [MEAL_2, MEAL_1]


def test_invalid_path_info(client, store):
    store.put("Meal", MEAL_1)

    assert client.get("/meal/1/").status_code == 400


def test_other_malformed_paths(client, store):
    store.put("Meal", MEAL_1)

    for path in ("/meal/", "/meal/abc", "/meal/1/2", "/meal/-1", "/meal/1a", "/meal/99999999999999999999"):
        resp = client.get(path)
        assert resp.status_code == 400, path
        assert resp.json()["error"]["details"] == {"field": "path"}


def test_only_meal_kind_is_listed(client, store):
    store.put("Drink", {"id": 7, "title": "Tea", "description": "", "ingredients": ["tea"], "type": "Hot"})
    store.put("Meal", MEAL_1)

    assert client.get("/meal").json() == [MEAL_1]
    assert client.get("/meal/7").status_code == 404


def test_health_endpoint(client, session):
    from main import app
    from database.deps import get_db_read

    app.dependency_overrides[get_db_read] = lambda: session
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "database": "connected"}
