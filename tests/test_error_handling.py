"""Test error handling functionality.

Verifies that the custom exceptions carry the right attributes and that the
registered handlers turn them into consistent JSON error responses.
"""
import json

import pytest
from sqlalchemy.exc import OperationalError

from core.exceptions import (
    AppException,
    BadRequestError,
    DatabaseError,
    DuplicateMealError,
    InternalError,
    NotFoundError,
)
from core.error_handlers import HANDLERS, create_error_response
from database.deps import get_datastore


def test_exception_classes_have_proper_attributes():
    exc = NotFoundError("Meal", 123)
    assert exc.status_code == 404
    assert "Meal" in exc.message
    assert "123" in exc.message

    exc = BadRequestError("Malformed meal path '/1/'", field="path")
    assert exc.status_code == 400
    assert exc.details == {"field": "path"}

    exc = DuplicateMealError(1, 2)
    assert isinstance(exc, InternalError)
    assert exc.status_code == 500
    assert exc.identifier == 1

    exc = DatabaseError("down", operation="health")
    assert isinstance(exc, InternalError)
    assert exc.details == {"operation": "health"}

    assert AppException("boom").details == {}


class FailingDatastore:
    """Datastore whose every query fails like an unreachable database."""

    def __init__(self, error):
        self.error = error

    def query_all(self, kind):
        raise self.error

    def query_by_field(self, kind, field, value):
        raise self.error


def _use_datastore(datastore):
    from main import app

    app.dependency_overrides[get_datastore] = lambda: datastore


def test_store_failure_maps_to_500_without_leaking_details(client):
    _use_datastore(FailingDatastore(OperationalError("SELECT", {}, Exception("disk I/O error"))))

    resp = client.get("/meal/1")

    assert resp.status_code == 500
    body = resp.json()["error"]
    assert body["message"] == "A database error occurred"
    assert body["details"] == {"type": "database_error"}
    assert "disk" not in resp.text


def test_unexpected_failure_maps_to_500(client):
    _use_datastore(FailingDatastore(RuntimeError("unexpected")))

    resp = client.get("/meal")

    assert resp.status_code == 500
    assert resp.json()["error"]["details"] == {"type": "internal_error"}


def test_bad_request_body_shape(client):
    resp = client.get("/meal/1/")
    assert resp.json() == {
        "error": {
            "message": "Malformed meal path '/1/'",
            "status_code": 400,
            "details": {"field": "path"},
        }
    }


def test_health_reports_database_error(client):
    from main import app
    from database.deps import get_db_read

    class BrokenSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("unreachable"))

    app.dependency_overrides[get_db_read] = lambda: BrokenSession()
    resp = client.get("/health")
    assert resp.status_code == 500
    assert resp.json()["error"]["details"] == {"operation": "health"}


def test_create_error_response_omits_empty_details():
    resp = create_error_response("Meal with id '3' not found", 404)
    assert resp.status_code == 404
    assert json.loads(resp.body) == {"error": {"message": "Meal with id '3' not found", "status_code": 404}}


def test_all_handlers_are_registered():
    from main import app

    for exc_class, handler in HANDLERS:
        assert app.exception_handlers[exc_class] is handler


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
