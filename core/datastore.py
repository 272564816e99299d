"""Datastore capability used by the services.

The services never touch a global datastore handle; they receive a
`Datastore` and only use the query operations it exposes. `SqlDatastore`
implements it on top of the `entities` table through a SQLAlchemy session.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from database.models import Entity
from core.logger import get_logger

logger = get_logger("core.datastore")


@dataclass(frozen=True)
class StoredEntity:
    """A stored entity as seen by the services: key, kind and property bag."""

    key: int
    kind: str
    properties: Dict[str, Any]


def _same_value(left: Any, right: Any) -> bool:
    """Compare property values without Python's bool/int/float coercion."""
    return type(left) is type(right) and left == right


class Datastore(ABC):
    """Storage interface exposing kind-scoped queries.

    Query results are returned in store order, which must be stable for a
    fixed store state.
    """

    @abstractmethod
    def query_by_field(self, kind: str, field: str, value: Any) -> List[StoredEntity]:
        """Return entities of `kind` whose property `field` equals `value`."""

    @abstractmethod
    def query_all(self, kind: str) -> List[StoredEntity]:
        """Return every entity of `kind`."""

    @abstractmethod
    def put(self, kind: str, properties: Dict[str, Any]) -> StoredEntity:
        """Store a new entity and return it with its assigned key."""

    def count(self, kind: str) -> int:
        """Count entities of `kind`."""
        return len(self.query_all(kind))


class SqlDatastore(Datastore):
    """Datastore backed by the SQLAlchemy `Entity` model.

    Attributes:
        session: Database session for executing queries.
    """

    def __init__(self, session: Session):
        """Initialize the datastore with a session.

        Args:
            session: Database session, owned by the caller.
        """
        self.session = session

    @staticmethod
    def _to_stored(row: Entity) -> StoredEntity:
        return StoredEntity(key=row.key, kind=row.kind, properties=dict(row.properties or {}))

    def _kind_query(self, kind: str):
        return self.session.query(Entity).filter(Entity.kind == kind).order_by(Entity.key)

    def query_all(self, kind: str) -> List[StoredEntity]:
        """Return all entities of a kind ordered by key.

        Args:
            kind: Entity kind, e.g. 'Meal'.

        Returns:
            List of stored entities in insertion order.
        """
        return [self._to_stored(r) for r in self._kind_query(kind).all()]

    def query_by_field(self, kind: str, field: str, value: Any) -> List[StoredEntity]:
        """Return entities of a kind whose property equals a value.

        Integer and string values are filtered in SQL on the JSON property;
        the decoded rows are then checked again so that values must match in
        type as well: an integer id never matches a string or a boolean.

        Args:
            kind: Entity kind.
            field: Property name.
            value: Expected property value.

        Returns:
            Matching entities in store order.
        """
        query = self._kind_query(kind)
        if isinstance(value, int) and not isinstance(value, bool):
            query = query.filter(Entity.properties[field].as_integer() == value)
        elif isinstance(value, str):
            query = query.filter(Entity.properties[field].as_string() == value)

        matches = [
            e for e in map(self._to_stored, query.all())
            if field in e.properties and _same_value(e.properties[field], value)
        ]
        logger.debug("query_by_field kind=%s %s=%r -> %s match(es)", kind, field, value, len(matches))
        return matches

    def put(self, kind: str, properties: Dict[str, Any]) -> StoredEntity:
        """Add, commit and refresh a new entity.

        No uniqueness is enforced on any property.

        Args:
            kind: Entity kind.
            properties: JSON-serializable property bag.

        Returns:
            The persisted entity with its assigned key.
        """
        row = Entity(kind=kind, properties=dict(properties))
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return self._to_stored(row)

    def count(self, kind: str) -> int:
        return self.session.query(Entity).filter(Entity.kind == kind).count()
