"""SQLAlchemy ORM models for the meal datastore.

The datastore keeps generic entities: a `kind` (the equivalent of a table or
collection name) plus a JSON-encoded property bag. Typed records such as
`schemas.Meal` are materialized from these entities by the service layer.
"""

from sqlalchemy import JSON, Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class Entity(Base):
    """ORM model representing one stored entity.

    `key` is assigned by the store and only ever grows, so ordering by key
    gives insertion order. Properties are stored as a JSON object, so single
    properties can be filtered in SQL.
    """

    __tablename__ = "entities"
    __table_args__ = {"sqlite_autoincrement": True}
    key = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String, nullable=False, index=True)
    properties = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
