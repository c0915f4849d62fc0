import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func


def generate_uuid() -> str:
    return str(uuid.uuid4())


class UUIDPrimaryKeyMixin:
    """Opaque string primary key, portable across PostgreSQL and SQLite."""
    id = Column(String(36), primary_key=True, default=generate_uuid)


class TimestampMixin:
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(),
                        onupdate=func.now(), nullable=False)
