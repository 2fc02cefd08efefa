from datetime import datetime
from uuid import uuid4
from sqlalchemy import Column, DateTime

def new_id() -> str:
    return str(uuid4())

class TimestampMixin:
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class SoftDeleteMixin:
    """Rows are never removed through the API; reads filter on `deleted_at`."""

    deleted_at = Column(DateTime, nullable=True, index=True)

    @classmethod
    def live(cls):
        return cls.deleted_at.is_(None)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self):
        self.deleted_at = datetime.utcnow()
