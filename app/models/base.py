"""Base Models and Mixins"""

import uuid
from sqlalchemy import Column, DateTime
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all keyed records.

    Provides:
    - UUID primary key (the record's opaque identity)
    - created_at timestamp
    - updated_at timestamp
    """
    __abstract__ = True

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class SoftDeleteMixin:
    """
    Mixin for soft delete functionality.

    Provides:
    - deleted_at timestamp (NULL = live, NOT NULL = deleted)
    """
    deleted_at = Column(DateTime, nullable=True, index=True)

    def soft_delete(self):
        """Mark record as deleted without removing from database"""
        self.deleted_at = get_utc_now()

    @property
    def is_deleted(self) -> bool:
        """Check if record is soft-deleted"""
        return self.deleted_at is not None
