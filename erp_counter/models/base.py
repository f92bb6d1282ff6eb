"""Declarative base shared by counter tables."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer
from erp_counter.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(Base):
    """
    Surrogate key and audit timestamps for counter tables.

    Timestamps are naive UTC. On ``sequence_counters`` ``updated_at`` is
    the time the last number was issued for the key.
    """

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self):
        code = getattr(self, "sequence_code", None)
        if code is not None:
            return f"<{self.__class__.__name__}(id={self.id}, code='{code}')>"
        return f"<{self.__class__.__name__}(id={self.id})>"
