"""Persisted sequence counters."""

from sqlalchemy import Column, String, Integer, BigInteger, UniqueConstraint, Index
from erp_counter.models.base import BaseModel

# Widest site code and complement a counter key can hold
SCOPE_KEY_LENGTH = 10
COMPLEMENT_LENGTH = 20


class SequenceCounter(BaseModel):
    """
    Last value issued for one (sequence code, scope, period, complement) key.

    Rows are created on the first increment for a key and updated once per
    issued number. The engine never deletes them.
    """

    __tablename__ = "sequence_counters"

    sequence_code = Column(String(20), nullable=False)
    scope_key = Column(String(SCOPE_KEY_LENGTH), nullable=False, default="")
    period_key = Column(Integer, nullable=False, default=0)
    complement = Column(String(COMPLEMENT_LENGTH), nullable=False, default="")
    current_value = Column(BigInteger().with_variant(Integer, "sqlite"), nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint(
            "sequence_code",
            "scope_key",
            "period_key",
            "complement",
            name="uq_sequence_counter_key",
        ),
        Index("idx_sequence_counter_code", "sequence_code"),
    )

    def __repr__(self):
        return (
            f"<SequenceCounter(code='{self.sequence_code}', scope='{self.scope_key}', "
            f"period={self.period_key}, complement='{self.complement}', "
            f"value={self.current_value})>"
        )
