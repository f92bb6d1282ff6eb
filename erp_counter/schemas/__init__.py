"""Pydantic schemas for the ERP counter engine."""

from erp_counter.schemas.counter import (
    CounterComponentSpec,
    CounterTemplate,
    CounterDefinitionCreate,
    CounterComponentResponse,
    CounterDefinitionResponse,
    SequenceCounterResponse,
)

__all__ = [
    "CounterComponentSpec",
    "CounterTemplate",
    "CounterDefinitionCreate",
    "CounterComponentResponse",
    "CounterDefinitionResponse",
    "SequenceCounterResponse",
]
