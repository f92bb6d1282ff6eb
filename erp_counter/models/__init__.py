"""Database models for the ERP counter engine."""

# Import all models
from erp_counter.models.base import BaseModel
from erp_counter.models.enums import (
    ComponentType,
    ResetPolicy,
    DefinitionLevel,
    SequenceType,
    NoYes,
)
from erp_counter.models.counter_definition import (
    CounterDefinition,
    CounterDefinitionComponent,
)
from erp_counter.models.sequence_counter import SequenceCounter

# Export all models and enums
__all__ = [
    # Base
    "BaseModel",
    # Enums
    "ComponentType",
    "ResetPolicy",
    "DefinitionLevel",
    "SequenceType",
    "NoYes",
    # Models
    "CounterDefinition",
    "CounterDefinitionComponent",
    "SequenceCounter",
]
