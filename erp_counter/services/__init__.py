"""Services for the ERP counter engine."""

from .definition_store import (
    CounterDefinitionStore,
    SqlCounterDefinitionStore,
    InMemoryCounterDefinitionStore,
)
from .sequence_store import SequenceStore, SqlSequenceStore, InMemorySequenceStore
from .period_resolver import resolve_period
from .scope_resolver import resolve_scope
from .formatter import build_counter_string
from .counter_service import (
    CounterService,
    DEFAULT_REFERENCE_DATE,
    get_next_counter,
    get_next_counter_in_transaction,
)
from .definition_service import CounterDefinitionService, counter_definition_service

__all__ = [
    "CounterDefinitionStore",
    "SqlCounterDefinitionStore",
    "InMemoryCounterDefinitionStore",
    "SequenceStore",
    "SqlSequenceStore",
    "InMemorySequenceStore",
    "resolve_period",
    "resolve_scope",
    "build_counter_string",
    "CounterService",
    "DEFAULT_REFERENCE_DATE",
    "get_next_counter",
    "get_next_counter_in_transaction",
    "CounterDefinitionService",
    "counter_definition_service",
]
