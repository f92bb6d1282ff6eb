"""Atomic increment of persisted sequence counters.

A counter is identified by (sequence code, scope key, period key,
complement). Each increment reads the current value (0 when the row does
not exist yet), stores value + 1 and returns it zero-padded to the width of
the template's sequence field. A value wider than the field raises
CounterOverflowError and leaves the stored value unchanged.
"""

import threading
from typing import Dict, Protocol, Tuple

from sqlalchemy.orm import Session

from erp_counter.exceptions import CounterOverflowError
from erp_counter.models import SequenceCounter
from erp_counter.utils.logger import logger

CounterKey = Tuple[str, str, int, str]


def format_sequence_value(sequence_code: str, value: int, max_digits: int) -> str:
    """Left-pad a counter value with zeros, refusing values wider than the field."""
    rendered = str(value).zfill(max_digits)
    if len(rendered) > max_digits:
        raise CounterOverflowError(sequence_code, value, max_digits)
    return rendered


class SequenceStore(Protocol):
    def increment_and_get(
        self,
        sequence_code: str,
        scope_key: str,
        period_key: int,
        complement: str,
        max_digits: int,
    ) -> str:
        """Advance the counter for a key and return the new value, zero-padded."""
        ...


class SqlSequenceStore:
    """
    Sequence counters stored in the ``sequence_counters`` table.

    Runs inside the session's current transaction and never commits. The
    read-increment-write happens in a SAVEPOINT so an overflow undoes the
    write without disturbing the rest of an enclosing transaction.
    Concurrent callers are serialized by the database: the engine opens
    serializable transactions and the row is read FOR UPDATE where the
    dialect supports it.
    """

    def __init__(self, session: Session):
        self.session = session

    def increment_and_get(
        self,
        sequence_code: str,
        scope_key: str,
        period_key: int,
        complement: str,
        max_digits: int,
    ) -> str:
        with self.session.begin_nested():
            counter = (
                self.session.query(SequenceCounter)
                .filter(
                    SequenceCounter.sequence_code == sequence_code,
                    SequenceCounter.scope_key == scope_key,
                    SequenceCounter.period_key == period_key,
                    SequenceCounter.complement == complement,
                )
                .with_for_update()
                .first()
            )
            current_value = counter.current_value if counter else 0
            next_value = current_value + 1

            if counter is None:
                counter = SequenceCounter(
                    sequence_code=sequence_code,
                    scope_key=scope_key,
                    period_key=period_key,
                    complement=complement,
                    current_value=next_value,
                )
                self.session.add(counter)
            else:
                counter.current_value = next_value
            self.session.flush()

            # Raising here rolls the savepoint back
            rendered = format_sequence_value(sequence_code, next_value, max_digits)

        logger.bind(sequence_code=sequence_code).debug(
            f"Counter {sequence_code} [{scope_key}/{period_key}/{complement}] "
            f"advanced to {next_value}"
        )
        return rendered

    def current_value(
        self, sequence_code: str, scope_key: str, period_key: int, complement: str
    ) -> int:
        """Read the last issued value for a key (0 if never used)."""
        counter = (
            self.session.query(SequenceCounter)
            .filter(
                SequenceCounter.sequence_code == sequence_code,
                SequenceCounter.scope_key == scope_key,
                SequenceCounter.period_key == period_key,
                SequenceCounter.complement == complement,
            )
            .first()
        )
        return counter.current_value if counter else 0


class InMemorySequenceStore:
    """
    Thread-safe in-memory sequence store.
    Used in tests; state is lost with the process.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._values: Dict[CounterKey, int] = {}

    def increment_and_get(
        self,
        sequence_code: str,
        scope_key: str,
        period_key: int,
        complement: str,
        max_digits: int,
    ) -> str:
        key = (sequence_code, scope_key, period_key, complement)
        with self._lock:
            next_value = self._values.get(key, 0) + 1
            rendered = format_sequence_value(sequence_code, next_value, max_digits)
            self._values[key] = next_value
            return rendered

    def seed(
        self, sequence_code: str, scope_key: str, period_key: int, complement: str, value: int
    ) -> None:
        """Set the current value for a key (test helper)."""
        with self._lock:
            self._values[(sequence_code, scope_key, period_key, complement)] = value

    def peek(
        self, sequence_code: str, scope_key: str, period_key: int, complement: str
    ) -> int:
        """Inspect the current value for a key (test helper)."""
        with self._lock:
            return self._values.get((sequence_code, scope_key, period_key, complement), 0)

    @property
    def keys(self) -> Tuple[CounterKey, ...]:
        with self._lock:
            return tuple(self._values)
