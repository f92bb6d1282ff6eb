"""Counter service: issues formatted document numbers."""

from datetime import date, datetime
from typing import Callable, Optional, Union

from sqlalchemy.orm import Session

from erp_counter.config import settings
from erp_counter.database import counter_transaction
from erp_counter.exceptions import CounterKeyError, CounterTemplateError
from erp_counter.models.enums import ComponentType
from erp_counter.models.sequence_counter import COMPLEMENT_LENGTH
from erp_counter.services.definition_store import (
    CounterDefinitionStore,
    SqlCounterDefinitionStore,
)
from erp_counter.services.formatter import build_counter_string
from erp_counter.services.period_resolver import resolve_period
from erp_counter.services.scope_resolver import resolve_scope
from erp_counter.services.sequence_store import SequenceStore, SqlSequenceStore
from erp_counter.utils.logger import logger

# Reference date the ERP uses when a document carries no date
DEFAULT_REFERENCE_DATE = date(1753, 1, 1)


class CounterService:
    """
    Issue document numbers (order, invoice, journal entry numbers) from
    counter definitions.

    The service holds no counter state: every call reads the definition,
    advances the persisted counter through the sequence store and formats
    the result. Atomicity and isolation come from the transaction the
    stores run in.
    """

    def __init__(self, definitions: CounterDefinitionStore, sequences: SequenceStore):
        """
        Initialize the counter service.

        Args:
            definitions: Counter definition lookup
            sequences: Sequence counter store
        """
        self.definitions = definitions
        self.sequences = sequences

    def get_next_counter(
        self,
        sequence_code: str,
        site: str = "",
        reference_date: Union[date, datetime] = DEFAULT_REFERENCE_DATE,
        complement: str = "",
    ) -> str:
        """
        Get the next formatted document number for a counter definition.

        Args:
            sequence_code: Counter definition code (e.g. 'SALES_ORDER')
            site: Site code, used by SITE-level definitions
            reference_date: Date that selects the reset period and date components
            complement: Free text embedded by COMPLEMENT components

        Returns:
            The formatted number, or "" when the template has no
            SEQUENCE_NUMBER component (no counter is advanced)

        Raises:
            CounterDefinitionNotFoundError: Unknown sequence code
            CounterOverflowError: The next value does not fit the sequence field
            CounterTemplateError: The template cannot be rendered
            CounterKeyError: The site or complement is too long for a counter key
        """
        log = logger.bind(sequence_code=sequence_code)

        try:
            template = self.definitions.lookup(sequence_code)
        except Exception as e:
            log.error(f"Error loading counter definition {sequence_code}: {e}")
            raise

        if template.sequence_index is None:
            log.info(f"Counter {sequence_code} has no sequence number component")
            return ""

        max_digits = template.sequence_length

        # Complements only partition counters that display them
        if not template.has_component(ComponentType.COMPLEMENT):
            complement = ""
        complement = complement or ""
        if len(complement) > COMPLEMENT_LENGTH:
            raise CounterKeyError("complement", complement, COMPLEMENT_LENGTH)

        period_key = resolve_period(template.reset_policy, reference_date)
        scope_key = resolve_scope(template.definition_level, site)

        # Render with a zero sequence first: a template that cannot be
        # rendered must fail before the counter advances
        try:
            build_counter_string("0" * max_digits, template, reference_date, scope_key, complement)
        except CounterTemplateError as e:
            log.error(f"Counter {sequence_code} cannot be rendered: {e}")
            raise

        try:
            sequence = self.sequences.increment_and_get(
                sequence_code, scope_key, period_key, complement, max_digits
            )
        except Exception as e:
            log.error(f"Error advancing counter {sequence_code}: {e}")
            raise

        number = build_counter_string(sequence, template, reference_date, scope_key, complement)
        log.info(f"Issued {sequence_code} number {number}")
        return number


def get_next_counter_in_transaction(
    session: Session,
    sequence_code: str,
    site: Optional[str] = None,
    reference_date: Union[date, datetime] = DEFAULT_REFERENCE_DATE,
    complement: str = "",
) -> str:
    """
    Issue a number inside a caller-owned transaction.

    Nothing is committed: the number and the record that uses it commit or
    roll back together with the caller's transaction.
    """
    if site is None:
        site = settings.counter_default_site
    service = CounterService(SqlCounterDefinitionStore(session), SqlSequenceStore(session))
    return service.get_next_counter(sequence_code, site, reference_date, complement)


def get_next_counter(
    sequence_code: str,
    site: Optional[str] = None,
    reference_date: Union[date, datetime] = DEFAULT_REFERENCE_DATE,
    complement: str = "",
    session_factory: Optional[Callable[[], Session]] = None,
) -> str:
    """
    Issue a number in its own serializable transaction.

    Serialization conflicts, lock timeouts and CounterTransactionTimeoutError
    propagate to the caller after the transaction is rolled back.
    """
    with counter_transaction(session_factory) as session:
        return get_next_counter_in_transaction(
            session, sequence_code, site, reference_date, complement
        )
