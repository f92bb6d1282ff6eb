"""Read-only lookup of counter definitions."""

from typing import Dict, Iterable, Protocol

from sqlalchemy.orm import Session, selectinload

from erp_counter.exceptions import CounterDefinitionNotFoundError
from erp_counter.models import CounterDefinition
from erp_counter.schemas.counter import CounterTemplate


class CounterDefinitionStore(Protocol):
    def lookup(self, sequence_code: str) -> CounterTemplate:
        """Return the template for a sequence code.

        Raises CounterDefinitionNotFoundError for unknown codes.
        """
        ...


class SqlCounterDefinitionStore:
    """Counter definitions read through a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def lookup(self, sequence_code: str) -> CounterTemplate:
        definition = (
            self.session.query(CounterDefinition)
            .options(selectinload(CounterDefinition.components))
            .filter(CounterDefinition.sequence_code == sequence_code)
            .first()
        )
        if definition is None:
            raise CounterDefinitionNotFoundError(sequence_code)
        return CounterTemplate.from_definition(definition)


class InMemoryCounterDefinitionStore:
    """
    Counter definitions held in a dict.
    Used in tests and for definitions built in code.
    """

    def __init__(self, templates: Iterable[CounterTemplate] = ()):
        self._templates: Dict[str, CounterTemplate] = {
            template.sequence_code: template for template in templates
        }

    def register(self, template: CounterTemplate) -> None:
        """Register or replace a template."""
        self._templates[template.sequence_code] = template

    def lookup(self, sequence_code: str) -> CounterTemplate:
        template = self._templates.get(sequence_code)
        if template is None:
            raise CounterDefinitionNotFoundError(sequence_code)
        return template
