"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from erp_counter.database import Base, create_counter_engine
from erp_counter.models import CounterDefinition, CounterDefinitionComponent
from erp_counter.models.enums import (
    ComponentType,
    DefinitionLevel,
    NoYes,
    ResetPolicy,
    SequenceType,
)
from erp_counter.schemas.counter import CounterComponentSpec, CounterTemplate
from erp_counter.services import (
    CounterService,
    InMemoryCounterDefinitionStore,
    InMemorySequenceStore,
)
from erp_counter.utils.logger import setup_logger


@pytest.fixture(scope="session", autouse=True)
def console_only_logging():
    """Log to the console only while tests run."""
    setup_logger(log_file="")


def component(component_type, length=0, constant=None):
    """Shorthand for a template component."""
    return CounterComponentSpec(component_type=component_type, length=length, constant=constant)


def make_template(sequence_code, components, **kwargs):
    """Build a CounterTemplate from component specs."""
    return CounterTemplate(sequence_code=sequence_code, components=tuple(components), **kwargs)


def add_definition(session, sequence_code, slots, **kwargs):
    """
    Insert a CounterDefinition row.

    ``slots`` is a list of (type code, length, constant) tuples.
    """
    definition = CounterDefinition(
        sequence_code=sequence_code,
        number_of_components=kwargs.pop("number_of_components", len(slots)),
        **kwargs,
    )
    for position, (component_type, length, constant) in enumerate(slots, start=1):
        definition.components.append(
            CounterDefinitionComponent(
                position=position,
                component_type=int(component_type),
                component_length=length,
                constant_value=constant,
            )
        )
    session.add(definition)
    session.commit()
    return definition


@pytest.fixture(scope="function")
def test_engine():
    """In-memory SQLite engine shared by every session of a test."""
    engine = create_counter_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db(test_engine):
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()

    yield session

    session.close()


@pytest.fixture(scope="function")
def file_engine(tmp_path):
    """File-backed SQLite engine; sessions get their own connections."""
    engine = create_counter_engine(f"sqlite:///{tmp_path / 'counters.db'}")
    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def file_session_factory(file_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=file_engine)


@pytest.fixture
def invoice_template():
    """'INV' followed by a five-digit sequence, never reset."""
    return make_template(
        "SALES_INVOICE",
        [
            component(ComponentType.CONSTANT, 3, "INV"),
            component(ComponentType.SEQUENCE_NUMBER, 5),
        ],
    )


@pytest.fixture
def monthly_template():
    """'<yyyy>-<mm>-<nnnn>', reset every month."""
    return make_template(
        "PURCHASE_ORDER",
        [
            component(ComponentType.YEAR, 4),
            component(ComponentType.CONSTANT, 1, "-"),
            component(ComponentType.MONTH, 2),
            component(ComponentType.CONSTANT, 1, "-"),
            component(ComponentType.SEQUENCE_NUMBER, 4),
        ],
        reset_policy=ResetPolicy.MONTHLY,
    )


@pytest.fixture
def site_template():
    """Site-level counter with a padded four-character site field, reset yearly."""
    return make_template(
        "SALES_ORDER",
        [
            component(ComponentType.SITE, 4),
            component(ComponentType.YEAR, 2),
            component(ComponentType.SEQUENCE_NUMBER, 3),
        ],
        reset_policy=ResetPolicy.ANNUAL,
        definition_level=DefinitionLevel.SITE,
        chronological_control=NoYes.YES,
    )


@pytest.fixture
def journal_template():
    """Journal code complement, two-digit year and six-digit sequence."""
    return make_template(
        "JOURNAL_ENTRY",
        [
            component(ComponentType.COMPLEMENT, 3),
            component(ComponentType.YEAR, 2),
            component(ComponentType.SEQUENCE_NUMBER, 6),
        ],
        reset_policy=ResetPolicy.ANNUAL,
    )


@pytest.fixture
def sequence_store():
    return InMemorySequenceStore()


@pytest.fixture
def counter_service(invoice_template, monthly_template, site_template, journal_template, sequence_store):
    """Counter service backed by in-memory stores."""
    definitions = InMemoryCounterDefinitionStore(
        [invoice_template, monthly_template, site_template, journal_template]
    )
    return CounterService(definitions, sequence_store)


@pytest.fixture
def sql_definitions(test_db):
    """Counter definitions stored in the test database."""
    add_definition(
        test_db,
        "SALES_INVOICE",
        [(ComponentType.CONSTANT, 3, "INV"), (ComponentType.SEQUENCE_NUMBER, 5, None)],
    )
    add_definition(
        test_db,
        "PURCHASE_ORDER",
        [
            (ComponentType.YEAR, 4, None),
            (ComponentType.CONSTANT, 1, "-"),
            (ComponentType.MONTH, 2, None),
            (ComponentType.CONSTANT, 1, "-"),
            (ComponentType.SEQUENCE_NUMBER, 4, None),
        ],
        reset_policy=ResetPolicy.MONTHLY,
    )
    add_definition(
        test_db,
        "NO_SEQUENCE",
        [(ComponentType.CONSTANT, 3, "ABC"), (ComponentType.YEAR, 4, None)],
    )
    add_definition(
        test_db,
        "NUMERIC_YEAR",
        [(ComponentType.YEAR, 2, None), (ComponentType.SEQUENCE_NUMBER, 4, None)],
        reset_policy=ResetPolicy.ANNUAL,
        sequence_type=SequenceType.NUMERIC,
    )
    test_db.commit()
