"""Database seeding for first-time startup."""

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from erp_counter.models import CounterDefinition
from erp_counter.models.enums import (
    ComponentType,
    DefinitionLevel,
    NoYes,
    ResetPolicy,
)
from erp_counter.schemas.counter import CounterComponentSpec, CounterDefinitionCreate
from erp_counter.services.definition_service import counter_definition_service
from erp_counter.utils.logger import logger


def _component(component_type: ComponentType, length: int = 0, constant=None) -> CounterComponentSpec:
    return CounterComponentSpec(component_type=component_type, length=length, constant=constant)


def build_default_definitions() -> list[CounterDefinitionCreate]:
    """Counter definitions shipped with a new database."""
    return [
        CounterDefinitionCreate(
            sequence_code="SALES_ORDER",
            description="Sales orders: SO-<site><yy>-00001",
            components=[
                _component(ComponentType.CONSTANT, 3, "SO-"),
                _component(ComponentType.SITE, 3),
                _component(ComponentType.YEAR, 2),
                _component(ComponentType.CONSTANT, 1, "-"),
                _component(ComponentType.SEQUENCE_NUMBER, 5),
            ],
            reset_policy=ResetPolicy.ANNUAL,
            definition_level=DefinitionLevel.SITE,
            chronological_control=NoYes.YES,
        ),
        CounterDefinitionCreate(
            sequence_code="PURCHASE_ORDER",
            description="Purchase orders: PO<yyyy><mm>-0001",
            components=[
                _component(ComponentType.CONSTANT, 2, "PO"),
                _component(ComponentType.YEAR, 4),
                _component(ComponentType.MONTH, 2),
                _component(ComponentType.CONSTANT, 1, "-"),
                _component(ComponentType.SEQUENCE_NUMBER, 4),
            ],
            reset_policy=ResetPolicy.MONTHLY,
        ),
        CounterDefinitionCreate(
            sequence_code="SALES_INVOICE",
            description="Sales invoices: INV00001",
            components=[
                _component(ComponentType.CONSTANT, 3, "INV"),
                _component(ComponentType.SEQUENCE_NUMBER, 5),
            ],
            reset_policy=ResetPolicy.NEVER,
        ),
        CounterDefinitionCreate(
            sequence_code="JOURNAL_ENTRY",
            description="Journal entries: <journal>-<yy>-000001",
            components=[
                _component(ComponentType.COMPLEMENT, 5),
                _component(ComponentType.CONSTANT, 1, "-"),
                _component(ComponentType.YEAR, 2),
                _component(ComponentType.CONSTANT, 1, "-"),
                _component(ComponentType.SEQUENCE_NUMBER, 6),
            ],
            reset_policy=ResetPolicy.ANNUAL,
        ),
        CounterDefinitionCreate(
            sequence_code="CUSTOMER",
            description="Customer codes: C000001",
            components=[
                _component(ComponentType.CONSTANT, 1, "C"),
                _component(ComponentType.SEQUENCE_NUMBER, 6),
            ],
        ),
    ]


def seed_if_empty(engine: Engine) -> None:
    """Insert the default counter definitions if the table is empty."""
    with Session(engine) as session:
        if session.query(CounterDefinition).count() > 0:
            logger.info("Counter definitions already present, skipping seed")
            return

        definitions = build_default_definitions()
        for definition_in in definitions:
            counter_definition_service.create_definition(session, definition_in)
        logger.info(f"Seeded {len(definitions)} counter definitions")
