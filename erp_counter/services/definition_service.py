"""Service for managing counter definitions."""

from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from erp_counter.models import CounterDefinition, CounterDefinitionComponent
from erp_counter.schemas.counter import CounterDefinitionCreate
from erp_counter.services.sequence_store import SqlSequenceStore
from erp_counter.utils.logger import logger


class CounterDefinitionService:
    """Service for counter definition operations."""

    def create_definition(
        self, db: Session, definition_in: CounterDefinitionCreate
    ) -> CounterDefinition:
        """
        Create a counter definition with its components.

        Args:
            db: Database session
            definition_in: Validated definition

        Returns:
            Created CounterDefinition

        Raises:
            ValueError: If the sequence code already exists
        """
        if self.get_by_code(db, definition_in.sequence_code):
            raise ValueError(
                f"Counter definition '{definition_in.sequence_code}' already exists"
            )

        definition = CounterDefinition(
            sequence_code=definition_in.sequence_code,
            description=definition_in.description,
            number_of_components=definition_in.number_of_components,
            reset_policy=int(definition_in.reset_policy),
            definition_level=int(definition_in.definition_level),
            sequence_type=int(definition_in.sequence_type),
            chronological_control=int(definition_in.chronological_control),
        )
        for position, component in enumerate(definition_in.components, start=1):
            definition.components.append(
                CounterDefinitionComponent(
                    position=position,
                    component_type=int(component.component_type),
                    component_length=component.length,
                    constant_value=component.constant,
                )
            )

        try:
            db.add(definition)
            db.commit()
            db.refresh(definition)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating counter definition {definition_in.sequence_code}: {e}")
            raise

        logger.info(f"Created counter definition: {definition.sequence_code}")
        return definition

    def get_by_code(self, db: Session, sequence_code: str) -> Optional[CounterDefinition]:
        """Get a definition by its sequence code."""
        return (
            db.query(CounterDefinition)
            .filter(CounterDefinition.sequence_code == sequence_code)
            .first()
        )

    def list_definitions(
        self,
        db: Session,
        skip: int = 0,
        limit: int = 100,
        reset_policy: Optional[int] = None,
    ) -> List[CounterDefinition]:
        """
        List definitions by sequence code.

        Args:
            db: Database session
            skip: Number of definitions to skip
            limit: Maximum number of definitions to return
            reset_policy: Only definitions with this reset policy

        Returns:
            List of CounterDefinition
        """
        try:
            query = db.query(CounterDefinition)
            if reset_policy is not None:
                query = query.filter(CounterDefinition.reset_policy == int(reset_policy))
            return (
                query.order_by(CounterDefinition.sequence_code)
                .offset(skip)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error listing counter definitions: {e}")
            raise

    def count_definitions(self, db: Session) -> int:
        """Number of stored counter definitions."""
        return db.query(CounterDefinition).count()

    def peek_counter(
        self,
        db: Session,
        sequence_code: str,
        scope_key: str = "",
        period_key: int = 0,
        complement: str = "",
    ) -> int:
        """Return the last value issued for a counter key without advancing it."""
        return SqlSequenceStore(db).current_value(sequence_code, scope_key, period_key, complement)


counter_definition_service = CounterDefinitionService()
