"""Counter definition models: the templates document numbers are built from."""

from sqlalchemy import Column, String, Integer, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship, validates
from erp_counter.models.base import BaseModel
from erp_counter.models.enums import (
    DefinitionLevel,
    MAX_COMPONENTS,
    NoYes,
    ResetPolicy,
    SequenceType,
)


class CounterDefinition(BaseModel):
    """
    Declarative template describing how a document number is composed.

    Reference data maintained by the surrounding application; the counter
    engine only reads it.

    Attributes:
        sequence_code: Unique code callers ask for (e.g. 'SALES_ORDER')
        number_of_components: How many components are rendered
        reset_policy: ResetPolicy code
        definition_level: DefinitionLevel code
        sequence_type: SequenceType code
        chronological_control: NoYes code; YES pads site/company components
    """

    __tablename__ = "counter_definitions"

    sequence_code = Column(String(20), nullable=False, unique=True)
    description = Column(String(255), nullable=True)
    number_of_components = Column(Integer, nullable=False, default=0)
    reset_policy = Column(Integer, nullable=False, default=ResetPolicy.NEVER)
    definition_level = Column(Integer, nullable=False, default=DefinitionLevel.FOLDER)
    sequence_type = Column(Integer, nullable=False, default=SequenceType.ALPHANUMERIC)
    chronological_control = Column(Integer, nullable=False, default=NoYes.NO)

    components = relationship(
        "CounterDefinitionComponent",
        back_populates="definition",
        cascade="all, delete-orphan",
        order_by="CounterDefinitionComponent.position",
    )

    __table_args__ = (Index("idx_counter_definition_code", "sequence_code"),)

    @validates("sequence_code")
    def validate_sequence_code(self, key, value):
        """Validate the sequence code is not empty."""
        if not value or not value.strip():
            raise ValueError("sequence_code cannot be empty")
        return value.strip()

    @validates("number_of_components")
    def validate_number_of_components(self, key, value):
        """Validate the component count fits the template."""
        if value is None or value < 0 or value > MAX_COMPONENTS:
            raise ValueError(
                f"number_of_components must be between 0 and {MAX_COMPONENTS}"
            )
        return value

    def __repr__(self):
        return (
            f"<CounterDefinition(code='{self.sequence_code}', "
            f"components={self.number_of_components})>"
        )


class CounterDefinitionComponent(BaseModel):
    """One slot (1 to 10) of a counter definition."""

    __tablename__ = "counter_definition_components"

    definition_id = Column(
        Integer, ForeignKey("counter_definitions.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False)
    component_type = Column(Integer, nullable=False, default=0)
    component_length = Column(Integer, nullable=False, default=0)
    constant_value = Column(String(20), nullable=True)

    definition = relationship("CounterDefinition", back_populates="components")

    __table_args__ = (
        UniqueConstraint("definition_id", "position", name="uq_counter_component_position"),
    )

    @validates("position")
    def validate_position(self, key, value):
        """Validate the slot number."""
        if value is None or value < 1 or value > MAX_COMPONENTS:
            raise ValueError(f"position must be between 1 and {MAX_COMPONENTS}")
        return value

    def __repr__(self):
        return (
            f"<CounterDefinitionComponent(position={self.position}, "
            f"type={self.component_type}, length={self.component_length})>"
        )
