"""Counter definition schemas: engine snapshots and admin input/output."""

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from erp_counter.exceptions import CounterTemplateError
from erp_counter.models.enums import (
    ComponentType,
    DefinitionLevel,
    END_OF_COMPONENTS,
    MAX_COMPONENTS,
    NoYes,
    ResetPolicy,
    SequenceType,
)


class CounterComponentSpec(BaseModel):
    """One component of a counter template."""

    component_type: ComponentType
    length: int = Field(default=0, ge=0)
    constant: Optional[str] = Field(default=None, max_length=20)

    model_config = {"frozen": True}


class CounterTemplate(BaseModel):
    """
    Immutable snapshot of a counter definition, collected once at load time.

    ``components`` holds only the components that are rendered: the stored
    slots up to ``number_of_components``, cut at the first end-of-list code.
    """

    sequence_code: str
    components: Tuple[CounterComponentSpec, ...] = Field(default=(), max_length=MAX_COMPONENTS)
    reset_policy: int = ResetPolicy.NEVER
    definition_level: int = DefinitionLevel.FOLDER
    sequence_type: int = SequenceType.ALPHANUMERIC
    chronological_control: int = NoYes.NO

    model_config = {"frozen": True}

    @property
    def number_of_components(self) -> int:
        return len(self.components)

    @property
    def sequence_index(self) -> Optional[int]:
        """Position of the SEQUENCE_NUMBER component, or None."""
        for index, component in enumerate(self.components):
            if component.component_type == ComponentType.SEQUENCE_NUMBER:
                return index
        return None

    @property
    def sequence_length(self) -> int:
        """Digits reserved for the sequence number (1 when unset)."""
        index = self.sequence_index
        if index is None:
            return 0
        return self.components[index].length or 1

    def has_component(self, component_type: ComponentType) -> bool:
        return any(c.component_type == component_type for c in self.components)

    @classmethod
    def from_definition(cls, definition) -> "CounterTemplate":
        """
        Build a template from a CounterDefinition row.

        Raises:
            CounterTemplateError: If a slot holds an unknown component code
        """
        by_position = {slot.position: slot for slot in definition.components}
        count = min(definition.number_of_components or 0, MAX_COMPONENTS)

        components = []
        for position in range(1, count + 1):
            slot = by_position.get(position)
            if slot is None or slot.component_type == END_OF_COMPONENTS:
                break
            try:
                component_type = ComponentType(slot.component_type)
            except ValueError:
                raise CounterTemplateError(
                    f"Counter '{definition.sequence_code}' has unknown component "
                    f"code {slot.component_type} at position {position}"
                ) from None
            components.append(
                CounterComponentSpec(
                    component_type=component_type,
                    length=slot.component_length or 0,
                    constant=slot.constant_value,
                )
            )

        return cls(
            sequence_code=definition.sequence_code,
            components=tuple(components),
            reset_policy=definition.reset_policy,
            definition_level=definition.definition_level,
            sequence_type=definition.sequence_type,
            chronological_control=definition.chronological_control,
        )


class CounterDefinitionCreate(BaseModel):
    """Schema for creating a counter definition."""

    sequence_code: str = Field(..., min_length=1, max_length=20)
    description: Optional[str] = Field(None, max_length=255)
    components: List[CounterComponentSpec] = Field(..., min_length=1, max_length=MAX_COMPONENTS)
    number_of_components: Optional[int] = Field(None, ge=0, le=MAX_COMPONENTS)
    reset_policy: ResetPolicy = ResetPolicy.NEVER
    definition_level: DefinitionLevel = DefinitionLevel.FOLDER
    sequence_type: SequenceType = SequenceType.ALPHANUMERIC
    chronological_control: NoYes = NoYes.NO

    @model_validator(mode="after")
    def check_components(self):
        """Validate component combinations."""
        sequence_numbers = [
            c for c in self.components
            if c.component_type == ComponentType.SEQUENCE_NUMBER
        ]
        if len(sequence_numbers) > 1:
            raise ValueError("A counter can have at most one SEQUENCE_NUMBER component")

        for component in self.components:
            if component.component_type == ComponentType.CONSTANT and not component.constant:
                raise ValueError("CONSTANT components require a constant value")

        if self.number_of_components is None:
            self.number_of_components = len(self.components)
        elif self.number_of_components > len(self.components):
            raise ValueError("number_of_components exceeds the components provided")
        return self


class CounterComponentResponse(BaseModel):
    """Counter definition component response schema."""

    position: int
    component_type: int
    component_length: int
    constant_value: Optional[str] = None

    model_config = {"from_attributes": True}


class CounterDefinitionResponse(BaseModel):
    """Counter definition response schema."""

    id: int
    sequence_code: str
    description: Optional[str] = None
    number_of_components: int
    reset_policy: int
    definition_level: int
    sequence_type: int
    chronological_control: int
    components: List[CounterComponentResponse]
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SequenceCounterResponse(BaseModel):
    """Sequence counter response schema."""

    sequence_code: str
    scope_key: str
    period_key: int
    complement: str
    current_value: int
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
