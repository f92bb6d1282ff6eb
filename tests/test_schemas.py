"""Tests for counter schemas."""

import pytest
from pydantic import ValidationError

from erp_counter.exceptions import CounterTemplateError
from erp_counter.models import CounterDefinition
from erp_counter.models.enums import ComponentType, ResetPolicy
from erp_counter.schemas.counter import CounterDefinitionCreate, CounterTemplate
from tests.conftest import add_definition, component, make_template


class TestCounterTemplateFromDefinition:
    """Collecting definition slots into a template."""

    def test_components_follow_position_order(self, test_db):
        definition = add_definition(
            test_db,
            "PO",
            [
                (ComponentType.CONSTANT, 2, "PO"),
                (ComponentType.YEAR, 4, None),
                (ComponentType.SEQUENCE_NUMBER, 4, None),
            ],
            reset_policy=ResetPolicy.ANNUAL,
        )

        template = CounterTemplate.from_definition(definition)

        assert [c.component_type for c in template.components] == [
            ComponentType.CONSTANT,
            ComponentType.YEAR,
            ComponentType.SEQUENCE_NUMBER,
        ]
        assert template.components[0].constant == "PO"
        assert template.reset_policy == ResetPolicy.ANNUAL
        assert template.sequence_index == 2
        assert template.sequence_length == 4

    def test_number_of_components_limits_slots(self, test_db):
        definition = add_definition(
            test_db,
            "SHORT",
            [
                (ComponentType.CONSTANT, 1, "A"),
                (ComponentType.SEQUENCE_NUMBER, 3, None),
                (ComponentType.COMPLEMENT, 2, None),
            ],
            number_of_components=2,
        )

        template = CounterTemplate.from_definition(definition)

        assert template.number_of_components == 2
        assert not template.has_component(ComponentType.COMPLEMENT)

    def test_sentinel_ends_component_list(self, test_db):
        definition = add_definition(
            test_db,
            "SENTINEL",
            [
                (ComponentType.CONSTANT, 1, "A"),
                (0, 0, None),
                (ComponentType.SEQUENCE_NUMBER, 3, None),
            ],
        )

        template = CounterTemplate.from_definition(definition)

        assert template.number_of_components == 1
        assert template.sequence_index is None

    def test_unknown_component_code(self, test_db):
        definition = add_definition(test_db, "BROKEN", [(77, 1, None)])

        with pytest.raises(CounterTemplateError):
            CounterTemplate.from_definition(definition)

    def test_sequence_length_defaults_to_one(self):
        template = make_template("ZERO", [component(ComponentType.SEQUENCE_NUMBER, 0)])
        assert template.sequence_length == 1

    def test_template_is_immutable(self, invoice_template):
        with pytest.raises(ValidationError):
            invoice_template.sequence_code = "OTHER"


class TestCounterDefinitionCreate:
    """Validation of new definitions."""

    def test_number_of_components_defaults_to_component_count(self):
        definition_in = CounterDefinitionCreate(
            sequence_code="INV",
            components=[
                component(ComponentType.CONSTANT, 3, "INV"),
                component(ComponentType.SEQUENCE_NUMBER, 5),
            ],
        )
        assert definition_in.number_of_components == 2

    def test_constant_requires_value(self):
        with pytest.raises(ValidationError):
            CounterDefinitionCreate(
                sequence_code="INV",
                components=[
                    component(ComponentType.CONSTANT, 3),
                    component(ComponentType.SEQUENCE_NUMBER, 5),
                ],
            )

    def test_single_sequence_number(self):
        with pytest.raises(ValidationError):
            CounterDefinitionCreate(
                sequence_code="INV",
                components=[
                    component(ComponentType.SEQUENCE_NUMBER, 2),
                    component(ComponentType.SEQUENCE_NUMBER, 5),
                ],
            )

    def test_at_most_ten_components(self):
        with pytest.raises(ValidationError):
            CounterDefinitionCreate(
                sequence_code="LONG",
                components=[component(ComponentType.CONSTANT, 1, "X")] * 11,
            )

    def test_number_of_components_cannot_exceed_components(self):
        with pytest.raises(ValidationError):
            CounterDefinitionCreate(
                sequence_code="INV",
                components=[component(ComponentType.SEQUENCE_NUMBER, 5)],
                number_of_components=3,
            )


class TestCounterDefinitionModel:
    """ORM validation."""

    def test_sequence_code_is_stripped(self, test_db):
        definition = add_definition(test_db, "  INV  ", [(ComponentType.SEQUENCE_NUMBER, 5, None)])
        assert definition.sequence_code == "INV"

    def test_empty_sequence_code(self):
        with pytest.raises(ValueError):
            CounterDefinition(sequence_code="  ", number_of_components=0)

    def test_too_many_components(self):
        with pytest.raises(ValueError):
            CounterDefinition(sequence_code="X", number_of_components=11)
