"""Assembly of document numbers from counter templates."""

from datetime import date, datetime
from typing import Union

from erp_counter.exceptions import CounterTemplateError, UnsupportedComponentError
from erp_counter.models.enums import ComponentType, NoYes, ResetPolicy, SequenceType
from erp_counter.schemas.counter import CounterComponentSpec, CounterTemplate
from erp_counter.services.period_resolver import resolve_period

MONTH_ABBREVIATIONS = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)

# Declared by the ERP but never rendered
UNSUPPORTED_COMPONENTS = frozenset(
    {ComponentType.FISCAL_YEAR, ComponentType.PERIOD, ComponentType.FORMULA}
)

DateLike = Union[date, datetime]


def format_year(length: int, reference_date: DateLike) -> str:
    if length == 1:
        return str(resolve_period(ResetPolicy.DECADE, reference_date))
    if length == 2:
        return str(resolve_period(ResetPolicy.ANNUAL, reference_date)).zfill(2)
    if length == 4:
        return str(reference_date.year).zfill(4)
    return ""


def format_month(length: int, reference_date: DateLike) -> str:
    if length == 2:
        return str(reference_date.month).zfill(2)
    if length == 3:
        return MONTH_ABBREVIATIONS[reference_date.month - 1]
    return ""


def format_week(reference_date: DateLike) -> str:
    return str(reference_date.isocalendar()[1]).zfill(2)


def format_day(length: int, reference_date: DateLike) -> str:
    if length == 1:
        # 0 is Sunday
        return str((reference_date.weekday() + 1) % 7).zfill(2)
    if length == 2:
        return str(reference_date.day).zfill(2)
    if length == 3:
        return str(reference_date.timetuple().tm_yday).zfill(3)
    return ""


def format_scope(chronological_control: int, length: int, scope_key: str) -> str:
    """Pad short scope codes with '_' under chronological control, else truncate."""
    if len(scope_key) < length and chronological_control == NoYes.YES:
        return scope_key.ljust(length, "_")
    return scope_key[:length]


def format_complement(length: int, complement: str) -> str:
    return complement[:length] if length > 0 else complement


def render_component(
    component: CounterComponentSpec,
    template: CounterTemplate,
    sequence: str,
    reference_date: DateLike,
    scope_key: str,
    complement: str,
) -> str:
    """Render one template component."""
    component_type = component.component_type
    length = component.length

    if component_type == ComponentType.CONSTANT:
        return component.constant or ""
    if component_type == ComponentType.YEAR:
        return format_year(length, reference_date)
    if component_type == ComponentType.MONTH:
        return format_month(length, reference_date)
    if component_type == ComponentType.WEEK:
        return format_week(reference_date)
    if component_type == ComponentType.DAY:
        return format_day(length, reference_date)
    if component_type in (ComponentType.COMPANY, ComponentType.SITE):
        return format_scope(template.chronological_control, length, scope_key)
    if component_type == ComponentType.SEQUENCE_NUMBER:
        return sequence
    if component_type == ComponentType.COMPLEMENT:
        return format_complement(length, complement)
    if component_type in UNSUPPORTED_COMPONENTS:
        raise UnsupportedComponentError(template.sequence_code, component_type)
    raise CounterTemplateError(
        f"Unknown component type {component_type!r} in counter '{template.sequence_code}'"
    )


def build_counter_string(
    sequence: str,
    template: CounterTemplate,
    reference_date: DateLike,
    scope_key: str,
    complement: str,
) -> str:
    """
    Assemble the document number for an issued sequence value.

    Args:
        sequence: Zero-padded sequence value from the sequence store
        template: Counter template
        reference_date: Date the document is numbered for
        scope_key: Resolved scope key (rendered by SITE/COMPANY components)
        complement: Caller complement

    Returns:
        The formatted document number. NUMERIC templates are normalized
        as an integer, which drops leading zeros from any component.

    Raises:
        UnsupportedComponentError: For FISCAL_YEAR, PERIOD and FORMULA components
        CounterTemplateError: If a NUMERIC template renders non-digit characters
    """
    value = "".join(
        render_component(component, template, sequence, reference_date, scope_key, complement)
        for component in template.components
    )

    if template.sequence_type == SequenceType.NUMERIC:
        if not (value.isascii() and value.isdigit()):
            raise CounterTemplateError(
                f"Numeric counter '{template.sequence_code}' rendered non-numeric value '{value}'"
            )
        value = str(int(value))

    return value
