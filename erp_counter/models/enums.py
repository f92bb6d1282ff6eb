"""Enum types for counter definitions.

Values are the integer codes stored in the legacy ERP tables, so they are
kept as IntEnum and persisted in Integer columns.
"""

import enum


class ComponentType(enum.IntEnum):
    """Component of a counter template.

    A stored code of 0 ends the component list; it is not a member.
    """

    CONSTANT = 1
    YEAR = 2
    MONTH = 3
    WEEK = 4
    DAY = 5
    COMPANY = 6
    SITE = 7
    SEQUENCE_NUMBER = 8
    COMPLEMENT = 9
    FISCAL_YEAR = 10
    PERIOD = 11
    FORMULA = 12


# Stored component code that terminates a template
END_OF_COMPONENTS = 0

# Maximum number of components in a template
MAX_COMPONENTS = 10


class ResetPolicy(enum.IntEnum):
    """When a counter restarts from 1."""

    NEVER = 1
    ANNUAL = 2
    MONTHLY = 3
    FISCAL_YEAR = 4
    PERIOD = 5
    DECADE = 99  # legacy


class DefinitionLevel(enum.IntEnum):
    """How counters of a definition are partitioned."""

    FOLDER = 1
    COMPANY = 2
    SITE = 3


class SequenceType(enum.IntEnum):
    """Whether the rendered number is kept as text or normalized as an integer."""

    ALPHANUMERIC = 1
    NUMERIC = 2


class NoYes(enum.IntEnum):
    """Legacy boolean flag."""

    NO = 1
    YES = 2
