"""Reset-window resolution for sequence counters."""

from datetime import date, datetime
from typing import Union

from erp_counter.models.enums import ResetPolicy


def resolve_period(reset_policy: int, reference_date: Union[date, datetime]) -> int:
    """
    Return the period key a date falls into under a reset policy.

    All numbers issued in the same period share one counter:
    - NEVER   -> 0
    - ANNUAL  -> two-digit year (2024 -> 24)
    - MONTHLY -> 100 * two-digit year + month (March 2024 -> 2403)
    - DECADE  -> last digit of the year (2024 -> 4)

    Fiscal-year and period resets, and unknown codes, map to 0.
    """
    if reset_policy == ResetPolicy.NEVER:
        return 0
    if reset_policy == ResetPolicy.ANNUAL:
        return reference_date.year % 100
    if reset_policy == ResetPolicy.MONTHLY:
        return 100 * (reference_date.year % 100) + reference_date.month
    if reset_policy == ResetPolicy.DECADE:
        return reference_date.year % 10
    return 0
