"""Scope key resolution for sequence counters."""

from typing import Optional

from erp_counter.exceptions import CounterKeyError
from erp_counter.models.enums import DefinitionLevel
from erp_counter.models.sequence_counter import SCOPE_KEY_LENGTH
from erp_counter.utils.logger import logger


def resolve_scope(definition_level: int, site: Optional[str]) -> str:
    """
    Return the scope key partitioning a definition's counters.

    FOLDER-level counters are shared by every site. SITE-level counters use
    the site code as given (surrounding whitespace removed, case kept).

    COMPANY-level counters are not resolved to the site's legal company and
    currently behave like FOLDER-level ones.

    Raises:
        CounterKeyError: If a SITE-level site code is longer than a scope key
    """
    if definition_level == DefinitionLevel.SITE:
        scope_key = (site or "").strip()
        if len(scope_key) > SCOPE_KEY_LENGTH:
            raise CounterKeyError("site", scope_key, SCOPE_KEY_LENGTH)
        return scope_key
    if definition_level == DefinitionLevel.COMPANY:
        logger.debug("Company-level counter scoped at folder level")
        return ""
    return ""
