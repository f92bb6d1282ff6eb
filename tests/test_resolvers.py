"""Tests for period and scope resolution."""

import pytest
from datetime import date, datetime

from erp_counter.exceptions import CounterKeyError
from erp_counter.models.enums import DefinitionLevel, ResetPolicy
from erp_counter.services.period_resolver import resolve_period
from erp_counter.services.scope_resolver import resolve_scope


class TestResolvePeriod:
    """Reset policy to period key."""

    def test_never_is_always_zero(self):
        assert resolve_period(ResetPolicy.NEVER, date(2024, 3, 15)) == 0
        assert resolve_period(ResetPolicy.NEVER, date(1999, 12, 31)) == 0

    def test_annual_uses_two_digit_year(self):
        assert resolve_period(ResetPolicy.ANNUAL, date(2024, 3, 15)) == 24
        assert resolve_period(ResetPolicy.ANNUAL, date(2000, 1, 1)) == 0

    def test_monthly_combines_year_and_month(self):
        assert resolve_period(ResetPolicy.MONTHLY, date(2024, 3, 15)) == 2403
        assert resolve_period(ResetPolicy.MONTHLY, date(2025, 12, 1)) == 2512

    def test_legacy_decade_code(self):
        assert resolve_period(99, date(2024, 3, 15)) == 4
        assert resolve_period(ResetPolicy.DECADE, date(2030, 6, 1)) == 0

    @pytest.mark.parametrize("policy", [ResetPolicy.FISCAL_YEAR, ResetPolicy.PERIOD, 0, 42])
    def test_other_policies_default_to_zero(self, policy):
        assert resolve_period(policy, date(2024, 3, 15)) == 0

    def test_accepts_datetime(self):
        assert resolve_period(ResetPolicy.MONTHLY, datetime(2024, 11, 5, 23, 59)) == 2411

    def test_year_boundary_changes_annual_period(self):
        assert resolve_period(ResetPolicy.ANNUAL, date(2024, 12, 31)) != resolve_period(
            ResetPolicy.ANNUAL, date(2025, 1, 1)
        )


class TestResolveScope:
    """Definition level to scope key."""

    def test_folder_level_is_empty(self):
        assert resolve_scope(DefinitionLevel.FOLDER, "PA1") == ""

    def test_company_level_is_empty(self):
        assert resolve_scope(DefinitionLevel.COMPANY, "PA1") == ""

    def test_site_level_uses_site(self):
        assert resolve_scope(DefinitionLevel.SITE, "PA1") == "PA1"

    def test_site_is_trimmed_but_case_is_kept(self):
        assert resolve_scope(DefinitionLevel.SITE, "  pa1 ") == "pa1"

    def test_missing_site(self):
        assert resolve_scope(DefinitionLevel.SITE, None) == ""

    def test_unknown_level_is_empty(self):
        assert resolve_scope(7, "PA1") == ""

    def test_site_longer_than_scope_key(self):
        with pytest.raises(CounterKeyError) as exc_info:
            resolve_scope(DefinitionLevel.SITE, "WAREHOUSE-NORTH")

        assert exc_info.value.field == "site"
        assert exc_info.value.max_length == 10

    def test_long_site_ignored_at_folder_level(self):
        assert resolve_scope(DefinitionLevel.FOLDER, "WAREHOUSE-NORTH") == ""
