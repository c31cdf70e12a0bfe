"""
Amount arithmetic tests
"""
from datetime import date

import pytest

from subsidy_engine.amount_calculator import amount_calculator
from subsidy_engine.models import NonCapitalTier, Program, Region


@pytest.fixture
def youth_parameters(catalog):
    return catalog.get_program_parameters(Program.YOUTH_JOB_LEAP, date(2026, 3, 1))


class TestComputeAmount:

    @pytest.mark.parametrize("tier,incentive", [
        (NonCapitalTier.GENERAL, 4800000),
        (NonCapitalTier.PREFERRED, 6000000),
        (NonCapitalTier.SPECIAL, 7200000),
    ])
    def test_non_capital_incentive_by_tier(self, youth_parameters, make_company, tier, incentive):
        company = make_company(Region.NON_CAPITAL, non_capital_tier=tier)

        amount = amount_calculator.compute_amount(youth_parameters, 2, company)

        assert amount.business_subsidy_per_person == 7200000
        assert amount.incentive_per_person == incentive
        assert amount.amount_per_person == 7200000 + incentive
        assert amount.total_amount == 2 * (7200000 + incentive)

    def test_capital_region_has_no_incentive(self, youth_parameters, make_company):
        company = make_company(Region.CAPITAL, non_capital_tier=NonCapitalTier.SPECIAL)

        amount = amount_calculator.compute_amount(youth_parameters, 1, company)

        assert amount.incentive_per_person == 0
        assert amount.total_amount == 7200000

    def test_quarterly_program_months(self, catalog, non_capital_company):
        parameters = catalog.get_program_parameters(Program.SENIOR_EMPLOYMENT_SUPPORT, date(2026, 3, 1))

        amount = amount_calculator.compute_amount(parameters, 3, non_capital_company)

        assert amount.total_months == 24
        assert amount.total_amount == 3 * 2400000

    def test_empty_qualifying_set_is_refused(self, youth_parameters, non_capital_company):
        with pytest.raises(ValueError):
            amount_calculator.compute_amount(youth_parameters, 0, non_capital_company)
