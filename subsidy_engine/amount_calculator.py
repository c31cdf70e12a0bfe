"""
Subsidy amount arithmetic
"""
import logging

from .models.company import CompanyProfile, Region
from .models.program import ProgramParameters
from .models.result import AmountBreakdown

logger = logging.getLogger(__name__)


class AmountCalculator:
    """Computes per-person and total amounts from catalog parameters"""

    @staticmethod
    def compute_amount(
        parameters: ProgramParameters,
        qualifying_count: int,
        company: CompanyProfile
    ) -> AmountBreakdown:
        """
        Compute the amount a program pays

        Args:
            parameters: Resolved catalog parameters for the program
            qualifying_count: Employees (or company claim units) being paid for
            company: Company profile, for region-dependent rates and incentives

        Returns:
            AmountBreakdown with integer KRW values
        """
        if qualifying_count < 1:
            raise ValueError(
                f"{parameters.program.value}: amount requested for an empty qualifying set"
            )

        definition = parameters.definition
        period_amount = definition.period_amount[company.region]
        business_subsidy = period_amount * definition.periods

        incentive = 0
        if company.region == Region.NON_CAPITAL:
            incentive = definition.non_capital_incentive.get(company.non_capital_tier, 0)

        per_person = business_subsidy + incentive
        total = per_person * qualifying_count

        logger.debug(
            f"{parameters.program.value}: {period_amount} x {definition.periods} + {incentive} "
            f"= {per_person} per person, x {qualifying_count} = {total}"
        )

        return AmountBreakdown(
            payment_period=definition.payment_period,
            period_amount=period_amount,
            periods=definition.periods,
            total_months=definition.periods * definition.payment_period.months,
            business_subsidy_per_person=business_subsidy,
            incentive_per_person=incentive,
            amount_per_person=per_person,
            qualifying_count=qualifying_count,
            total_amount=total
        )


# Global amount calculator instance
amount_calculator = AmountCalculator()
