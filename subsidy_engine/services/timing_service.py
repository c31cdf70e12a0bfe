"""
Advice on when to start a senior continued-employment claim window
"""
import logging
from datetime import date
from typing import List, Optional, Sequence

from ..catalog import ProgramCatalog, get_catalog
from ..models.company import CompanyProfile, Employee
from ..models.program import Program
from ..models.result import EmployeeTurning60, MonthlyEligibility, SeniorTimingRecommendation
from ..utils.dates import add_months, birthday_on_or_after, calculate_age, months_between
from ..utils.validators import format_krw

logger = logging.getLogger(__name__)

# Start months considered, counted from the evaluation month
LOOKAHEAD_MONTHS = 24
# Horizon for listing employees about to reach the senior age
TURNING_60_HORIZON_MONTHS = 36


def analyze_senior_timing(
    company: CompanyProfile,
    employees: Sequence[Employee],
    as_of: date,
    catalog: Optional[ProgramCatalog] = None
) -> Optional[SeniorTimingRecommendation]:
    """
    Find the claim start month that maximizes the senior continued-employment payout

    Every quarter of the window pays the region's quarterly rate for each
    current employee who has reached the senior age by the quarter's start.

    Args:
        company: Company profile, for the regional rate
        employees: Employee roster
        as_of: Evaluation date; the first candidate start
        catalog: Catalog to read rates from (defaults to the process catalog)

    Returns:
        SeniorTimingRecommendation, or None for an empty roster
    """
    current = [e for e in employees if e.is_current_employee and
               (e.termination_date is None or e.termination_date > as_of)]
    if not current:
        return None

    catalog = catalog or get_catalog()
    definition = catalog.definition(Program.SENIOR_CONTINUED_EMPLOYMENT)
    senior_age = catalog.demographics.senior_min_age
    quarterly_rate = definition.period_amount[company.region]
    quarters = definition.periods
    months_per_period = definition.payment_period.months

    turns_senior = {e.id: birthday_on_or_after(e.birth_date, senior_age) for e in current}

    def eligible_on(day: date) -> int:
        return sum(1 for reached in turns_senior.values() if reached <= day)

    def window_total(start: date) -> int:
        return sum(
            eligible_on(add_months(start, q * months_per_period)) * quarterly_rate
            for q in range(quarters)
        )

    month_start = as_of.replace(day=1)
    timeline: List[MonthlyEligibility] = []
    for offset in range(LOOKAHEAD_MONTHS + 1):
        start = as_of if offset == 0 else add_months(month_start, offset)
        count = eligible_on(start)
        timeline.append(MonthlyEligibility(
            month=f"{start.year}-{start.month:02d}",
            start_date=start,
            eligible_count=count,
            quarterly_amount=count * quarterly_rate,
            window_total=window_total(start)
        ))

    now = timeline[0]
    best = now
    for entry in timeline[1:]:
        if entry.window_total > best.window_total:
            best = entry

    turning = []
    for employee in current:
        reached = turns_senior[employee.id]
        if reached <= as_of:
            continue
        months_until = months_between(as_of, reached)
        if months_until <= TURNING_60_HORIZON_MONTHS:
            turning.append(EmployeeTurning60(
                employee_id=employee.id,
                name=employee.name,
                current_age=calculate_age(employee.birth_date, as_of),
                turns_60_on=reached,
                months_until_60=months_until
            ))
    turning.sort(key=lambda t: t.turns_60_on)

    additional = best.window_total - now.window_total
    if additional <= 0:
        recommendation = (
            f"Start now: {now.eligible_count} employee(s) aged {senior_age}+ qualify, "
            f"{format_krw(now.window_total)} over {quarters} quarters"
        )
    else:
        recommendation = (
            f"Start on {best.start_date.isoformat()}: {best.eligible_count} employee(s) will qualify, "
            f"{format_krw(additional)} more than starting now"
        )

    logger.info(
        f"Senior timing for {company.legal_name}: best start {best.start_date.isoformat()}, "
        f"total {best.window_total} vs {now.window_total} now"
    )

    return SeniorTimingRecommendation(
        as_of=as_of,
        quarterly_rate=quarterly_rate,
        optimal_start_date=best.start_date,
        optimal_end_date=add_months(best.start_date, quarters * months_per_period),
        current_eligible_count=now.eligible_count,
        optimal_eligible_count=best.eligible_count,
        current_total_amount=now.window_total,
        optimal_total_amount=best.window_total,
        additional_amount_if_wait=additional,
        employees_turning_60=turning,
        monthly_timeline=timeline,
        recommendation=recommendation
    )
