"""
Report aggregation tests: totals, employee matrix, checklist and warnings
"""
import pytest

from subsidy_engine.models import EmployeeStatus, Program, ReasonCode

PROGRAMS = [
    Program.YOUTH_JOB_LEAP,
    Program.SENIOR_CONTINUED_EMPLOYMENT,
    Program.SENIOR_EMPLOYMENT_SUPPORT,
]


@pytest.fixture
def report(service, non_capital_company, youth, senior, as_of):
    return service.calculate(non_capital_company, [youth, senior], PROGRAMS, as_of=as_of)


def _cell(row, program):
    return next(c for c in row.cells if c.program == program)


class TestTotals:

    def test_eligible_and_potential_totals_are_separate(self, report):
        assert report.total_eligible_amount == 12000000
        assert report.total_potential_amount == 14400000
        assert report.eligible_count == 1
        assert report.needs_review_count == 1

    def test_senior_support_excluded(self, report):
        assert [e.program for e in report.exclusions] == [Program.SENIOR_EMPLOYMENT_SUPPORT]
        assert report.exclusions[0].excluded_by == Program.SENIOR_CONTINUED_EMPLOYMENT


class TestEmployeeMatrix:

    def test_one_row_per_employee_in_catalog_column_order(self, report):
        assert [row.employee_id for row in report.employee_matrix] == ["youth-1", "senior-1"]
        for row in report.employee_matrix:
            assert [c.program for c in row.cells] == PROGRAMS

    def test_excluded_cell_carries_winner_and_no_amount(self, report):
        senior_row = report.employee_matrix[1]
        cell = _cell(senior_row, Program.SENIOR_EMPLOYMENT_SUPPORT)

        assert cell.excluded_by == Program.SENIOR_CONTINUED_EMPLOYMENT
        assert cell.amount == 0
        assert ReasonCode.DUPLICATE_PAYMENT_EXCLUDED in cell.reasons

    def test_row_totals(self, report):
        youth_row, senior_row = report.employee_matrix

        assert youth_row.is_youth
        assert youth_row.total_estimated_amount == 12000000
        assert senior_row.is_senior
        assert senior_row.total_estimated_amount == 14400000

    def test_failing_cell_lists_reasons(self, report):
        senior_row = report.employee_matrix[1]
        cell = _cell(senior_row, Program.YOUTH_JOB_LEAP)

        assert cell.status == EmployeeStatus.DOES_NOT_QUALIFY
        assert cell.reasons == [ReasonCode.OUTSIDE_AGE_BAND]


class TestChecklistAndWarnings:

    def test_checklist_covers_surviving_claimable_programs(self, report):
        programs = [item.program for item in report.application_checklist]

        assert programs == [Program.YOUTH_JOB_LEAP, Program.SENIOR_CONTINUED_EMPLOYMENT]
        assert all(item.required_documents for item in report.application_checklist)

    def test_unknown_salary_is_warned(self, report):
        codes = [(w.employee_id, w.code) for w in report.data_quality_warnings]

        assert codes == [("youth-1", ReasonCode.SALARY_UNKNOWN)]


class TestSupportCapInMatrix:

    def test_matrix_pays_only_capped_slots(self, service, non_capital_company, make_employee, as_of):
        roster = [make_employee(f"emp-{i}") for i in range(7)]

        report = service.calculate(non_capital_company, roster, [Program.REGULAR_CONVERSION], as_of=as_of)

        result = report.result_for(Program.REGULAR_CONVERSION)
        cells = [_cell(row, Program.REGULAR_CONVERSION) for row in report.employee_matrix]
        assert sum(c.amount for c in cells) == result.total_amount == 3 * 4800000
        assert [c.amount for c in cells[:3]] == [4800000] * 3
        assert [c.beyond_support_cap for c in cells] == [False] * 3 + [True] * 4
        assert all(c.amount == 0 for c in cells[3:])
