"""
Roster builder tests: merging extraction records by name
"""
from datetime import date

from subsidy_engine.models import (
    EmploymentContractEntry,
    InsuranceListEntry,
    ReasonCode,
    WageLedgerEntry,
    WarningSeverity,
    WorkType
)
from subsidy_engine.services import build_roster

AS_OF = date(2026, 3, 1)


class TestBuildRoster:

    def test_ledger_only_assumes_insurance_for_full_time_and_contract(self):
        ledger = [
            WageLedgerEntry(name="Kim Minji", birth_date=date(2001, 2, 3), monthly_wage=2600000,
                            work_type=WorkType.FULL_TIME),
            WageLedgerEntry(name="Lee Seojun", birth_date=date(1999, 7, 8), work_type=WorkType.CONTRACT),
            WageLedgerEntry(name="Choi Yuna", birth_date=date(2004, 1, 9), work_type=WorkType.PART_TIME),
        ]

        result = build_roster(wage_ledger=ledger, as_of=AS_OF)

        insured = {e.name: e.has_employment_insurance for e in result.employees}
        assert insured == {"Kim Minji": True, "Lee Seojun": True, "Choi Yuna": False}
        assert [e.id for e in result.employees] == ["emp-001", "emp-002", "emp-003"]

    def test_insurance_list_is_authoritative(self):
        ledger = [WageLedgerEntry(name="Kim Minji", birth_date=date(2001, 2, 3), work_type=WorkType.FULL_TIME)]
        insurance = [InsuranceListEntry(name="kim  minji", employment_insurance=False,
                                        enrollment_date=date(2025, 5, 1))]

        result = build_roster(wage_ledger=ledger, insurance_list=insurance, as_of=AS_OF)

        employee = result.employees[0]
        assert employee.name == "Kim Minji"
        assert employee.has_employment_insurance is False
        assert employee.hire_date == date(2025, 5, 1)

    def test_lost_coverage_marks_former_employee(self):
        ledger = [WageLedgerEntry(name="Park Jiho", birth_date=date(1963, 4, 1), hire_date=date(2020, 6, 1))]
        insurance = [InsuranceListEntry(name="Park Jiho", employment_insurance=True, loss_date=date(2026, 1, 31))]

        result = build_roster(wage_ledger=ledger, insurance_list=insurance, as_of=AS_OF)

        employee = result.employees[0]
        assert employee.is_current_employee is False
        assert employee.termination_date == date(2026, 1, 31)

    def test_contracts_only_fill_gaps(self):
        ledger = [WageLedgerEntry(name="Kim Minji", birth_date=date(2001, 2, 3), monthly_wage=2600000)]
        contracts = [
            EmploymentContractEntry(employee_name="Kim Minji", contract_start_date=date(2025, 9, 1),
                                    monthly_salary=2000000, work_type=WorkType.CONTRACT),
            EmploymentContractEntry(employee_name="Jung Hana", birth_date=date(1995, 10, 10),
                                    contract_start_date=date(2024, 3, 4), monthly_salary=2300000),
        ]

        result = build_roster(wage_ledger=ledger, contracts=contracts, as_of=AS_OF)

        minji, hana = result.employees
        assert minji.monthly_salary == 2600000
        assert minji.hire_date == date(2025, 9, 1)
        assert minji.work_type == WorkType.CONTRACT
        assert hana.hire_date == date(2024, 3, 4)
        assert hana.has_employment_insurance is True

    def test_missing_birth_date_is_reported_not_guessed(self):
        ledger = [
            WageLedgerEntry(name="Kim Minji", birth_date=date(2001, 2, 3)),
            WageLedgerEntry(name="Unknown Person"),
        ]

        result = build_roster(wage_ledger=ledger, as_of=AS_OF)

        assert [e.name for e in result.employees] == ["Kim Minji"]
        assert len(result.warnings) == 1
        assert result.warnings[0].code == ReasonCode.MISSING_BIRTH_DATE
        assert "Unknown Person" in result.warnings[0].message

    def test_contradicting_dates_are_reported_not_raised(self):
        ledger = [
            WageLedgerEntry(name="Kim Minji", birth_date=date(2001, 2, 3), hire_date=date(2025, 6, 1)),
            WageLedgerEntry(name="Lee Seojun", birth_date=date(1999, 7, 8), hire_date=date(2024, 3, 4)),
        ]
        insurance = [
            InsuranceListEntry(name="Kim Minji", employment_insurance=True, loss_date=date(2025, 1, 1)),
            InsuranceListEntry(name="Lee Seojun", employment_insurance=True),
        ]

        result = build_roster(wage_ledger=ledger, insurance_list=insurance, as_of=AS_OF)

        assert [e.name for e in result.employees] == ["Lee Seojun"]
        assert result.employees[0].id == "emp-001"
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.code == ReasonCode.CONFLICTING_RECORDS
        assert warning.severity == WarningSeverity.HIGH
        assert "Kim Minji" in warning.message

    def test_empty_inputs(self):
        result = build_roster(as_of=AS_OF)

        assert result.employees == []
        assert result.warnings == []
