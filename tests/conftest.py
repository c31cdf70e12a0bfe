"""
Shared fixtures for the subsidy engine tests
"""
from datetime import date

import pytest

from subsidy_engine.catalog import load_catalog
from subsidy_engine.models import CompanyProfile, Employee, NonCapitalTier, Region, WorkType
from subsidy_engine.rules_evaluator import RulesEvaluator
from subsidy_engine.services import EligibilityService

AS_OF = date(2026, 3, 1)


@pytest.fixture(scope="session")
def catalog():
    return load_catalog()


@pytest.fixture
def rules(catalog):
    return RulesEvaluator(catalog)


@pytest.fixture
def service(catalog):
    return EligibilityService(catalog)


@pytest.fixture
def as_of():
    return AS_OF


def _company(region, **overrides):
    fields = {
        "legal_name": "Hanbit Logistics Co., Ltd.",
        "registration_number": "123-45-67890",
        "region": region,
        "is_small_business": True,
        "non_capital_tier": NonCapitalTier.GENERAL,
    }
    fields.update(overrides)
    return CompanyProfile(**fields)


@pytest.fixture
def non_capital_company():
    return _company(Region.NON_CAPITAL)


@pytest.fixture
def capital_company():
    return _company(Region.CAPITAL)


@pytest.fixture
def make_company():
    return _company


@pytest.fixture
def make_employee():
    """Factory for insured full-time employees; override any field"""
    def _make(employee_id="emp-001", **overrides):
        fields = {
            "id": employee_id,
            "name": f"Employee {employee_id}",
            "birth_date": date(2000, 1, 1),
            "hire_date": date(2025, 1, 2),
            "monthly_salary": 2500000,
            "work_type": WorkType.FULL_TIME,
            "has_employment_insurance": True,
        }
        fields.update(overrides)
        return Employee(**fields)
    return _make


@pytest.fixture
def youth(make_employee):
    return make_employee("youth-1", birth_date=date(2003, 5, 14), monthly_salary=0)


@pytest.fixture
def senior(make_employee):
    return make_employee("senior-1", birth_date=date(1963, 4, 1), hire_date=date(2020, 6, 1))
