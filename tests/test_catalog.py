"""
Program catalog loading and parameter resolution tests
"""
import json
from datetime import date

import pytest

from subsidy_engine.catalog import CatalogConfigurationError, ProgramCatalog, load_catalog
from subsidy_engine.models import PaymentPeriod, Program, ProgramBasis, Region


class TestBundledCatalog:

    def test_declares_every_program_in_order(self, catalog):
        assert catalog.version == "2026"
        assert catalog.programs == list(Program)

    def test_exclusive_pairs(self, catalog):
        pairs = [pair.programs for pair in catalog.exclusive_pairs]

        assert pairs == [
            (Program.YOUTH_JOB_LEAP, Program.EMPLOYMENT_PROMOTION),
            (Program.SENIOR_CONTINUED_EMPLOYMENT, Program.SENIOR_EMPLOYMENT_SUPPORT),
        ]

    def test_senior_continued_employment_rates(self, catalog):
        definition = catalog.definition(Program.SENIOR_CONTINUED_EMPLOYMENT)

        assert definition.payment_period == PaymentPeriod.QUARTERLY
        assert definition.period_amount[Region.CAPITAL] == 900000
        assert definition.period_amount[Region.NON_CAPITAL] == 1200000
        assert definition.periods == 12

    def test_company_level_programs(self, catalog):
        assert catalog.definition(Program.PARENTAL_EMPLOYMENT_STABILITY).basis == ProgramBasis.COMPANY
        assert catalog.definition(Program.EMPLOYMENT_RETENTION).basis == ProgramBasis.COMPANY


class TestProgramParameters:

    @pytest.mark.parametrize("on,expected", [
        (date(2025, 12, 31), 1210000),
        (date(2026, 1, 1), 1240000),
        (date(2026, 6, 30), 1240000),
    ])
    def test_wage_floor_depends_on_date(self, catalog, on, expected):
        parameters = catalog.get_program_parameters(Program.EMPLOYMENT_PROMOTION, on)

        assert parameters.wage_floor == expected

    def test_regular_conversion_floor_is_flat(self, catalog):
        parameters = catalog.get_program_parameters(Program.REGULAR_CONVERSION, date(2024, 1, 1))

        assert parameters.wage_floor == 1240000

    def test_programs_without_floor(self, catalog):
        parameters = catalog.get_program_parameters(Program.YOUTH_JOB_LEAP, date(2026, 3, 1))

        assert parameters.wage_floor is None

    def test_accepts_string_identifier(self, catalog):
        parameters = catalog.get_program_parameters("SENIOR_EMPLOYMENT_SUPPORT", date(2026, 3, 1))

        assert parameters.program == Program.SENIOR_EMPLOYMENT_SUPPORT

    def test_unknown_program(self, catalog):
        with pytest.raises(CatalogConfigurationError, match="Unknown program identifier"):
            catalog.get_program_parameters("HOUSING_GRANT", date(2026, 3, 1))


class TestCatalogErrors:

    @pytest.fixture
    def document(self, catalog):
        return json.loads(catalog.data.model_dump_json())

    def test_malformed_json(self):
        with pytest.raises(CatalogConfigurationError):
            ProgramCatalog.from_json("{not json")

    def test_missing_program(self, document):
        document["programs"] = document["programs"][:-1]

        with pytest.raises(CatalogConfigurationError, match="EMPLOYMENT_RETENTION"):
            ProgramCatalog.from_json(json.dumps(document))

    def test_missing_regional_amount(self, document):
        del document["programs"][0]["period_amount"]["CAPITAL"]

        with pytest.raises(CatalogConfigurationError):
            ProgramCatalog.from_json(json.dumps(document))

    @pytest.mark.parametrize("field", ["small_roster_cap", "ratio_percent"])
    def test_support_cap_must_allow_claims(self, document, field):
        conversion = next(p for p in document["programs"] if p["program"] == "REGULAR_CONVERSION")
        conversion["support_cap"][field] = 0

        with pytest.raises(CatalogConfigurationError):
            ProgramCatalog.from_json(json.dumps(document))

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogConfigurationError):
            load_catalog(tmp_path / "missing.json")

    def test_replacement_catalog_file(self, document, tmp_path):
        document["version"] = "2027"
        path = tmp_path / "catalog_2027.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        assert load_catalog(path).version == "2027"
