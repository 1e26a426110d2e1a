# Test type: Unit Test
# Validation to be executed: Validates the per-year rule registry — slab
#   tables, category tax-free limits, year fallback and immutability.
# Command: pytest test/test_unit_tax_rules.py -v

"""Unit tests for bdtax.services.tax_rules module."""

import dataclasses

import pytest

from bdtax.models.schemas import TaxpayerCategory
from bdtax.services.tax_rules import (
    SUPPORTED_INCOME_YEARS,
    TAX_YEAR_CONFIGS,
    UNBOUNDED,
    TaxSlab,
    resolve_year_config,
    rules_year_for,
)


class TestRegistry:

    def test_supported_years(self):
        assert SUPPORTED_INCOME_YEARS == ("2023-2024", "2024-2025", "2025-2026")

    def test_every_supported_year_resolves(self):
        for year in SUPPORTED_INCOME_YEARS:
            applied, config = resolve_year_config(year)
            assert applied in TAX_YEAR_CONFIGS
            assert config is TAX_YEAR_CONFIGS[applied]

    def test_last_slab_is_unbounded(self):
        for config in TAX_YEAR_CONFIGS.values():
            assert config.slabs[-1].limit == UNBOUNDED
            assert all(not s.is_unbounded for s in config.slabs[:-1])

    def test_first_slab_is_tax_free(self):
        for config in TAX_YEAR_CONFIGS.values():
            assert config.slabs[0].rate == 0.0

    def test_every_category_has_a_limit(self):
        for config in TAX_YEAR_CONFIGS.values():
            for category in TaxpayerCategory:
                assert config.zero_rate_limit(category) > 0

    def test_exemption_caps(self):
        assert TAX_YEAR_CONFIGS["2024-2025"].standard_exemption_cap == 450_000
        assert TAX_YEAR_CONFIGS["2025-2026"].standard_exemption_cap == 500_000


class TestYearResolution:

    def test_2023_2024_uses_2024_2025_rules(self):
        assert rules_year_for("2023-2024") == "2024-2025"

    def test_known_year_maps_to_itself(self):
        assert rules_year_for("2025-2026") == "2025-2026"

    def test_unknown_year_falls_back(self):
        assert rules_year_for("2019-2020") == "2024-2025"


class TestCategorySlabs:

    @pytest.mark.parametrize(
        "year,category,limit",
        [
            ("2024-2025", TaxpayerCategory.MEN, 350_000),
            ("2024-2025", TaxpayerCategory.WOMEN, 400_000),
            ("2024-2025", TaxpayerCategory.DISABLED_OR_THIRD_GENDER, 475_000),
            ("2024-2025", TaxpayerCategory.FREEDOM_FIGHTER, 500_000),
            ("2025-2026", TaxpayerCategory.MEN, 375_000),
            ("2025-2026", TaxpayerCategory.WOMEN, 425_000),
            ("2025-2026", TaxpayerCategory.DISABLED_OR_THIRD_GENDER, 500_000),
            ("2025-2026", TaxpayerCategory.FREEDOM_FIGHTER, 525_000),
        ],
    )
    def test_first_slab_width(self, year, category, limit):
        slabs = TAX_YEAR_CONFIGS[year].slabs_for(category)
        assert slabs[0] == TaxSlab(limit, 0.0)

    def test_only_first_slab_changes(self):
        config = TAX_YEAR_CONFIGS["2025-2026"]
        men = config.slabs_for(TaxpayerCategory.MEN)
        women = config.slabs_for(TaxpayerCategory.WOMEN)
        assert men[1:] == women[1:]
        assert len(men) == len(config.slabs)


class TestImmutability:

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            TAX_YEAR_CONFIGS["2026-2027"] = TAX_YEAR_CONFIGS["2025-2026"]

    def test_config_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            TAX_YEAR_CONFIGS["2025-2026"].standard_exemption_cap = 0

    def test_category_limits_are_read_only(self):
        limits = TAX_YEAR_CONFIGS["2025-2026"].zero_rate_limits
        with pytest.raises(TypeError):
            limits[TaxpayerCategory.MEN] = 0
