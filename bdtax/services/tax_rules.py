"""Bangladesh personal income-tax rule tables, per income year.

Income Year 2024-2025 (Assessment Year 2025-2026), also applied to 2023-2024:
    First ৳3,50,000          → 0 %
    Next  ৳1,00,000          → 5 %
    Next  ৳3,00,000          → 10 %
    Next  ৳4,00,000          → 15 %
    Next  ৳5,00,000          → 20 %
    Balance                  → 25 %

Income Year 2025-2026 (Assessment Year 2026-2027):
    First ৳3,75,000          → 0 %
    Next  ৳3,00,000          → 10 %
    Next  ৳4,00,000          → 15 %
    Next  ৳5,00,000          → 20 %
    Next  ৳20,00,000         → 25 %
    Balance                  → 30 %

The width of the first (zero-rate) slab depends on the taxpayer category;
all later slabs are the same for everyone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from bdtax.config import settings
from bdtax.models.schemas import TaxpayerCategory

logger = logging.getLogger(__name__)

UNBOUNDED = float("inf")


@dataclass(frozen=True)
class TaxSlab:
    limit: float   # width of the band; UNBOUNDED for the balance
    rate: float    # e.g. 0.10 for 10%

    @property
    def is_unbounded(self) -> bool:
        return self.limit == UNBOUNDED


@dataclass(frozen=True)
class TaxYearConfig:
    slabs: Tuple[TaxSlab, ...]
    standard_exemption_cap: float
    zero_rate_limits: Mapping[TaxpayerCategory, float]

    def zero_rate_limit(self, category: TaxpayerCategory) -> float:
        """Upper bound of the tax-free slab, i.e. the minimum-tax threshold."""
        return self.zero_rate_limits[category]

    def slabs_for(self, category: TaxpayerCategory) -> Tuple[TaxSlab, ...]:
        """Slabs with the category's tax-free width substituted into slab 1."""
        first, rest = self.slabs[0], self.slabs[1:]
        if first.rate == 0.0:
            first = TaxSlab(limit=self.zero_rate_limit(category), rate=0.0)
        return (first,) + rest


_RULES_2024_2025 = TaxYearConfig(
    slabs=(
        TaxSlab(350_000, 0.00),
        TaxSlab(100_000, 0.05),
        TaxSlab(300_000, 0.10),
        TaxSlab(400_000, 0.15),
        TaxSlab(500_000, 0.20),
        TaxSlab(UNBOUNDED, 0.25),
    ),
    standard_exemption_cap=450_000,
    zero_rate_limits=MappingProxyType({
        TaxpayerCategory.MEN: 350_000,
        TaxpayerCategory.WOMEN: 400_000,
        TaxpayerCategory.DISABLED_OR_THIRD_GENDER: 475_000,
        TaxpayerCategory.FREEDOM_FIGHTER: 500_000,
    }),
)

_RULES_2025_2026 = TaxYearConfig(
    slabs=(
        TaxSlab(375_000, 0.00),
        TaxSlab(300_000, 0.10),
        TaxSlab(400_000, 0.15),
        TaxSlab(500_000, 0.20),
        TaxSlab(2_000_000, 0.25),
        TaxSlab(UNBOUNDED, 0.30),
    ),
    standard_exemption_cap=500_000,
    zero_rate_limits=MappingProxyType({
        TaxpayerCategory.MEN: 375_000,
        TaxpayerCategory.WOMEN: 425_000,
        TaxpayerCategory.DISABLED_OR_THIRD_GENDER: 500_000,
        TaxpayerCategory.FREEDOM_FIGHTER: 525_000,
    }),
)

# Income years with a rule table of their own.
TAX_YEAR_CONFIGS: Mapping[str, TaxYearConfig] = MappingProxyType({
    "2024-2025": _RULES_2024_2025,
    "2025-2026": _RULES_2025_2026,
})

# Selectable income years and the table each one is taxed under.
_YEAR_ALIASES: Mapping[str, str] = MappingProxyType({
    "2023-2024": "2024-2025",
})

SUPPORTED_INCOME_YEARS: Tuple[str, ...] = settings.SUPPORTED_INCOME_YEARS


def rules_year_for(income_year: str) -> str:
    """Return the key of the rule table applied to *income_year*.

    Unknown years fall back to ``settings.FALLBACK_INCOME_YEAR`` rather
    than failing.
    """
    key = _YEAR_ALIASES.get(income_year, income_year)
    if key in TAX_YEAR_CONFIGS:
        return key
    logger.info(
        "No rule table for income year %r — applying %s rules.",
        income_year,
        settings.FALLBACK_INCOME_YEAR,
    )
    return settings.FALLBACK_INCOME_YEAR


def resolve_year_config(income_year: str) -> Tuple[str, TaxYearConfig]:
    """Return ``(applied_year, config)`` for *income_year*."""
    applied = rules_year_for(income_year)
    return applied, TAX_YEAR_CONFIGS[applied]
