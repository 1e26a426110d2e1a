"""What-if helpers built on top of the tax calculation.

Effective tax rate curve:
    For each annual income on a fixed grid, rate = final tax ÷ income × 100.

Investment allowance estimate:
    A quick figure to pre-fill the investment field before the full
    calculation runs:  min(20 % × (income − min(cap, income ÷ 3)), ৳1 crore).
"""

from __future__ import annotations

from typing import List, Optional

from bdtax.config import settings
from bdtax.models.schemas import EffectiveRatePoint, TaxpayerCategory
from bdtax.services.tax_rules import resolve_year_config
from bdtax.services.tax_service import calculate_allowable_investment, calculate_bd_tax
from bdtax.utils.helpers import round_currency


def _income_grid() -> List[float]:
    return [
        float(income)
        for income in range(
            settings.CURVE_MIN_INCOME,
            settings.CURVE_MAX_INCOME + 1,
            settings.CURVE_STEP,
        )
    ]


def effective_tax_rate(
    annual_income: float,
    income_year: str,
    category: TaxpayerCategory,
    max_investment: bool = False,
) -> float:
    """Final tax as a percentage of *annual_income* (2 dp).

    With *max_investment* the taxpayer is assumed to invest 25 % of income,
    capped at the year's standard-exemption ceiling.
    """
    if annual_income <= 0:
        return 0.0

    investment = 0.0
    if max_investment:
        _, config = resolve_year_config(income_year)
        investment = min(
            annual_income * settings.CURVE_INVESTMENT_FRACTION,
            config.standard_exemption_cap,
        )

    result = calculate_bd_tax(
        monthly_gross_salary=annual_income / 12,
        annual_bonuses=0,
        include_investments=max_investment,
        total_annual_investment=investment,
        income_year=income_year,
        category=category,
    )
    return round_currency(result.finalTaxDue / annual_income * 100)


def effective_tax_rate_curve(
    income_year: str,
    category: TaxpayerCategory = TaxpayerCategory.MEN,
    max_investment: bool = False,
    user_gross_income: Optional[float] = None,
) -> List[EffectiveRatePoint]:
    """Effective rate across the income grid, flagging the caller's own income.

    If *user_gross_income* is not a grid point it is inserted in order.
    """
    points = [
        EffectiveRatePoint(
            annualIncome=income,
            effectiveRate=effective_tax_rate(income, income_year, category, max_investment),
            isUser=user_gross_income is not None and income == user_gross_income,
        )
        for income in _income_grid()
    ]

    if user_gross_income and not any(p.isUser for p in points):
        points.append(
            EffectiveRatePoint(
                annualIncome=user_gross_income,
                effectiveRate=effective_tax_rate(
                    user_gross_income, income_year, category, max_investment
                ),
                isUser=True,
            )
        )
        points.sort(key=lambda p: p.annualIncome)

    return points


def estimate_investment_allowance(annual_income: float, income_year: str) -> int:
    """Suggested investment for the full rebate, before the exact calculation.

    The exemption is not rounded here, so the figure can differ from the
    calculation's ``allowableInvestmentLimit`` by a taka.
    """
    if annual_income <= 0:
        return 0
    _, config = resolve_year_config(income_year)
    exemption = min(
        config.standard_exemption_cap,
        annual_income / settings.STANDARD_EXEMPTION_DIVISOR,
    )
    preliminary_taxable = max(0.0, annual_income - exemption)
    return calculate_allowable_investment(preliminary_taxable)
