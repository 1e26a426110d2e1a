"""Bangladesh personal income-tax calculation.

Pipeline for one calculation:
    1. Total income       = monthly salary × 12 + bonuses
    2. Standard exemption = min(year cap, total ÷ 3)           (rounded up)
    3. Taxable income     = max(0, total − exemption)
    4. Gross tax          = Σ per-slab tax                     (each rounded up)
    5. Investment rebate  = 15 % × min(investment, 20 % of taxable, ৳1 crore)
    6. Net tax            = gross tax − rebate
    7. Minimum tax        = ৳5,000 once taxable income exceeds the tax-free slab

Every amount due is rounded UP to a whole taka.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple, Union

from bdtax.config import settings
from bdtax.models.schemas import TaxCalculationResult, TaxpayerCategory, TaxSlabDetail
from bdtax.services.tax_rules import TaxSlab, resolve_year_config
from bdtax.utils.helpers import ceil_currency, coerce_amount, format_currency, round_currency


class InvalidTaxInputError(ValueError):
    """Raised when an amount or category cannot be taxed (e.g. negative salary)."""


def _non_negative(name: str, value: Optional[float]) -> float:
    amount = coerce_amount(value)
    if not math.isfinite(amount):
        raise InvalidTaxInputError(f"{name} must be a finite amount, got {amount}")
    if amount < 0:
        raise InvalidTaxInputError(f"{name} must not be negative, got {amount}")
    return amount


def _to_category(category: Union[TaxpayerCategory, str, None]) -> TaxpayerCategory:
    if category is None:
        return TaxpayerCategory.MEN
    try:
        return TaxpayerCategory(category)
    except ValueError:
        raise InvalidTaxInputError(f"Unknown taxpayer category: {category!r}") from None


# ── Building blocks ───────────────────────────────────────────────────────

def calculate_standard_exemption(total_annual_income: float, cap: float) -> int:
    """Exemption = min(cap, ⅓ of total income), rounded up."""
    if total_annual_income <= 0:
        return 0
    return ceil_currency(
        min(cap, total_annual_income / settings.STANDARD_EXEMPTION_DIVISOR)
    )


def _slab_description(slab: TaxSlab, slab_start: float, is_first_zero: bool) -> str:
    if slab.is_unbounded:
        return f"Above {format_currency(slab_start, False)}"
    if is_first_zero:
        return f"Up to {format_currency(slab.limit, False)}"
    return (
        f"On next {format_currency(slab.limit, False)} "
        f"(from {format_currency(slab_start + 1, False)} "
        f"to {format_currency(slab_start + slab.limit, False)})"
    )


def calculate_slab_tax(
    taxable_income: float,
    slabs: Tuple[TaxSlab, ...],
) -> Tuple[int, List[TaxSlabDetail]]:
    """Walk the slabs low → high and tax the income falling into each.

    Returns ``(gross_tax, breakdown)``; only slabs that received income
    appear in the breakdown.
    """
    remaining = taxable_income
    slab_start = 0.0
    gross_tax = 0
    breakdown: list[TaxSlabDetail] = []

    for slab in slabs:
        if remaining <= 0:
            break

        in_slab = remaining if slab.is_unbounded else min(remaining, slab.limit)
        tax_on_slab = ceil_currency(in_slab * slab.rate)
        gross_tax += tax_on_slab

        is_first_zero = slab_start == 0 and slab.rate == 0.0
        breakdown.append(
            TaxSlabDetail(
                slabDescription=_slab_description(slab, slab_start, is_first_zero),
                taxableAmountInSlab=round_currency(in_slab),
                taxRate=slab.rate,
                taxOnSlab=tax_on_slab,
            )
        )

        remaining -= in_slab
        if not slab.is_unbounded:
            slab_start += slab.limit

    return gross_tax, breakdown


def calculate_allowable_investment(taxable_income: float) -> int:
    """Largest rebate-eligible investment: min(20 % of taxable, ৳1 crore)."""
    if taxable_income <= 0:
        return 0
    return ceil_currency(
        min(
            taxable_income * settings.MAX_INVESTMENT_PERCENT,
            settings.MAX_INVESTMENT_ABSOLUTE,
        )
    )


def calculate_investment_rebate(
    investment: float,
    allowable_limit: float,
    gross_tax: int,
) -> int:
    """Rebate = 15 % of the eligible investment, never more than gross tax."""
    if investment <= 0 or allowable_limit <= 0:
        return 0
    eligible = min(investment, allowable_limit)
    rebate = ceil_currency(eligible * settings.INVESTMENT_REBATE_RATE)
    return min(rebate, gross_tax)


def apply_minimum_tax(
    net_tax_payable: float,
    taxable_income: float,
    threshold: float,
) -> int:
    """Raise a small positive liability to the statutory minimum.

    The floor only applies once taxable income exceeds the tax-free slab.
    """
    final_tax = net_tax_payable
    if (
        taxable_income > threshold
        and 0 < final_tax < settings.MINIMUM_TAX_AMOUNT
    ):
        final_tax = settings.MINIMUM_TAX_AMOUNT
    elif taxable_income <= threshold and final_tax <= 0:
        final_tax = 0
    return ceil_currency(max(0, final_tax))


# ── Public API ────────────────────────────────────────────────────────────

def calculate_bd_tax(
    monthly_gross_salary: Optional[float],
    annual_bonuses: Optional[float] = 0.0,
    include_investments: bool = False,
    total_annual_investment: Optional[float] = 0.0,
    income_year: Optional[str] = None,
    category: Union[TaxpayerCategory, str, None] = TaxpayerCategory.MEN,
) -> TaxCalculationResult:
    """Compute an itemised tax result for one taxpayer and income year.

    Missing or NaN amounts count as zero.  Negative or infinite amounts,
    or an income whose annual total overflows, raise ``InvalidTaxInputError``.
    The stated investment is always echoed; it earns a rebate only when
    ``include_investments`` is set.  An income year without a rule table is
    taxed under the fallback year's rules; ``appliedRulesYear`` on the
    result tells which table was used.
    """
    monthly = _non_negative("Monthly gross salary", monthly_gross_salary)
    bonuses = _non_negative("Annual bonuses", annual_bonuses)
    investment = _non_negative("Total annual investment", total_annual_investment)
    category = _to_category(category)
    income_year = income_year or settings.DEFAULT_INCOME_YEAR

    applied_year, config = resolve_year_config(income_year)
    slabs = config.slabs_for(category)
    threshold = config.zero_rate_limit(category)

    total_annual_income = round_currency(monthly * 12 + bonuses)
    if not math.isfinite(total_annual_income):
        raise InvalidTaxInputError("Total annual income is too large to tax")
    exemption = calculate_standard_exemption(
        total_annual_income, config.standard_exemption_cap
    )
    taxable_income = round_currency(max(0.0, total_annual_income - exemption))

    gross_tax, breakdown = calculate_slab_tax(taxable_income, slabs)

    allowable = calculate_allowable_investment(taxable_income)
    tax_rebate = 0
    if include_investments and taxable_income > 0:
        tax_rebate = calculate_investment_rebate(investment, allowable, gross_tax)
    net_tax_payable = max(0, gross_tax - tax_rebate)

    final_tax_due = apply_minimum_tax(net_tax_payable, taxable_income, threshold)
    monthly_deduction = ceil_currency(final_tax_due / 12) if final_tax_due > 0 else 0

    return TaxCalculationResult(
        monthlyGrossSalary=monthly,
        totalAnnualIncome=total_annual_income,
        standardExemptionApplied=exemption,
        taxableIncome=taxable_income,
        grossTax=gross_tax,
        investmentAmountConsidered=investment,
        allowableInvestmentLimit=allowable,
        taxRebate=tax_rebate,
        netTaxPayable=net_tax_payable,
        finalTaxDue=final_tax_due,
        monthlyTaxDeduction=monthly_deduction,
        netAnnualIncome=round_currency(total_annual_income - final_tax_due),
        netMonthlySalaryAfterTax=round_currency(monthly - monthly_deduction),
        taxSlabBreakdown=breakdown,
        incomeYear=income_year,
        appliedRulesYear=applied_year,
        taxpayerCategory=category,
    )
