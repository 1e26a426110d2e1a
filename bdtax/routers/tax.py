"""Routers for tax endpoints:
    POST  /bdtax/v1/tax:calculate
    POST  /bdtax/v1/tax:effective-rate
    POST  /bdtax/v1/tax:investment-limit
    GET   /bdtax/v1/tax:years
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from bdtax.config import settings
from bdtax.models.schemas import (
    EffectiveRateRequest,
    EffectiveRateResponse,
    IncomeYearInfo,
    IncomeYearsResponse,
    InvestmentLimitRequest,
    InvestmentLimitResponse,
    TaxCalculationRequest,
    TaxCalculationResult,
)
from bdtax.services.insight_service import (
    effective_tax_rate_curve,
    estimate_investment_allowance,
)
from bdtax.services.tax_rules import SUPPORTED_INCOME_YEARS, resolve_year_config
from bdtax.services.tax_service import calculate_bd_tax
from bdtax.utils.helpers import assessment_year, round_currency

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bdtax/v1",
    tags=["Tax"],
)


# ── 1. Tax Calculation ───────────────────────────────────────────────────

@router.post(
    "/tax:calculate",
    response_model=TaxCalculationResult,
    summary="Calculate personal income tax for one income year",
)
async def tax_calculate(body: TaxCalculationRequest) -> TaxCalculationResult:
    """Apply the standard exemption, slab rates, investment rebate and
    minimum-tax rule, and return the itemised result.
    """
    monthly, bonuses = body.salary_and_bonuses()
    try:
        result = calculate_bd_tax(
            monthly_gross_salary=monthly,
            annual_bonuses=bonuses,
            include_investments=body.includeInvestments,
            total_annual_investment=body.totalAnnualInvestment,
            income_year=body.incomeYear,
            category=body.taxpayerCategory,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    logger.info(
        "Tax calculated for %s (%s): taxable=%s final=%s",
        body.incomeYear,
        body.taxpayerCategory.value,
        result.taxableIncome,
        result.finalTaxDue,
    )
    return result


# ── 2. Effective Tax Rate Curve ──────────────────────────────────────────

@router.post(
    "/tax:effective-rate",
    response_model=EffectiveRateResponse,
    summary="Effective tax rate across a range of gross incomes",
)
async def tax_effective_rate(body: EffectiveRateRequest) -> EffectiveRateResponse:
    """Effective rate (final tax ÷ gross income) from ৳3.5 lakh to ৳50 lakh,
    optionally assuming the maximum investment and highlighting the
    caller's own income.
    """
    try:
        points = effective_tax_rate_curve(
            income_year=body.incomeYear,
            category=body.taxpayerCategory,
            max_investment=body.maxInvestment,
            user_gross_income=body.userGrossIncome,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return EffectiveRateResponse(
        incomeYear=body.incomeYear,
        taxpayerCategory=body.taxpayerCategory,
        maxInvestment=body.maxInvestment,
        points=points,
    )


# ── 3. Investment Allowance ──────────────────────────────────────────────

@router.post(
    "/tax:investment-limit",
    response_model=InvestmentLimitResponse,
    summary="Suggested investment to claim the full rebate",
)
async def tax_investment_limit(body: InvestmentLimitRequest) -> InvestmentLimitResponse:
    """Estimate the rebate-eligible investment from gross income alone."""
    annual_income = round_currency(body.annual_income())
    return InvestmentLimitResponse(
        incomeYear=body.incomeYear,
        annualIncome=annual_income,
        allowableInvestment=estimate_investment_allowance(annual_income, body.incomeYear),
    )


# ── 4. Income Years ──────────────────────────────────────────────────────

@router.get(
    "/tax:years",
    response_model=IncomeYearsResponse,
    summary="Supported income years",
)
async def tax_years() -> IncomeYearsResponse:
    """List selectable income years with their assessment year and the
    rule table each is taxed under.
    """
    years: list[IncomeYearInfo] = []
    for income_year in SUPPORTED_INCOME_YEARS:
        rules_year, config = resolve_year_config(income_year)
        years.append(
            IncomeYearInfo(
                incomeYear=income_year,
                assessmentYear=assessment_year(income_year),
                rulesYear=rules_year,
                standardExemptionCap=config.standard_exemption_cap,
            )
        )
    return IncomeYearsResponse(
        defaultIncomeYear=settings.DEFAULT_INCOME_YEAR,
        years=years,
    )
