"""Pydantic request / response schemas for all API endpoints.

Field names are camelCase to match the JSON contract consumed by the
calculator front-end:
  - TaxCalculationRequest → raw income, investment and year/category choice
  - TaxCalculationResult  → fully itemised tax breakdown
"""

from __future__ import annotations
from enum import Enum
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bdtax.config import settings


class TaxpayerCategory(str, Enum):
    """Taxpayer category; only moves the zero-rate slab's upper bound."""

    MEN = "men"
    WOMEN = "women"
    DISABLED_OR_THIRD_GENDER = "disabled_or_third_gender"
    FREEDOM_FIGHTER = "freedom_fighter"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            key = _CATEGORY_ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        return None


_CATEGORY_ALIASES = {
    "disabled": "disabled_or_third_gender",
    "third_gender": "disabled_or_third_gender",
    "male": "men",
    "female": "women",
}


def _parse_category(value):
    if isinstance(value, str):
        return TaxpayerCategory(value)
    return value


def _check_income_year(value: str) -> str:
    if value not in settings.SUPPORTED_INCOME_YEARS:
        raise ValueError(
            f"Unsupported income year '{value}'. "
            f"Choose one of: {', '.join(settings.SUPPORTED_INCOME_YEARS)}"
        )
    return value


# ── Shared income input ──────────────────────────────────────────────────

class IncomeInput(BaseModel):
    """Income entered either as monthly salary + bonuses or as one annual total."""
    incomeInputMode: Literal["monthly", "annual"] = Field(
        "monthly", description="'monthly' (salary + bonuses) or 'annual' (total gross)"
    )
    monthlyGrossSalary: Optional[float] = Field(
        None, lt=settings.MAX_AMOUNT, allow_inf_nan=False, description="Monthly gross salary in BDT"
    )
    annualBonuses: float = Field(
        0, ge=0, lt=settings.MAX_AMOUNT, allow_inf_nan=False, description="Festival / performance bonuses for the year"
    )
    totalAnnualGrossIncome: Optional[float] = Field(
        None, lt=settings.MAX_AMOUNT, allow_inf_nan=False, description="Total annual gross income in BDT"
    )
    incomeYear: str = Field(
        default_factory=lambda: settings.DEFAULT_INCOME_YEAR,
        description="Income year, e.g. 2025-2026",
    )

    @field_validator("incomeYear")
    @classmethod
    def _supported_year(cls, value: str) -> str:
        return _check_income_year(value)

    @model_validator(mode="after")
    def _positive_income(self) -> "IncomeInput":
        if self.incomeInputMode == "monthly":
            if self.monthlyGrossSalary is None or self.monthlyGrossSalary <= 0:
                raise ValueError("Monthly gross salary must be a positive number.")
        else:
            if self.totalAnnualGrossIncome is None or self.totalAnnualGrossIncome <= 0:
                raise ValueError("Total annual gross income must be a positive number.")
        return self

    def salary_and_bonuses(self) -> Tuple[float, float]:
        """Return ``(monthly_salary, annual_bonuses)`` for the chosen mode."""
        if self.incomeInputMode == "annual":
            return self.totalAnnualGrossIncome / 12, 0.0
        return self.monthlyGrossSalary, self.annualBonuses

    def annual_income(self) -> float:
        monthly, bonuses = self.salary_and_bonuses()
        return monthly * 12 + bonuses


# ── 1. Tax Calculation  (/tax:calculate) ─────────────────────────────────

class TaxCalculationRequest(IncomeInput):
    includeInvestments: bool = Field(False, description="Claim the investment rebate")
    totalAnnualInvestment: float = Field(
        0, ge=0, lt=settings.MAX_AMOUNT, allow_inf_nan=False,
        description="Eligible investments made in the year",
    )
    taxpayerCategory: TaxpayerCategory = Field(TaxpayerCategory.MEN)

    @field_validator("taxpayerCategory", mode="before")
    @classmethod
    def _category_alias(cls, value):
        return _parse_category(value)


class TaxSlabDetail(BaseModel):
    """One line of the slab-by-slab breakdown."""
    model_config = ConfigDict(frozen=True)

    slabDescription: str = Field(..., description="e.g. 'On next 3,00,000 (from 3,75,001 to 6,75,000)'")
    taxableAmountInSlab: float = Field(..., ge=0)
    taxRate: float = Field(..., description="Marginal rate as a fraction (0.10 = 10%)")
    taxOnSlab: int = Field(..., ge=0, description="Tax on this slab, rounded up")


class TaxCalculationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthlyGrossSalary: float
    totalAnnualIncome: float
    standardExemptionApplied: int
    taxableIncome: float
    grossTax: int = Field(..., description="Sum of per-slab taxes")
    investmentAmountConsidered: float = Field(
        ..., description="Investment as stated; the rebate uses it only when investments are included"
    )
    allowableInvestmentLimit: int = Field(..., description="Maximum rebate-eligible investment")
    taxRebate: int
    netTaxPayable: int = Field(..., description="grossTax − taxRebate")
    finalTaxDue: int = Field(..., description="Net tax after the minimum-tax rule")
    monthlyTaxDeduction: int
    netAnnualIncome: float
    netMonthlySalaryAfterTax: float
    taxSlabBreakdown: List[TaxSlabDetail]
    incomeYear: str = Field(..., description="Income year as requested")
    appliedRulesYear: str = Field(..., description="Income year whose rule table was applied")
    taxpayerCategory: TaxpayerCategory


# ── 2. Effective Tax Rate Curve  (/tax:effective-rate) ───────────────────

class EffectiveRateRequest(BaseModel):
    incomeYear: str = Field(default_factory=lambda: settings.DEFAULT_INCOME_YEAR)
    taxpayerCategory: TaxpayerCategory = Field(TaxpayerCategory.MEN)
    maxInvestment: bool = Field(False, description="Assume the taxpayer invests the maximum each year")
    userGrossIncome: Optional[float] = Field(
        None, gt=0, lt=settings.MAX_AMOUNT, allow_inf_nan=False, description="Annual income to highlight"
    )

    @field_validator("incomeYear")
    @classmethod
    def _supported_year(cls, value: str) -> str:
        return _check_income_year(value)

    @field_validator("taxpayerCategory", mode="before")
    @classmethod
    def _category_alias(cls, value):
        return _parse_category(value)


class EffectiveRatePoint(BaseModel):
    annualIncome: float
    effectiveRate: float = Field(..., description="finalTaxDue / annualIncome in percent (2 dp)")
    isUser: bool = False


class EffectiveRateResponse(BaseModel):
    incomeYear: str
    taxpayerCategory: TaxpayerCategory
    maxInvestment: bool
    points: List[EffectiveRatePoint]


# ── 3. Investment Allowance  (/tax:investment-limit) ─────────────────────

class InvestmentLimitRequest(IncomeInput):
    pass


class InvestmentLimitResponse(BaseModel):
    incomeYear: str
    annualIncome: float
    allowableInvestment: int = Field(..., description="Suggested rebate-eligible investment")


# ── 4. Income Years  (/tax:years) ────────────────────────────────────────

class IncomeYearInfo(BaseModel):
    incomeYear: str
    assessmentYear: str
    rulesYear: str = Field(..., description="Rule table applied for this income year")
    standardExemptionCap: float


class IncomeYearsResponse(BaseModel):
    defaultIncomeYear: str
    years: List[IncomeYearInfo]


# ── 5. Performance Report  (/performance) ────────────────────────────────

class PerformanceResponse(BaseModel):
    time: str = Field(..., description="Last response time (HH:mm:ss.SSS)")
    memory: str = Field(..., description="Current memory usage (e.g. '123.45 MB')")
    threads: int = Field(..., description="Number of active threads")
