"""
Pydantic models for the director NIC and PAYE comparison engine
"""
import math
from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def to_amount(value: Any) -> float:
    """Coerce a (possibly half-typed) money value to float, 0.0 if it isn't a number"""
    if isinstance(value, str):
        # Remove currency symbols, commas, spaces
        value = value.replace("£", "").replace(",", "").replace(" ", "")
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


def to_period(value: Any, default: int = 1) -> int:
    """Coerce a period number to int, falling back to *default*"""
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


class TaxYear(BaseModel):
    """Calendar bounds of a tax year (both dates inclusive)"""
    model_config = ConfigDict(frozen=True)

    label: str
    start: date
    end: date

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end <= self.start:
            raise ValueError("Tax year must end after it starts")
        return self

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


class NIClass1Rates(BaseModel):
    """Employee / director Class 1 primary contributions"""
    model_config = ConfigDict(frozen=True)

    primary_threshold_annual: float
    upper_earnings_limit: float
    rate_between_thresholds: float
    rate_above_uel: float

    @model_validator(mode="after")
    def _check_thresholds(self):
        if not self.primary_threshold_annual < self.upper_earnings_limit:
            raise ValueError("Primary threshold must be below the upper earnings limit")
        return self


class NationalInsuranceRates(BaseModel):
    model_config = ConfigDict(frozen=True)

    class_1: NIClass1Rates


class IncomeTaxRates(BaseModel):
    """Personal allowance plus basic, higher and additional rate bands"""
    model_config = ConfigDict(frozen=True)

    personal_allowance: float
    basic_rate_limit: float
    higher_rate_limit: float
    basic_rate: float
    higher_rate: float
    additional_rate: float

    @model_validator(mode="after")
    def _check_limits(self):
        if not self.personal_allowance < self.basic_rate_limit < self.higher_rate_limit:
            raise ValueError(
                "Expected personal allowance < basic rate limit < higher rate limit"
            )
        return self


class TaxYearRates(BaseModel):
    """All thresholds and rates for one tax year"""
    model_config = ConfigDict(frozen=True)

    tax_year: TaxYear
    income_tax: IncomeTaxRates
    national_insurance: NationalInsuranceRates


class PayFrequency(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"

    @property
    def periods(self) -> int:
        return 12 if self is PayFrequency.MONTHLY else 52

    @classmethod
    def parse(cls, value: Any) -> "PayFrequency":
        """
        Blank means monthly; anything other than "monthly" is paid weekly

        Case and surrounding whitespace are ignored, so "Monthly " is monthly.
        """
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.MONTHLY
        if str(value).strip().lower() == cls.MONTHLY.value:
            return cls.MONTHLY
        return cls.WEEKLY


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SalaryChange(_CamelModel):
    """Annual salary that applies from start_period (1-based) onwards"""
    amount: float = 0.0
    start_period: int = 1

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return to_amount(value)

    @field_validator("start_period", mode="before")
    @classmethod
    def _coerce_start_period(cls, value):
        return to_period(value)


class RateBand(_CamelModel):
    """A marginal band reached by cumulative pay; rate is a percentage"""
    rate: float
    description: str


class PeriodRates(_CamelModel):
    """Bands touched by pay-to-date for one period, for display only"""
    period: int
    cumulative_pay: float
    rates: list[RateBand] = Field(default_factory=list)


class IncomeTaxPeriodRates(PeriodRates):
    period_pay: float = 0.0
    active_salary: float = 0.0


class NICComparison(_CamelModel):
    """Director NIC under both methods alongside the employee baseline"""
    annual_salary: float
    frequency: PayFrequency
    start_date: Optional[date] = None
    primary_threshold: float

    employee: list[float]
    alternative: list[float]
    standard: list[float]

    employee_cumulative: list[float]
    alternative_cumulative: list[float]
    standard_cumulative: list[float]

    annual_nic: float = 0.0
    total_employee: float = 0.0
    total_alternative: float = 0.0
    total_standard: float = 0.0

    standard_rates: list[PeriodRates] = Field(default_factory=list)


class IncomeTaxComparison(_CamelModel):
    """Cumulative (PAYE) against non-cumulative income tax for a salary schedule"""
    schedule: list[SalaryChange]

    cumulative_tax: list[float]
    non_cumulative_tax: list[float]
    difference: list[float]

    cumulative_tax_to_date: list[float]
    non_cumulative_tax_to_date: list[float]

    # Tax-free allowance
    cumulative_allowance: list[float]
    non_cumulative_allowance: list[float]
    cumulative_allowance_used: list[float]
    non_cumulative_allowance_used: list[float]
    catch_up_allowance: float = 0.0

    # Totals
    estimated_annual_earnings: float = 0.0
    annual_tax: float = 0.0
    total_cumulative_tax: float = 0.0
    total_non_cumulative_tax: float = 0.0

    rates: list[IncomeTaxPeriodRates] = Field(default_factory=list)
