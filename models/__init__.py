"""Director Pay Compare Data Models"""
from models.schemas import (
    TaxYear,
    NIClass1Rates,
    NationalInsuranceRates,
    IncomeTaxRates,
    TaxYearRates,
    PayFrequency,
    SalaryChange,
    RateBand,
    PeriodRates,
    IncomeTaxPeriodRates,
    NICComparison,
    IncomeTaxComparison,
    to_amount,
    to_period,
)

__all__ = [
    "TaxYear",
    "NIClass1Rates",
    "NationalInsuranceRates",
    "IncomeTaxRates",
    "TaxYearRates",
    "PayFrequency",
    "SalaryChange",
    "RateBand",
    "PeriodRates",
    "IncomeTaxPeriodRates",
    "NICComparison",
    "IncomeTaxComparison",
    "to_amount",
    "to_period",
]
