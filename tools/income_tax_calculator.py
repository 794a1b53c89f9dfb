"""
PAYE Income Tax Calculator
Cumulative (year-to-date) against non-cumulative (Month 1 / Week 1 style) tax codes,
for a salary that can change part way through the year
"""
import logging
from collections.abc import Iterable
from typing import Any, NamedTuple, Optional, Sequence

from models.schemas import (
    IncomeTaxPeriodRates,
    SalaryChange,
    TaxYearRates,
    to_amount,
    to_period,
)
from tools.bands import banded_liability, bands_reached, cumulative, income_tax_bands
from tools.rates import default_rates

logger = logging.getLogger(__name__)

MONTHS = 12

PERIOD_MONTH_LABELS = (
    "Apr", "May", "Jun", "Jul", "Aug", "Sep",
    "Oct", "Nov", "Dec", "Jan", "Feb", "Mar",
)


class MonthlyThresholds(NamedTuple):
    personal_allowance: float
    basic_rate_limit: float
    higher_rate_limit: float
    periods: int


def _to_salary_change(entry: Any) -> Optional[SalaryChange]:
    if isinstance(entry, SalaryChange):
        return entry
    if isinstance(entry, dict):
        return SalaryChange.model_validate(entry)
    if isinstance(entry, (list, tuple)) and entry:
        start = entry[1] if len(entry) > 1 else 1
        return SalaryChange(amount=entry[0], start_period=start)
    logger.debug("Skipping unrecognised salary schedule entry %r", entry)
    return None


def sort_schedule(schedule: Any) -> list[SalaryChange]:
    """
    Normalise a salary schedule and sort it by start period

    Accepts SalaryChange models, {"amount", "startPeriod"} dicts or
    (amount, start_period) pairs. The sort is stable, so of two entries
    starting in the same period the later one in the input wins.
    """
    if isinstance(schedule, (dict, SalaryChange)):
        schedule = [schedule]
    if isinstance(schedule, (str, bytes)) or not isinstance(schedule, Iterable):
        return []

    entries = [_to_salary_change(entry) for entry in schedule]
    return sorted((e for e in entries if e is not None), key=lambda e: e.start_period)


def _active_salary(sorted_schedule: Sequence[SalaryChange], period: int) -> float:
    for entry in reversed(sorted_schedule):
        if entry.start_period <= period:
            return entry.amount
    return 0.0


def get_active_salary_for_period(schedule: Any, period: Any) -> float:
    """Salary of the most recent change that has started by *period*; 0 before any has"""
    return _active_salary(sort_schedule(schedule), to_period(period, default=0))


class IncomeTaxCalculator:
    def __init__(self, rates: Optional[TaxYearRates] = None):
        self.rates = rates or default_rates()

    @property
    def income_tax(self):
        return self.rates.income_tax

    @property
    def monthly_allowance(self) -> float:
        return self.income_tax.personal_allowance / MONTHS

    def per_period_thresholds(self) -> MonthlyThresholds:
        return MonthlyThresholds(
            personal_allowance=self.income_tax.personal_allowance / MONTHS,
            basic_rate_limit=self.income_tax.basic_rate_limit / MONTHS,
            higher_rate_limit=self.income_tax.higher_rate_limit / MONTHS,
            periods=MONTHS,
        )

    def calc_annual_income_tax(self, annual_salary: Any) -> float:
        """Income tax on a full year's salary"""
        return banded_liability(to_amount(annual_salary), income_tax_bands(self.income_tax))

    def calc_non_cumulative_income_tax(self, annual_salary: Any) -> list[float]:
        """Each month taxed on its own pay against monthly thresholds"""
        pay = to_amount(annual_salary) / MONTHS
        tax = banded_liability(pay, income_tax_bands(self.income_tax, divisor=MONTHS))
        return [tax] * MONTHS

    def calc_non_cumulative_income_tax_by_period(self, schedule: Any) -> list[float]:
        """Non-cumulative tax month by month, following salary changes"""
        entries = sort_schedule(schedule)
        return [
            self.calc_non_cumulative_income_tax(_active_salary(entries, period))[0]
            for period in range(1, MONTHS + 1)
        ]

    def calc_cumulative_income_tax(self, schedule: Any) -> list[float]:
        """
        PAYE cumulative method

        Tax each month is the tax due on pay-to-date less tax already
        deducted. A fall in salary never produces a refund: the month is
        floored at zero, while the running figure still tracks the true
        tax due to date.
        """
        entries = sort_schedule(schedule)
        bands = income_tax_bands(self.income_tax)

        result = []
        cumulative_pay = 0.0
        cumulative_tax = 0.0

        for period in range(1, MONTHS + 1):
            cumulative_pay += _active_salary(entries, period) / MONTHS
            total_tax_due = banded_liability(cumulative_pay, bands)
            result.append(max(0.0, total_tax_due - cumulative_tax))
            cumulative_tax = total_tax_due

        return result

    def calc_tax_difference(self, schedule: Any) -> list[float]:
        """Non-cumulative minus cumulative tax; positive means non-cumulative over-deducts"""
        entries = sort_schedule(schedule)
        non_cumulative = self.calc_non_cumulative_income_tax_by_period(entries)
        cumulative_tax = self.calc_cumulative_income_tax(entries)
        return [n - c for n, c in zip(non_cumulative, cumulative_tax)]

    def calc_cumulative_allowance(self, schedule: Any) -> list[float]:
        """
        Allowance available to date under a cumulative code

        Accrues for every month of the tax year, so starting late
        brings a catch-up of the months already gone.
        """
        entries = sort_schedule(schedule)
        return [
            self.monthly_allowance * period if _active_salary(entries, period) > 0 else 0.0
            for period in range(1, MONTHS + 1)
        ]

    def calc_non_cumulative_allowance(self, schedule: Any) -> list[float]:
        """Just one month's allowance per month employed, no catch-up"""
        entries = sort_schedule(schedule)
        return [
            self.monthly_allowance if _active_salary(entries, period) > 0 else 0.0
            for period in range(1, MONTHS + 1)
        ]

    def calc_allowance_utilization(self, schedule: Any, is_cumulative: bool = True) -> list[float]:
        """How much allowance each month's pay actually uses"""
        entries = sort_schedule(schedule)
        result = []

        cumulative_pay = 0.0
        allowance_used_to_date = 0.0

        for period in range(1, MONTHS + 1):
            active_salary = _active_salary(entries, period)
            if active_salary <= 0:
                result.append(0.0)
                continue

            period_pay = active_salary / MONTHS
            if is_cumulative:
                cumulative_pay += period_pay
                allowance_available = self.monthly_allowance * period
                allowance_used = min(cumulative_pay, allowance_available)
                result.append(allowance_used - allowance_used_to_date)
                allowance_used_to_date = allowance_used
            else:
                result.append(min(period_pay, self.monthly_allowance))

        return result

    def calc_catch_up_allowance(self, start_period: Any) -> float:
        """Allowance from the months before *start_period* a cumulative code hands back"""
        months_missed = max(to_period(start_period) - 1, 0)
        return self.monthly_allowance * months_missed

    def calc_estimated_annual_earnings(self, schedule: Any) -> float:
        entries = sort_schedule(schedule)
        return sum(_active_salary(entries, period) / MONTHS for period in range(1, MONTHS + 1))

    def get_cumulative_tax_rates(self, schedule: Any) -> list[IncomeTaxPeriodRates]:
        """Tax bands reached by pay-to-date in each month, for explanation only"""
        entries = sort_schedule(schedule)
        bands = income_tax_bands(self.income_tax)

        rates = []
        cumulative_pay = 0.0

        for period in range(1, MONTHS + 1):
            active_salary = _active_salary(entries, period)
            period_pay = active_salary / MONTHS
            cumulative_pay += period_pay

            rates.append(IncomeTaxPeriodRates(
                period=period,
                cumulative_pay=cumulative_pay,
                period_pay=period_pay,
                active_salary=active_salary,
                rates=bands_reached(cumulative_pay, bands),
            ))

        return rates


# Convenience functions bound to the default tax year

def per_period_thresholds() -> MonthlyThresholds:
    return IncomeTaxCalculator().per_period_thresholds()


def calc_annual_income_tax(annual_salary: Any) -> float:
    return IncomeTaxCalculator().calc_annual_income_tax(annual_salary)


def calc_non_cumulative_income_tax(annual_salary: Any) -> list[float]:
    return IncomeTaxCalculator().calc_non_cumulative_income_tax(annual_salary)


def calc_non_cumulative_income_tax_by_period(schedule: Any) -> list[float]:
    return IncomeTaxCalculator().calc_non_cumulative_income_tax_by_period(schedule)


def calc_cumulative_income_tax(schedule: Any) -> list[float]:
    return IncomeTaxCalculator().calc_cumulative_income_tax(schedule)


def calc_tax_difference(schedule: Any) -> list[float]:
    return IncomeTaxCalculator().calc_tax_difference(schedule)


def calc_cumulative_allowance(schedule: Any) -> list[float]:
    return IncomeTaxCalculator().calc_cumulative_allowance(schedule)


def calc_non_cumulative_allowance(schedule: Any) -> list[float]:
    return IncomeTaxCalculator().calc_non_cumulative_allowance(schedule)


def calc_allowance_utilization(schedule: Any, is_cumulative: bool = True) -> list[float]:
    return IncomeTaxCalculator().calc_allowance_utilization(schedule, is_cumulative)


def calc_catch_up_allowance(start_period: Any) -> float:
    return IncomeTaxCalculator().calc_catch_up_allowance(start_period)


def calc_estimated_annual_earnings(schedule: Any) -> float:
    return IncomeTaxCalculator().calc_estimated_annual_earnings(schedule)


def get_cumulative_tax_rates(schedule: Any) -> list[IncomeTaxPeriodRates]:
    return IncomeTaxCalculator().get_cumulative_tax_rates(schedule)


__all__ = [
    "IncomeTaxCalculator",
    "MonthlyThresholds",
    "MONTHS",
    "PERIOD_MONTH_LABELS",
    "sort_schedule",
    "get_active_salary_for_period",
    "per_period_thresholds",
    "calc_annual_income_tax",
    "calc_non_cumulative_income_tax",
    "calc_non_cumulative_income_tax_by_period",
    "calc_cumulative_income_tax",
    "calc_tax_difference",
    "calc_cumulative_allowance",
    "calc_non_cumulative_allowance",
    "calc_allowance_utilization",
    "calc_catch_up_allowance",
    "calc_estimated_annual_earnings",
    "get_cumulative_tax_rates",
    "cumulative",
]
