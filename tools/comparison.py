"""
Method comparisons
Bundles the engine outputs a caller needs to compare the two NIC methods
or the two PAYE methods side by side
"""
import logging
from typing import Any, Optional, Union

import pandas as pd

from models.schemas import (
    IncomeTaxComparison,
    NICComparison,
    PayFrequency,
    TaxYearRates,
    to_amount,
)
from tools.bands import cumulative
from tools.income_tax_calculator import (
    IncomeTaxCalculator,
    MONTHS,
    PERIOD_MONTH_LABELS,
    sort_schedule,
)
from tools.ni_calculator import NICalculator, parse_start_date

logger = logging.getLogger(__name__)


def compare_director_nic(
    annual_salary: Any,
    frequency: Any = PayFrequency.MONTHLY,
    start_date: Any = None,
    rates: Optional[TaxYearRates] = None,
) -> NICComparison:
    """Employee baseline, alternative and standard director NIC for one salary"""
    calculator = NICalculator(rates)
    salary = to_amount(annual_salary)
    freq = PayFrequency.parse(frequency)

    employee = calculator.calc_employee_nic(salary, freq)
    alternative = calculator.calc_director_alternative_nic(salary, freq)
    standard = calculator.calc_director_standard_nic(salary, freq, start_date)

    comparison = NICComparison(
        annual_salary=salary,
        frequency=freq,
        start_date=parse_start_date(start_date),
        primary_threshold=calculator.prorated_primary_threshold(start_date),
        employee=employee,
        alternative=alternative,
        standard=standard,
        employee_cumulative=cumulative(employee),
        alternative_cumulative=cumulative(alternative),
        standard_cumulative=cumulative(standard),
        annual_nic=calculator.calc_annual_nic(salary),
        total_employee=sum(employee),
        total_alternative=sum(alternative),
        total_standard=sum(standard),
        standard_rates=calculator.calc_director_standard_nic_rates(salary, freq, start_date),
    )
    logger.debug(
        "NIC comparison salary=%.2f frequency=%s annual=%.2f",
        salary, freq.value, comparison.annual_nic,
    )
    return comparison


def compare_income_tax(
    schedule: Any,
    rates: Optional[TaxYearRates] = None,
) -> IncomeTaxComparison:
    """Cumulative and non-cumulative PAYE for a salary schedule"""
    calculator = IncomeTaxCalculator(rates)
    entries = sort_schedule(schedule)

    cumulative_tax = calculator.calc_cumulative_income_tax(entries)
    non_cumulative_tax = calculator.calc_non_cumulative_income_tax_by_period(entries)
    earnings = calculator.calc_estimated_annual_earnings(entries)

    paid_periods = [e.start_period for e in entries if e.amount > 0]
    catch_up = calculator.calc_catch_up_allowance(min(paid_periods)) if paid_periods else 0.0

    return IncomeTaxComparison(
        schedule=entries,
        cumulative_tax=cumulative_tax,
        non_cumulative_tax=non_cumulative_tax,
        difference=[n - c for n, c in zip(non_cumulative_tax, cumulative_tax)],
        cumulative_tax_to_date=cumulative(cumulative_tax),
        non_cumulative_tax_to_date=cumulative(non_cumulative_tax),
        cumulative_allowance=calculator.calc_cumulative_allowance(entries),
        non_cumulative_allowance=calculator.calc_non_cumulative_allowance(entries),
        cumulative_allowance_used=calculator.calc_allowance_utilization(entries, True),
        non_cumulative_allowance_used=calculator.calc_allowance_utilization(entries, False),
        catch_up_allowance=catch_up,
        estimated_annual_earnings=earnings,
        annual_tax=calculator.calc_annual_income_tax(earnings),
        total_cumulative_tax=sum(cumulative_tax),
        total_non_cumulative_tax=sum(non_cumulative_tax),
        rates=calculator.get_cumulative_tax_rates(entries),
    )


def period_table(comparison: Union[NICComparison, IncomeTaxComparison]) -> pd.DataFrame:
    """One row per pay period, indexed by period number (1-based)"""
    if isinstance(comparison, NICComparison):
        columns = {
            "employee": comparison.employee,
            "alternative": comparison.alternative,
            "standard": comparison.standard,
            "employee_to_date": comparison.employee_cumulative,
            "alternative_to_date": comparison.alternative_cumulative,
            "standard_to_date": comparison.standard_cumulative,
        }
        periods = comparison.frequency.periods
    else:
        columns = {
            "cumulative_tax": comparison.cumulative_tax,
            "non_cumulative_tax": comparison.non_cumulative_tax,
            "difference": comparison.difference,
            "cumulative_tax_to_date": comparison.cumulative_tax_to_date,
            "non_cumulative_tax_to_date": comparison.non_cumulative_tax_to_date,
            "cumulative_allowance": comparison.cumulative_allowance,
            "cumulative_allowance_used": comparison.cumulative_allowance_used,
            "non_cumulative_allowance": comparison.non_cumulative_allowance,
            "non_cumulative_allowance_used": comparison.non_cumulative_allowance_used,
        }
        periods = MONTHS

    df = pd.DataFrame(columns, index=pd.RangeIndex(1, periods + 1, name="period"))
    if periods == MONTHS:
        df.insert(0, "month", list(PERIOD_MONTH_LABELS))
    return df


# Convenience functions for tool usage
def calculate_director_nic(
    annual_salary: float,
    frequency: str = "monthly",
    start_date: str | None = None,
) -> dict:
    """Compare director NIC methods - plain dict for presentation layers"""
    return compare_director_nic(annual_salary, frequency, start_date).model_dump(
        by_alias=True, mode="json"
    )


def calculate_income_tax(salaries: list[dict]) -> dict:
    """Compare PAYE methods for [{"amount": ..., "startPeriod": ...}] - plain dict"""
    return compare_income_tax(salaries).model_dump(by_alias=True, mode="json")
