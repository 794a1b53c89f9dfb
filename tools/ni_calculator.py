"""
Director National Insurance Calculator
Employee baseline, director standard (annual earnings period) and alternative methods
"""
import logging
from datetime import date, datetime
from typing import Any, NamedTuple, Optional

from models.schemas import PayFrequency, PeriodRates, TaxYearRates, to_amount
from tools.bands import banded_liability, bands_reached, cumulative, ni_bands
from tools.rates import default_rates

logger = logging.getLogger(__name__)


class PeriodThresholds(NamedTuple):
    primary_threshold: float
    upper_earnings_limit: float
    periods: int


def parse_start_date(value: Any) -> Optional[date]:
    """Director appointment date from a date, datetime or ISO string; None if unusable"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.debug("Ignoring unparseable director start date %r", value)
        return None


class NICalculator:
    def __init__(self, rates: Optional[TaxYearRates] = None):
        self.rates = rates or default_rates()

    @property
    def class_1(self):
        return self.rates.national_insurance.class_1

    def per_period_thresholds(self, frequency: Any = PayFrequency.MONTHLY) -> PeriodThresholds:
        periods = PayFrequency.parse(frequency).periods
        return PeriodThresholds(
            primary_threshold=self.class_1.primary_threshold_annual / periods,
            upper_earnings_limit=self.class_1.upper_earnings_limit / periods,
            periods=periods,
        )

    def prorated_primary_threshold(self, start_date: Any = None) -> float:
        """
        PT for a director appointed part way through the year

        Scaled by the days from appointment (inclusive) to the end of the
        tax year. Appointments on or before the first day keep the full PT.
        The divisor is the length of the configured tax year, 365 days for
        2025/26 and 366 for a year that spans 29 February.
        """
        pt = self.class_1.primary_threshold_annual
        start = parse_start_date(start_date)
        tax_year = self.rates.tax_year

        if start is None or start <= tax_year.start:
            return pt

        remaining_days = max((tax_year.end - start).days + 1, 0)
        return pt * (remaining_days / tax_year.days)

    def calc_annual_nic(self, annual_salary: Any) -> float:
        """NIC on the whole year's pay in one go"""
        return banded_liability(to_amount(annual_salary), ni_bands(self.class_1))

    def calc_employee_nic(self, annual_salary: Any, frequency: Any = PayFrequency.MONTHLY) -> list[float]:
        """Each period on its own, against PT and UEL divided by the number of periods"""
        periods = PayFrequency.parse(frequency).periods
        pay = to_amount(annual_salary) / periods

        ni = banded_liability(pay, ni_bands(self.class_1, divisor=periods))
        return [ni] * periods

    def calc_director_alternative_nic(self, annual_salary: Any, frequency: Any = PayFrequency.MONTHLY) -> list[float]:
        """Employee-style periods with a balancing charge in the final period"""
        per_period = self.calc_employee_nic(annual_salary, frequency)
        true_up = self.calc_annual_nic(annual_salary) - sum(per_period)
        per_period[-1] += true_up
        return per_period

    def calc_director_standard_nic(
        self,
        annual_salary: Any,
        frequency: Any = PayFrequency.MONTHLY,
        start_date: Any = None,
    ) -> list[float]:
        """
        Annual earnings period ("bucket") method

        Each period charges the NIC due on pay-to-date less whatever has
        already been charged, so nothing is due until cumulative pay
        passes the (possibly pro-rated) PT.
        """
        periods = PayFrequency.parse(frequency).periods
        pay = to_amount(annual_salary) / periods
        bands = ni_bands(self.class_1, primary_threshold=self.prorated_primary_threshold(start_date))

        per_period = []
        cumulative_pay = 0.0
        ni_to_date = 0.0

        for _ in range(periods):
            cumulative_pay += pay
            due = banded_liability(cumulative_pay, bands)
            per_period.append(due - ni_to_date)
            ni_to_date = due

        return per_period

    def calc_director_standard_nic_rates(
        self,
        annual_salary: Any,
        frequency: Any = PayFrequency.MONTHLY,
        start_date: Any = None,
    ) -> list[PeriodRates]:
        """Which NIC bands pay-to-date has reached in each period of the standard method"""
        periods = PayFrequency.parse(frequency).periods
        pay = to_amount(annual_salary) / periods
        bands = ni_bands(self.class_1, primary_threshold=self.prorated_primary_threshold(start_date))

        rates = []
        cumulative_pay = 0.0

        for period in range(1, periods + 1):
            cumulative_pay += pay
            rates.append(PeriodRates(
                period=period,
                cumulative_pay=cumulative_pay,
                rates=bands_reached(cumulative_pay, bands),
            ))

        return rates


# Convenience functions bound to the default tax year

def per_period_thresholds(frequency: Any = PayFrequency.MONTHLY) -> PeriodThresholds:
    return NICalculator().per_period_thresholds(frequency)


def prorated_primary_threshold(start_date: Any = None) -> float:
    return NICalculator().prorated_primary_threshold(start_date)


def calc_annual_nic(annual_salary: Any) -> float:
    return NICalculator().calc_annual_nic(annual_salary)


def calc_employee_nic(annual_salary: Any, frequency: Any = PayFrequency.MONTHLY) -> list[float]:
    return NICalculator().calc_employee_nic(annual_salary, frequency)


def calc_director_alternative_nic(annual_salary: Any, frequency: Any = PayFrequency.MONTHLY) -> list[float]:
    return NICalculator().calc_director_alternative_nic(annual_salary, frequency)


def calc_director_standard_nic(
    annual_salary: Any,
    frequency: Any = PayFrequency.MONTHLY,
    start_date: Any = None,
) -> list[float]:
    return NICalculator().calc_director_standard_nic(annual_salary, frequency, start_date)


def calc_director_standard_nic_rates(
    annual_salary: Any,
    frequency: Any = PayFrequency.MONTHLY,
    start_date: Any = None,
) -> list[PeriodRates]:
    return NICalculator().calc_director_standard_nic_rates(annual_salary, frequency, start_date)


__all__ = [
    "NICalculator",
    "PeriodThresholds",
    "parse_start_date",
    "per_period_thresholds",
    "prorated_primary_threshold",
    "calc_annual_nic",
    "calc_employee_nic",
    "calc_director_alternative_nic",
    "calc_director_standard_nic",
    "calc_director_standard_nic_rates",
    "cumulative",
]
