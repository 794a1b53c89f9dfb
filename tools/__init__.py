"""
Director Pay Compare Tools
"""
from tools.rates import load_rates, default_rates
from tools.bands import cumulative
from tools.ni_calculator import (
    NICalculator,
    calc_annual_nic,
    calc_employee_nic,
    calc_director_alternative_nic,
    calc_director_standard_nic,
    calc_director_standard_nic_rates,
)
from tools.income_tax_calculator import (
    IncomeTaxCalculator,
    get_active_salary_for_period,
    calc_annual_income_tax,
    calc_non_cumulative_income_tax,
    calc_cumulative_income_tax,
    calc_tax_difference,
    calc_cumulative_allowance,
    calc_non_cumulative_allowance,
    calc_allowance_utilization,
    get_cumulative_tax_rates,
)
from tools.comparison import (
    compare_director_nic,
    compare_income_tax,
    period_table,
    calculate_director_nic,
    calculate_income_tax,
)

__all__ = [
    # Rates
    "load_rates",
    "default_rates",
    "cumulative",
    # National Insurance
    "NICalculator",
    "calc_annual_nic",
    "calc_employee_nic",
    "calc_director_alternative_nic",
    "calc_director_standard_nic",
    "calc_director_standard_nic_rates",
    # Income Tax
    "IncomeTaxCalculator",
    "get_active_salary_for_period",
    "calc_annual_income_tax",
    "calc_non_cumulative_income_tax",
    "calc_cumulative_income_tax",
    "calc_tax_difference",
    "calc_cumulative_allowance",
    "calc_non_cumulative_allowance",
    "calc_allowance_utilization",
    "get_cumulative_tax_rates",
    # Comparisons
    "compare_director_nic",
    "compare_income_tax",
    "period_table",
    "calculate_director_nic",
    "calculate_income_tax",
]
