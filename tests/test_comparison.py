"""
Tests for the method comparison bundles
"""
import sys
import json
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.schemas import PayFrequency
from tools.comparison import (
    calculate_director_nic,
    calculate_income_tax,
    compare_director_nic,
    compare_income_tax,
    period_table,
)


def test_director_nic_comparison_totals():
    """Both director methods and the employee baseline collect the annual NIC"""
    result = compare_director_nic(60000, "weekly")

    assert result.frequency is PayFrequency.WEEKLY
    assert len(result.standard) == 52
    assert result.total_standard == pytest.approx(result.annual_nic, abs=1e-6)
    assert result.total_alternative == pytest.approx(result.annual_nic, abs=1e-6)
    assert result.standard_cumulative[-1] == pytest.approx(result.annual_nic, abs=1e-6)
    assert result.primary_threshold == 12570

    print(f"✓ £60k director NIC: £{result.annual_nic:,.2f} under both methods")


def test_director_nic_comparison_mid_year_start():
    result = compare_director_nic("45000", "monthly", "2025-10-06")

    assert result.start_date == date(2025, 10, 6)
    assert result.primary_threshold < 12570
    # Standard method uses the pro-rated PT, so it collects more than the full-year figure
    assert result.total_standard > result.annual_nic
    assert len(result.standard_rates) == 12


def test_income_tax_comparison():
    result = compare_income_tax([{"amount": 40000, "startPeriod": 6}])

    assert result.estimated_annual_earnings == pytest.approx(40000 * 7 / 12)
    assert result.annual_tax == pytest.approx((40000 * 7 / 12 - 12570) * 0.20)
    assert result.catch_up_allowance == pytest.approx(12570 / 12 * 5)
    assert result.cumulative_tax_to_date[-1] == pytest.approx(result.total_cumulative_tax)
    assert result.difference == pytest.approx(
        [n - c for n, c in zip(result.non_cumulative_tax, result.cumulative_tax)]
    )

    # Cumulative code collects the right tax on part-year earnings, non-cumulative overpays
    assert result.total_cumulative_tax == pytest.approx(result.annual_tax, abs=0.01)
    assert result.total_non_cumulative_tax > result.total_cumulative_tax


def test_income_tax_comparison_empty_schedule():
    result = compare_income_tax([])

    assert result.catch_up_allowance == 0
    assert result.annual_tax == 0
    assert result.cumulative_tax == [0.0] * 12


def test_nic_period_table():
    df = period_table(compare_director_nic(30000, "monthly"))

    assert isinstance(df, pd.DataFrame)
    assert list(df.index) == list(range(1, 13))
    assert df.index.name == "period"
    assert df.loc[1, "month"] == "Apr"
    assert df.loc[12, "month"] == "Mar"
    assert df["standard"].sum() == pytest.approx(df["alternative"].sum())


def test_weekly_nic_period_table_has_no_months():
    df = period_table(compare_director_nic(30000, "weekly"))

    assert len(df) == 52
    assert "month" not in df.columns


def test_income_tax_period_table():
    df = period_table(compare_income_tax([{"amount": 40000, "startPeriod": 1}]))

    assert len(df) == 12
    assert df.loc[12, "cumulative_tax_to_date"] == pytest.approx(5486)
    assert (df["difference"] == df["non_cumulative_tax"] - df["cumulative_tax"]).all()


def test_tool_wrappers_return_plain_json():
    """Tool wrappers return camelCase, JSON-serialisable dicts"""
    nic = calculate_director_nic(50000, "monthly", "2025-07-01")
    tax = calculate_income_tax([{"amount": 50000, "startPeriod": 1}])

    assert nic["frequency"] == "monthly"
    assert nic["startDate"] == "2025-07-01"
    assert "standardRates" in nic
    assert nic["standardRates"][0]["cumulativePay"] > 0
    assert tax["schedule"] == [{"amount": 50000.0, "startPeriod": 1}]
    assert "cumulativeAllowanceUsed" in tax

    json.dumps(nic)
    json.dumps(tax)
