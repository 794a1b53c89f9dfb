"""
Tests for tax year rates loading
"""
import sys
import json
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.rates import RATES_PATH_ENV, load_rates, rates_path


def test_2025_26_constants(rates_2025):
    """Bundled file carries the 2025/26 figures"""
    ni = rates_2025.national_insurance.class_1
    assert ni.primary_threshold_annual == 12570
    assert ni.upper_earnings_limit == 50270
    assert ni.rate_between_thresholds == 0.12
    assert ni.rate_above_uel == 0.02

    it = rates_2025.income_tax
    assert it.personal_allowance == 12570
    assert it.basic_rate_limit == 50270
    assert it.higher_rate_limit == 125140
    assert (it.basic_rate, it.higher_rate, it.additional_rate) == (0.20, 0.40, 0.45)


def test_tax_year_dates(rates_2025):
    assert rates_2025.tax_year.start == date(2025, 4, 6)
    assert rates_2025.tax_year.end == date(2026, 4, 5)
    assert rates_2025.tax_year.days == 365


def test_rates_are_immutable(rates_2025):
    with pytest.raises(ValidationError):
        rates_2025.income_tax.personal_allowance = 0


def _write_rates(tmp_path, **overrides):
    data = json.loads(load_rates().model_dump_json())
    for section, values in overrides.items():
        data[section].update(values)
    path = tmp_path / "rates.json"
    path.write_text(json.dumps(data))
    return path


def test_env_override(tmp_path, monkeypatch):
    path = _write_rates(tmp_path, tax_year={"label": "test"})
    monkeypatch.setenv(RATES_PATH_ENV, str(path))

    assert rates_path() == path
    assert load_rates().tax_year.label == "test"


def test_thresholds_out_of_order_rejected(tmp_path):
    path = _write_rates(tmp_path, income_tax={"basic_rate_limit": 10000})

    with pytest.raises(ValueError, match="personal allowance"):
        load_rates(path)


def test_tax_year_must_end_after_start(tmp_path):
    path = _write_rates(tmp_path, tax_year={"end": "2025-01-01"})

    with pytest.raises(ValueError):
        load_rates(path)


def test_missing_rates_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rates(tmp_path / "missing.json")
