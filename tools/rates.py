"""
Tax year rates loading
Reads thresholds and rates from data/ so a new tax year is a new JSON file, not a code change
"""
import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from models.schemas import TaxYearRates

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_RATES_PATH = Path(__file__).parent.parent / "data" / "tax_rates_2025_26.json"
RATES_PATH_ENV = "PAYROLL_TAX_RATES_PATH"


def rates_path() -> Path:
    """Rates file to use: $PAYROLL_TAX_RATES_PATH if set, else the bundled 2025/26 file"""
    override = os.getenv(RATES_PATH_ENV)
    return Path(override) if override else DEFAULT_RATES_PATH


def load_rates(path: Optional[Union[str, Path]] = None) -> TaxYearRates:
    """
    Load and validate a rates file

    Raises FileNotFoundError for a missing file and ValueError
    (pydantic ValidationError) when thresholds are out of order.
    """
    path = Path(path) if path else rates_path()
    with open(path) as f:
        data = json.load(f)

    rates = TaxYearRates.model_validate(data)
    logger.debug("Loaded %s rates from %s", rates.tax_year.label, path)
    return rates


@lru_cache(maxsize=1)
def default_rates() -> TaxYearRates:
    """Rates shared by the module-level calculator functions (loaded once)"""
    return load_rates()
