"""
Shared fixtures
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.rates import DEFAULT_RATES_PATH, load_rates


@pytest.fixture
def rates_2025():
    """Bundled 2025/26 rates, loaded straight from the JSON file"""
    return load_rates(DEFAULT_RATES_PATH)
