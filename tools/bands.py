"""
Marginal band arithmetic shared by the NIC and income tax engines
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from models.schemas import IncomeTaxRates, NIClass1Rates, RateBand


@dataclass(frozen=True)
class Band:
    """Slice of pay between lower and upper charged at rate"""
    rate: float
    lower: float
    upper: float
    description: str


def _pct(rate: float) -> str:
    return f"{rate * 100:g}%"


def ni_bands(
    class_1: NIClass1Rates,
    primary_threshold: Optional[float] = None,
    divisor: int = 1,
) -> list[Band]:
    """NIC bands, optionally with a pro-rated PT (the UEL is never pro-rated)"""
    pt = class_1.primary_threshold_annual if primary_threshold is None else primary_threshold
    pt /= divisor
    uel = class_1.upper_earnings_limit / divisor

    return [
        Band(0.0, 0.0, pt, "0% (below PT)"),
        Band(class_1.rate_between_thresholds, pt, uel,
             f"{_pct(class_1.rate_between_thresholds)} (PT to UEL)"),
        Band(class_1.rate_above_uel, uel, float("inf"),
             f"{_pct(class_1.rate_above_uel)} (above UEL)"),
    ]


def income_tax_bands(income_tax: IncomeTaxRates, divisor: int = 1) -> list[Band]:
    pa = income_tax.personal_allowance / divisor
    basic_limit = income_tax.basic_rate_limit / divisor
    higher_limit = income_tax.higher_rate_limit / divisor

    return [
        Band(0.0, 0.0, pa, "0% (within Personal Allowance)"),
        Band(income_tax.basic_rate, pa, basic_limit,
             f"{_pct(income_tax.basic_rate)} (Basic rate)"),
        Band(income_tax.higher_rate, basic_limit, higher_limit,
             f"{_pct(income_tax.higher_rate)} (Higher rate)"),
        Band(income_tax.additional_rate, higher_limit, float("inf"),
             f"{_pct(income_tax.additional_rate)} (Additional rate)"),
    ]


def banded_liability(amount: float, bands: Sequence[Band]) -> float:
    """Sum of rate x slice for every band the amount strictly exceeds the floor of"""
    total = 0.0
    for band in bands:
        if amount <= band.lower:
            break
        total += (min(amount, band.upper) - band.lower) * band.rate
    return total


def bands_reached(amount: float, bands: Sequence[Band]) -> list[RateBand]:
    """
    Every charging band that some of the amount falls into

    Amounts still inside the zero-rate band report that band alone.
    """
    reached = [band for band in bands if band.rate > 0 and amount > band.lower]
    if not reached:
        reached = [bands[0]]
    return [
        RateBand(rate=round(band.rate * 100, 2), description=band.description)
        for band in reached
    ]


def cumulative(series: Iterable[float]) -> list[float]:
    """Running total: out[i] = sum(series[0..i])"""
    out = []
    total = 0.0
    for value in series:
        total += value
        out.append(total)
    return out
