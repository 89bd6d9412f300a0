"""Numeric helpers shared by the calculators."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def ratio(numerator: float, denominator: float) -> float:
    """Divide without raising; a zero denominator yields inf or nan."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator
