"""Slippage bounds around a forecast amount.

A tolerance is an 18-decimal fraction (10^18 = 100%). It is reduced to whole
basis points first, and the forecast is divided by 10_000 before multiplying,
so both steps truncate. The order matters at small amounts and is relied on
by callers checking realized outputs against these bounds.
"""

from __future__ import annotations

from dataclasses import dataclass

from lp_adapter.constants import BASIS_POINT, BPS_DENOMINATOR, ONE


@dataclass(frozen=True)
class SlippageBounds:
    """Symmetric band around a forecast.

    Attributes:
        lower: forecast - slice
        upper: forecast + slice
    """

    lower: int
    upper: int

    @property
    def forecast(self) -> int:
        return (self.lower + self.upper) // 2

    @property
    def slice(self) -> int:
        return (self.upper - self.lower) // 2

    def contains(self, amount: int) -> bool:
        """True if amount lies strictly inside the band."""
        return self.lower < amount < self.upper


def validate_tolerance(tolerance: int) -> int:
    """Check a tolerance is within [0, 100%].

    Raises:
        ValueError: If tolerance is negative or above 10^18
    """
    if isinstance(tolerance, bool) or not isinstance(tolerance, int):
        raise ValueError(f"Slippage tolerance must be an int, got {type(tolerance).__name__}")
    if tolerance < 0 or tolerance > ONE:
        raise ValueError(f"Slippage tolerance must be in [0, 10^18], got {tolerance}")
    return tolerance


def count_basis_points(tolerance: int) -> int:
    """Whole basis points in an 18-decimal tolerance (truncating)."""
    return validate_tolerance(tolerance) // BASIS_POINT


def slippage_slice(amount: int, tolerance: int) -> int:
    """(amount // 10_000) * bips.

    Raises:
        ValueError: If amount is negative or tolerance is out of range
    """
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")
    return (amount // BPS_DENOMINATOR) * count_basis_points(tolerance)


def bounds(forecast: int, tolerance: int) -> SlippageBounds:
    """Lower and upper bounds around `forecast` for `tolerance`."""
    amount_slice = slippage_slice(forecast, tolerance)
    return SlippageBounds(lower=forecast - amount_slice, upper=forecast + amount_slice)
