"""Balancer Fixed Point (Bfp) arithmetic.

18-decimal fixed-point numbers with explicit rounding direction, as in
Balancer's FixedPoint.sol. Exit math rounds every intermediate in the pool's
favour, so multiplication and division come in a down and an up flavour.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

__all__ = ["Bfp", "ONE_18", "AMP_PRECISION"]

ONE_18 = 10**18

# Amplification parameters are stored multiplied by this factor
AMP_PRECISION = 1000


def _ceil_div(numerator: int, denominator: int) -> int:
    if numerator == 0:
        return 0
    return (numerator - 1) // denominator + 1


class Bfp:
    """18-decimal fixed-point number; 1.5 is stored as 1_500_000_000_000_000_000."""

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: int) -> None:
        self.value = value

    @classmethod
    def from_wei(cls, wei: int) -> Bfp:
        """Wrap a raw amount that is already scaled to 18 decimals."""
        return cls(wei)

    @classmethod
    def from_decimal(cls, d: Decimal) -> Bfp:
        """Convert a non-negative fraction such as a swap fee of 0.0001.

        Raises:
            ValueError: If d is negative
        """
        if d < 0:
            raise ValueError(f"Bfp.from_decimal requires non-negative input, got {d}")
        return cls(int((d * ONE_18).quantize(Decimal("1"), rounding=ROUND_HALF_UP)))

    def to_decimal(self) -> Decimal:
        return Decimal(self.value) / Decimal(ONE_18)

    def mul_down(self, other: Bfp) -> Bfp:
        return Bfp(self.value * other.value // ONE_18)

    def mul_up(self, other: Bfp) -> Bfp:
        return Bfp(_ceil_div(self.value * other.value, ONE_18))

    def div_down(self, other: Bfp) -> Bfp:
        if other.value == 0:
            raise ZeroDivisionError("Bfp division by zero")
        return Bfp(self.value * ONE_18 // other.value)

    def div_up(self, other: Bfp) -> Bfp:
        if other.value == 0:
            raise ZeroDivisionError("Bfp division by zero")
        return Bfp(_ceil_div(self.value * ONE_18, other.value))

    def complement(self) -> Bfp:
        """1 - self, clamped at 0 for values above one."""
        return Bfp(max(0, ONE_18 - self.value))

    def add(self, other: Bfp) -> Bfp:
        return Bfp(self.value + other.value)

    def sub(self, other: Bfp) -> Bfp:
        """self - other, clamped at 0."""
        return Bfp(max(0, self.value - other.value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: Bfp) -> bool:
        return self.value < other.value

    def __le__(self, other: Bfp) -> bool:
        return self.value <= other.value

    def __gt__(self, other: Bfp) -> bool:
        return self.value > other.value

    def __ge__(self, other: Bfp) -> bool:
        return self.value >= other.value

    def __repr__(self) -> str:
        return f"Bfp({self.value})"

    def __str__(self) -> str:
        return str(self.to_decimal())
