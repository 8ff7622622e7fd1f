"""Checked integer wrapper for stable pool exit math.

Balances, BPT supplies and invariants are unsigned on-chain. The Newton-Raphson
solvers divide by terms that can reach zero and subtract terms that can cross
it, so their operands are wrapped in SafeInt and those cases raise instead of
producing a wrong quote:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow

Both are SafeIntError (an ArithmeticError), which the exit oracle turns into
OracleFailure.

Usage:
    from lp_adapter.safe_int import S

    d_p = (S(d) * S(d)) // (S(n_coins) * S(balance))
"""

from __future__ import annotations


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


def _raw(x: SafeInt | int) -> int:
    return x._value if isinstance(x, SafeInt) else x


class SafeInt:
    """Non-negative-by-subtraction integer with checked division.

    Addition and multiplication are plain Python int operations. Only SafeInt
    on the left-hand side is supported; wrap both operands.
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            value = value._value
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _raw(other))

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _raw(other))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Raises Underflow if the result would be negative."""
        result = self._value - _raw(other)
        if result < 0:
            raise Underflow(f"{self._value} - {_raw(other)} is negative")
        return SafeInt(result)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Raises DivisionByZero if other is zero."""
        divisor = _raw(other)
        if divisor == 0:
            raise DivisionByZero(f"{self._value} // 0")
        return SafeInt(self._value // divisor)

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding up, for amounts charged to the exiting account.

        Raises:
            DivisionByZero: If other is zero
        """
        divisor = _raw(other)
        if divisor == 0:
            raise DivisionByZero(f"ceil({self._value} / 0)")
        if self._value == 0:
            return SafeInt(0)
        return SafeInt((self._value - 1) // divisor + 1)

    def abs_diff(self, other: SafeInt | int) -> SafeInt:
        """|self - other|; the solvers stop once this is at most 1 wei."""
        return SafeInt(abs(self._value - _raw(other)))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SafeInt, int)):
            return self._value == _raw(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _raw(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _raw(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _raw(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _raw(other)


# Short alias used throughout the pool math
S = SafeInt
