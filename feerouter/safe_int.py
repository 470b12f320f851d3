"""Checked integer arithmetic for thresholds and basis-point math.

Plain ints never fail: a negative refund or a zero denominator just
produces a wrong number. SafeInt raises instead:
- Underflow when a subtraction would go below zero
- DivisionByZero on a zero divisor (checked_div returns None instead)
- Uint256Overflow when to_uint256() is given an out-of-range value

    from feerouter.safe_int import S

    refund = (S(amount_in_maximum) - amount_in).value
    floor = S(min_out).mul_div(BPS_DENOMINATOR, BPS_DENOMINATOR - tolerance)
"""

from __future__ import annotations

import operator
from collections.abc import Callable

from feerouter.models.types import UINT256_MAX


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""


class DivisionByZero(SafeIntError):
    pass


class Underflow(SafeIntError):
    pass


class Uint256Overflow(SafeIntError):
    pass


def _raw(x: SafeInt | int) -> int:
    return x._value if isinstance(x, SafeInt) else x


class SafeInt:
    """Non-failing-silently wrapper around a Python int."""

    __slots__ = ("_value",)

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            value = value._value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _raw(other))

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _raw(other))

    __radd__ = __add__
    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Raises Underflow if other > self."""
        result = self._value - _raw(other)
        if result < 0:
            raise Underflow(f"{self._value} - {_raw(other)} is negative")
        return SafeInt(result)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Raises DivisionByZero if other is zero."""
        result = self.checked_div(other)
        if result is None:
            raise DivisionByZero(f"{self._value} // 0")
        return result

    def _compare(self, other: object, op: Callable[[int, int], bool]) -> bool:
        if isinstance(other, (SafeInt, int)):
            return op(self._value, _raw(other))
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        return self._compare(other, operator.eq)

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._compare(other, operator.ge)

    def min(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(min(self._value, _raw(other)))

    def max(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(max(self._value, _raw(other)))

    def checked_div(self, other: SafeInt | int) -> SafeInt | None:
        """Floor division, or None for a zero divisor."""
        divisor = _raw(other)
        if divisor == 0:
            return None
        return SafeInt(self._value // divisor)

    def mul_div(self, numerator: SafeInt | int, denominator: SafeInt | int) -> SafeInt:
        """self * numerator // denominator, multiplying first to keep precision."""
        return (self * numerator) // denominator

    def to_uint256(self) -> int:
        """Return the value as an int, or raise Uint256Overflow outside [0, 2^256-1]."""
        if not 0 <= self._value <= UINT256_MAX:
            raise Uint256Overflow(f"{self._value} is not a uint256")
        return self._value


S = SafeInt
