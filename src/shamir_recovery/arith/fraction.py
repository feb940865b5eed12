"""Exact rational numbers over Python's arbitrary-precision integers."""

from __future__ import annotations

from math import gcd
from typing import Tuple, Union

from ..errors import NonIntegerResultError

Number = Union["Fraction", int]


class Fraction:
    """
    Immutable rational kept in lowest terms with a positive denominator.

    Only integers and other fractions are accepted as operands; floats are
    rejected so no rounded value can leak into a computation.
    """

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        if not _is_int(numerator) or not _is_int(denominator):
            raise TypeError("Fraction terms must be integers")
        if denominator == 0:
            raise ZeroDivisionError(f"Fraction({numerator}, 0)")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        common = gcd(numerator, denominator)
        self._numerator = numerator // common
        self._denominator = denominator // common

    @classmethod
    def from_integer(cls, value: int) -> "Fraction":
        return cls(value, 1)

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def is_integer(self) -> bool:
        return self._denominator == 1

    def to_integer(self) -> int:
        if self._denominator != 1:
            raise NonIntegerResultError(self._numerator, self._denominator)
        return self._numerator

    def as_tuple(self) -> Tuple[int, int]:
        return self._numerator, self._denominator

    def add(self, other: Number) -> "Fraction":
        other = _coerce(other)
        return Fraction(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def sub(self, other: Number) -> "Fraction":
        return self.add(_coerce(other).negate())

    def mul(self, other: Number) -> "Fraction":
        other = _coerce(other)
        return Fraction(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def div(self, other: Number) -> "Fraction":
        other = _coerce(other)
        if other._numerator == 0:
            raise ZeroDivisionError("Fraction division by zero")
        return Fraction(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )

    def negate(self) -> "Fraction":
        return Fraction(-self._numerator, self._denominator)

    def __add__(self, other: object) -> "Fraction":
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)  # type: ignore[arg-type]

    __radd__ = __add__

    def __sub__(self, other: object) -> "Fraction":
        if not _is_operand(other):
            return NotImplemented
        return self.sub(other)  # type: ignore[arg-type]

    def __rsub__(self, other: object) -> "Fraction":
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other).sub(self)  # type: ignore[arg-type]

    def __mul__(self, other: object) -> "Fraction":
        if not _is_operand(other):
            return NotImplemented
        return self.mul(other)  # type: ignore[arg-type]

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "Fraction":
        if not _is_operand(other):
            return NotImplemented
        return self.div(other)  # type: ignore[arg-type]

    def __rtruediv__(self, other: object) -> "Fraction":
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other).div(self)  # type: ignore[arg-type]

    def __neg__(self) -> "Fraction":
        return self.negate()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fraction):
            return self.as_tuple() == other.as_tuple()
        if _is_int(other):
            return self._denominator == 1 and self._numerator == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return f"Fraction({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_operand(value: object) -> bool:
    return isinstance(value, Fraction) or _is_int(value)


def _coerce(value: Number) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if _is_int(value):
        return Fraction(value, 1)
    raise TypeError(f"Unsupported operand for exact arithmetic: {type(value).__name__}")
