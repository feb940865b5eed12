"""Lagrange interpolation at x = 0, exact or over a prime field."""

from __future__ import annotations

from operator import index
from typing import Iterable, List, Sequence, Tuple

from ..errors import DuplicateXValueError, InsufficientSharesError, InvalidFieldPrimeError
from .fraction import Fraction

PointLike = Tuple[int, int]


def lagrange_basis_at_zero(xs: Sequence[int]) -> List[Fraction]:
    """Compute each basis polynomial L_i evaluated at zero as an exact fraction."""
    basis: List[Fraction] = []
    for i, xi in enumerate(xs):
        term = Fraction.from_integer(1)
        for j, xj in enumerate(xs):
            if i == j:
                continue
            if xi == xj:
                raise DuplicateXValueError(xi)
            term = term.mul(Fraction(-xj, xi - xj))
        basis.append(term)
    return basis


def interpolate(points: Iterable[PointLike]) -> int:
    """
    Recover the constant term of the polynomial through ``points``.

    Points are summed in the order given. Raises NonIntegerResultError when the
    constant term is not an integer, meaning the points do not lie on a common
    integer-coefficient polynomial of degree len(points) - 1.
    """
    point_list = [(index(x), index(y)) for x, y in points]
    if not point_list:
        raise InsufficientSharesError(1, 0)
    xs = [x for x, _ in point_list]
    basis = lagrange_basis_at_zero(xs)
    secret = Fraction.from_integer(0)
    for (_, y), weight in zip(point_list, basis):
        secret = secret.add(weight.mul(y))
    return secret.to_integer()


def interpolate_mod(points: Iterable[PointLike], prime: int) -> int:
    """Recover the constant term over GF(prime); the result lies in [0, prime)."""
    point_list = [(index(x), index(y)) for x, y in points]
    if not point_list:
        raise InsufficientSharesError(1, 0)
    secret = 0
    for j, (xj, yj) in enumerate(point_list):
        numerator = 1
        denominator = 1
        for m, (xm, _) in enumerate(point_list):
            if m == j:
                continue
            if (xj - xm) % prime == 0:
                raise DuplicateXValueError(xj)
            numerator = (numerator * (-xm)) % prime
            denominator = (denominator * (xj - xm)) % prime
        try:
            inv = pow(denominator, -1, prime)
        except ValueError as exc:
            raise InvalidFieldPrimeError(prime) from exc
        secret = (secret + yj * numerator * inv) % prime
    return secret


# Miller-Rabin witnesses; deterministic below 3.3e24, probabilistic above.
_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    for p in _WITNESSES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _WITNESSES:
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True
