from typing import Callable, Dict, Optional, Sequence

import pytest

from shamir_recovery.codec import encode


def evaluate_polynomial(coeffs: Sequence[int], x: int) -> int:
    acc = 0
    for coeff in reversed(coeffs):
        acc = acc * x + coeff
    return acc


@pytest.fixture
def share_document() -> Callable[..., Dict]:
    """Build a share document from polynomial coefficients (constant term first)."""

    def build(
        coeffs: Sequence[int],
        xs: Sequence[int],
        bases: Optional[Sequence[int]] = None,
        k: Optional[int] = None,
        n: Optional[int] = None,
    ) -> Dict:
        bases = list(bases) if bases is not None else [10] * len(xs)
        doc: Dict = {"keys": {"n": len(xs) if n is None else n, "k": len(coeffs) if k is None else k}}
        for x, base in zip(xs, bases):
            doc[str(x)] = {"base": str(base), "value": encode(evaluate_polynomial(coeffs, x), base)}
        return doc

    return build
