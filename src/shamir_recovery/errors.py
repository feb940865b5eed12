"""Error taxonomy for share extraction and secret reconstruction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


class ShamirError(ValueError):
    """Base class for every reconstruction failure."""

    kind = "ShamirError"


class InvalidBaseError(ShamirError):
    kind = "InvalidBase"

    def __init__(self, base: object) -> None:
        super().__init__(f"Base must be an integer in [2, 36], got {base!r}")
        self.base = base


class InvalidDigitError(ShamirError):
    kind = "InvalidDigit"

    def __init__(self, raw_value: str, base: int, position: Optional[int] = None) -> None:
        if position is None:
            message = f"Value {raw_value!r} is not a number in base {base}"
        else:
            message = (
                f"Character {raw_value[position]!r} at position {position} "
                f"is not a valid base-{base} digit in {raw_value!r}"
            )
        super().__init__(message)
        self.raw_value = raw_value
        self.base = base
        self.position = position


class MalformedInputError(ShamirError):
    kind = "MalformedInput"


class InvalidShareIdentifierError(ShamirError):
    kind = "InvalidShareIdentifier"

    def __init__(self, identifier: object) -> None:
        super().__init__(f"Share identifier {identifier!r} is not a positive integer")
        self.identifier = identifier


class InvalidThresholdError(ShamirError):
    kind = "InvalidThreshold"

    def __init__(self, threshold: int) -> None:
        super().__init__(f"Threshold k must be >= 1, got {threshold}")
        self.threshold = threshold


class DuplicateIdentifierError(ShamirError):
    kind = "DuplicateIdentifier"

    def __init__(self, x: int) -> None:
        super().__init__(f"More than one share declares x = {x}")
        self.x = x


class DuplicateXValueError(ShamirError):
    kind = "DuplicateXValue"

    def __init__(self, x: int) -> None:
        super().__init__(f"Interpolation points repeat x = {x}")
        self.x = x


class InsufficientSharesError(ShamirError):
    kind = "InsufficientShares"

    def __init__(self, threshold: int, available: int) -> None:
        super().__init__(f"Threshold k = {threshold} needs more shares than the {available} supplied")
        self.threshold = threshold
        self.available = available


class NonIntegerResultError(ShamirError):
    kind = "NonIntegerResult"

    def __init__(self, numerator: int, denominator: int) -> None:
        super().__init__(f"Constant term {numerator}/{denominator} is not an integer")
        self.numerator = numerator
        self.denominator = denominator


class InconsistentSharesError(ShamirError):
    kind = "InconsistentShares"

    def __init__(self, primary: Sequence[int], alternative: Sequence[int]) -> None:
        super().__init__(
            f"Share subsets x={list(primary)} and x={list(alternative)} disagree on the secret"
        )
        self.primary: Tuple[int, ...] = tuple(primary)
        self.alternative: Tuple[int, ...] = tuple(alternative)


@dataclass(frozen=True)
class ShareCountMismatch:
    """Declared share count differs from the number of shares present.

    Reported next to a result, never raised.
    """

    declared: int
    actual: int

    kind = "ShareCountMismatch"

    @property
    def message(self) -> str:
        return f"Metadata declares n = {self.declared} but {self.actual} shares are present"


class InvalidFieldPrimeError(ShamirError):
    kind = "InvalidFieldPrime"

    def __init__(self, prime: object) -> None:
        super().__init__(f"Field modulus {prime!r} is not a prime")
        self.prime = prime
