"""Share and request types."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterator, Tuple

from pydantic import BaseModel

from ..codec import check_base, decode
from ..errors import (
    DuplicateIdentifierError,
    InsufficientSharesError,
    InvalidShareIdentifierError,
    InvalidThresholdError,
    ShareCountMismatch,
)


class ShareRecord(BaseModel):
    """Raw share entry as found in a share document."""

    base: int
    value: str


class ShareMeta(BaseModel):
    """Raw metadata entry: declared share count and threshold."""

    n: int
    k: int


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Share:
    """One share: identifier ``x`` and its ``y`` value written in ``base``."""

    x: int
    base: int
    raw_value: str

    def __post_init__(self) -> None:
        if isinstance(self.x, bool) or not isinstance(self.x, int) or self.x < 1:
            raise InvalidShareIdentifierError(self.x)
        check_base(self.base)

    @cached_property
    def y(self) -> int:
        return decode(self.raw_value, self.base)

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class ReconstructionRequest:
    threshold: int
    shares: Tuple[Share, ...]
    diagnostics: Tuple[ShareCountMismatch, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "shares", tuple(self.shares))
        object.__setattr__(self, "diagnostics", tuple(self.diagnostics))
        if self.threshold < 1:
            raise InvalidThresholdError(self.threshold)
        seen = set()
        for share in self.shares:
            if share.x in seen:
                raise DuplicateIdentifierError(share.x)
            seen.add(share.x)
        if self.threshold > len(self.shares):
            raise InsufficientSharesError(self.threshold, len(self.shares))

    def points(self) -> Tuple[Point, ...]:
        """Decoded points ordered by ascending x."""
        return tuple(share.point for share in sorted(self.shares, key=lambda s: s.x))
