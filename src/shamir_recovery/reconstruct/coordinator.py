"""
Reconstruction coordinator.

Selects the k points to interpolate, cross-checks the answer against other
k-subsets when more than k shares are present, and wraps the outcome in a
ReconstructionResult instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations, islice
from typing import Any, Iterator, Optional, Sequence, Tuple

from ..arith import interpolate, interpolate_mod
from ..config import ReconstructionSettings
from ..errors import (
    InconsistentSharesError,
    NonIntegerResultError,
    ShamirError,
    ShareCountMismatch,
)
from ..shares import Point, ReconstructionRequest, extract
from ..utils.logging import get_logger
from ..utils.metrics import InMemoryMetrics, Timer

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReconstructionResult:
    secret: Optional[int] = None
    error: Optional[ShamirError] = None
    diagnostics: Tuple[ShareCountMismatch, ...] = ()
    points_used: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if (self.secret is None) == (self.error is None):
            raise ValueError("ReconstructionResult needs exactly one of secret or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> int:
        """Return the secret or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return self.secret  # type: ignore[return-value]


def select_points(points: Sequence[Point], k: int) -> Tuple[Point, ...]:
    """First k points by ascending x."""
    return tuple(sorted(points, key=lambda p: p.x)[:k])


def alternative_subsets(
    points: Sequence[Point],
    k: int,
    mode: str,
    limit: int,
) -> Iterator[Tuple[Point, ...]]:
    """Yield k-subsets other than the primary one, according to ``mode``."""
    ordered = sorted(points, key=lambda p: p.x)
    if mode == "off" or len(ordered) <= k:
        return
    primary = tuple(ordered[:k])
    if mode == "alternative":
        yield tuple(ordered[-k:])
        return
    others = (subset for subset in combinations(ordered, k) if subset != primary)
    yield from islice(others, limit)


class ReconstructionCoordinator:
    """Runs one reconstruction per call; holds no per-request state."""

    def __init__(
        self,
        settings: Optional[ReconstructionSettings] = None,
        metrics: Optional[InMemoryMetrics] = None,
    ) -> None:
        self.settings = settings or ReconstructionSettings()
        self.metrics = metrics

    def _interpolate(self, points: Sequence[Point]) -> int:
        if self.settings.field_prime is not None:
            return interpolate_mod(points, self.settings.field_prime)
        return interpolate(points)

    def _check_consistency(self, points: Sequence[Point], primary: Sequence[Point], secret: int, k: int) -> None:
        primary_xs = [p.x for p in primary]
        checked = 0
        for subset in alternative_subsets(
            points, k, self.settings.consistency_check, self.settings.max_consistency_subsets
        ):
            subset_xs = [p.x for p in subset]
            try:
                candidate = self._interpolate(subset)
            except NonIntegerResultError as exc:
                logger.warning("Subset x=%s does not interpolate to an integer", subset_xs)
                raise InconsistentSharesError(primary_xs, subset_xs) from exc
            if candidate != secret:
                logger.warning("Subsets x=%s and x=%s disagree", primary_xs, subset_xs)
                raise InconsistentSharesError(primary_xs, subset_xs)
            checked += 1
        logger.debug("Consistency check (%s) passed on %d subsets", self.settings.consistency_check, checked)

    def _run(self, request: ReconstructionRequest) -> ReconstructionResult:
        points = request.points()
        k = request.threshold
        primary = select_points(points, k)
        logger.debug("Interpolating %d of %d points: x=%s", k, len(points), [p.x for p in primary])
        secret = self._interpolate(primary)
        self._check_consistency(points, primary, secret, k)
        return ReconstructionResult(
            secret=secret,
            diagnostics=request.diagnostics,
            points_used=tuple(p.x for p in primary),
        )

    def reconstruct(self, request: ReconstructionRequest) -> ReconstructionResult:
        try:
            if self.metrics is None:
                result = self._run(request)
            else:
                with Timer(self.metrics, "reconstruction_seconds"):
                    result = self._run(request)
        except ShamirError as exc:
            logger.info("Reconstruction failed: %s", exc.kind)
            result = ReconstructionResult(error=exc, diagnostics=request.diagnostics)
        self._record(result)
        return result

    def recover(self, raw: Any, meta: Optional[Any] = None) -> ReconstructionResult:
        """Extract shares from a raw document and reconstruct, never raising ShamirError."""
        try:
            request = extract(raw, meta, metadata_key=self.settings.metadata_key)
        except ShamirError as exc:
            logger.info("Share extraction failed: %s", exc.kind)
            result = ReconstructionResult(error=exc)
            self._record(result)
            return result
        return self.reconstruct(request)

    def _record(self, result: ReconstructionResult) -> None:
        if self.metrics is None:
            return
        outcome = "ok" if result.ok else result.error.kind  # type: ignore[union-attr]
        self.metrics.emit_counter("reconstructions", outcome=outcome)


def reconstruct(
    request: ReconstructionRequest,
    settings: Optional[ReconstructionSettings] = None,
) -> ReconstructionResult:
    return ReconstructionCoordinator(settings).reconstruct(request)


def recover_secret(
    raw: Any,
    settings: Optional[ReconstructionSettings] = None,
    meta: Optional[Any] = None,
) -> ReconstructionResult:
    return ReconstructionCoordinator(settings).recover(raw, meta)
