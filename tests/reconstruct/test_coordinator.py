from itertools import combinations

import pytest

from shamir_recovery.config import ReconstructionSettings
from shamir_recovery.errors import (
    InconsistentSharesError,
    InsufficientSharesError,
    InvalidDigitError,
    InvalidFieldPrimeError,
    NonIntegerResultError,
)
from shamir_recovery.reconstruct import (
    ReconstructionCoordinator,
    ReconstructionResult,
    alternative_subsets,
    reconstruct,
    recover_secret,
    select_points,
)
from shamir_recovery.shares import Point, ReconstructionRequest, Share, extract
from shamir_recovery.utils import InMemoryMetrics

from conftest import evaluate_polynomial


def test_end_to_end_mixed_bases(share_document) -> None:
    # f(x) = 3x^2 + 2x + 17
    doc = share_document([17, 2, 3], xs=[1, 2, 3, 4, 5], bases=[10, 2, 16, 36, 7])
    result = recover_secret(doc)
    assert result.ok
    assert result.secret == 17
    assert result.points_used == (1, 2, 3)


def test_forty_digit_secret_round_trip(share_document) -> None:
    secret = 9876543210987654321098765432109876543210
    coeffs = [secret, 2**80 + 3, 10**25, 7]
    doc = share_document(coeffs, xs=[1, 2, 3, 4, 5, 6], bases=[16, 10, 36, 2, 8, 30])
    assert recover_secret(doc).unwrap() == secret


def test_subset_invariance(share_document) -> None:
    coeffs = [424242, -17, 5]
    xs = [2, 3, 5, 7, 11]
    doc = share_document(coeffs, xs=xs)
    request = extract(doc)
    for subset in combinations(request.shares, 3):
        sub_request = ReconstructionRequest(threshold=3, shares=subset)
        assert reconstruct(sub_request).secret == 424242


def test_exhaustive_check_accepts_clean_shares(share_document) -> None:
    doc = share_document([-5, 1, 1], xs=range(1, 7))
    settings = ReconstructionSettings(consistency_check="exhaustive")
    assert recover_secret(doc, settings).secret == -5


def test_corrupted_share_detected(share_document) -> None:
    doc = share_document([100, 3], xs=[1, 2, 3])
    doc["3"]["value"] = str(int(doc["3"]["value"]) + 1)
    result = recover_secret(doc)
    assert not result.ok
    assert isinstance(result.error, InconsistentSharesError)
    assert result.error.primary == (1, 2)
    assert result.error.alternative == (2, 3)
    with pytest.raises(InconsistentSharesError):
        result.unwrap()


def test_corruption_outside_alternative_needs_exhaustive(share_document) -> None:
    doc = share_document([100, 3], xs=[1, 2, 3, 4, 5])
    # Share 3 sits in neither the first nor the last pair.
    doc["3"]["value"] = "0"
    assert recover_secret(doc).secret == 100
    settings = ReconstructionSettings(consistency_check="exhaustive")
    result = recover_secret(doc, settings)
    assert isinstance(result.error, InconsistentSharesError)


def test_alternative_subset_non_integer_is_inconsistent() -> None:
    # (1,1),(2,2) give 0; (2,2),(5,3) give 4/3.
    shares = (Share(1, 10, "1"), Share(2, 10, "2"), Share(5, 10, "3"))
    request = ReconstructionRequest(threshold=2, shares=shares)
    result = reconstruct(request)
    assert isinstance(result.error, InconsistentSharesError)
    assert isinstance(result.error.__cause__, NonIntegerResultError)


def test_consistency_check_can_be_disabled(share_document) -> None:
    doc = share_document([100, 3], xs=[1, 2, 3])
    doc["3"]["value"] = "1"
    settings = ReconstructionSettings(consistency_check="off")
    assert recover_secret(doc, settings).secret == 100


def test_non_integer_result_reported() -> None:
    request = ReconstructionRequest(threshold=2, shares=(Share(1, 10, "1"), Share(3, 10, "2")))
    result = reconstruct(request)
    assert isinstance(result.error, NonIntegerResultError)
    assert result.secret is None


def test_extraction_errors_become_results() -> None:
    doc = {"keys": {"n": 2, "k": 3}, "1": {"base": "10", "value": "1"}, "2": {"base": "10", "value": "2"}}
    result = recover_secret(doc)
    assert isinstance(result.error, InsufficientSharesError)


def test_decode_errors_from_direct_request() -> None:
    request = ReconstructionRequest(threshold=1, shares=(Share(1, 16, "xyz"),))
    result = reconstruct(request)
    assert isinstance(result.error, InvalidDigitError)


def test_count_mismatch_travels_with_result(share_document) -> None:
    doc = share_document([8, 1], xs=[1, 2], n=4)
    result = recover_secret(doc)
    assert result.secret == 8
    assert [d.declared for d in result.diagnostics] == [4]


def test_field_prime_mode(share_document) -> None:
    prime = 2**61 - 1
    coeffs = [123456789, 987654321, 55]
    doc = {"keys": {"n": 4, "k": 3}}
    for x in (1, 2, 3, 4):
        doc[str(x)] = {"base": "16", "value": format(evaluate_polynomial(coeffs, x) % prime, "x")}
    settings = ReconstructionSettings(field_prime=prime)
    assert recover_secret(doc, settings).secret == 123456789


def test_repeated_calls_are_identical(share_document) -> None:
    doc = share_document([31, 4, 1], xs=[1, 2, 3, 4])
    request = extract(doc)
    coordinator = ReconstructionCoordinator()
    assert coordinator.reconstruct(request) == coordinator.reconstruct(request)


def test_metrics_recorded(share_document) -> None:
    sink = InMemoryMetrics()
    coordinator = ReconstructionCoordinator(metrics=sink)
    coordinator.recover(share_document([1, 1], xs=[1, 2]))
    coordinator.recover({"keys": {"n": 0, "k": 1}})
    assert sink.total("reconstructions", outcome="ok") == 1
    assert sink.total("reconstructions", outcome="InsufficientShares") == 1
    assert len(sink.timers["reconstruction_seconds"]) == 1


class TestSelection:
    def test_select_first_k_by_x(self) -> None:
        points = [Point(5, 0), Point(1, 0), Point(3, 0)]
        assert [p.x for p in select_points(points, 2)] == [1, 3]

    def test_alternative_modes(self) -> None:
        points = [Point(x, 0) for x in (1, 2, 3, 4)]
        assert [[p.x for p in s] for s in alternative_subsets(points, 2, "alternative", 10)] == [[3, 4]]
        assert list(alternative_subsets(points, 2, "off", 10)) == []
        exhaustive = list(alternative_subsets(points, 2, "exhaustive", 10))
        assert len(exhaustive) == 5
        assert len(list(alternative_subsets(points, 2, "exhaustive", 2))) == 2

    def test_no_alternatives_when_exactly_k(self) -> None:
        points = [Point(1, 0), Point(2, 0)]
        assert list(alternative_subsets(points, 2, "exhaustive", 10)) == []


class TestResult:
    def test_requires_exactly_one_outcome(self) -> None:
        with pytest.raises(ValueError):
            ReconstructionResult()
        with pytest.raises(ValueError):
            ReconstructionResult(secret=1, error=InsufficientSharesError(2, 1))

    def test_zero_secret_is_success(self) -> None:
        result = ReconstructionResult(secret=0)
        assert result.ok
        assert result.unwrap() == 0


class TestQuadraticScenario:
    """Points (1,4), (2,7), (3,12) lie on f(x) = x^2 + 3."""

    raw = {
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "10", "value": "12"},
    }

    def test_full_threshold_recovers_constant_term(self) -> None:
        result = recover_secret({"keys": {"n": 3, "k": 3}, **self.raw})
        assert result.secret == 3

    def test_too_low_threshold_is_flagged(self) -> None:
        # Lines through (1,4),(2,7) and (2,7),(3,12) cross x = 0 at 1 and -3.
        result = recover_secret({"keys": {"n": 3, "k": 2}, **self.raw})
        assert isinstance(result.error, InconsistentSharesError)


def test_non_invertible_modulus_comes_back_as_result() -> None:
    settings = ReconstructionSettings(field_prime=5)
    # Settings reject composites; force one in to exercise the engine path.
    object.__setattr__(settings, "field_prime", 4)
    doc = {"keys": {"n": 2, "k": 2}, "1": {"base": "10", "value": "5"}, "3": {"base": "10", "value": "7"}}
    result = recover_secret(doc, settings)
    assert not result.ok
    assert isinstance(result.error, InvalidFieldPrimeError)
