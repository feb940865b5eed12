"""
Exact reconstruction of Shamir-shared secrets.

Share values arrive as digit strings in bases 2-36; they are decoded to
arbitrary-precision integers and combined by Lagrange interpolation at x = 0
using exact fractions, so no rounding can corrupt the recovered secret.
"""

from .arith import Fraction, interpolate, interpolate_mod
from .codec import decode, encode
from .config import ReconstructionSettings, load_settings
from .errors import (
    DuplicateIdentifierError,
    DuplicateXValueError,
    InconsistentSharesError,
    InsufficientSharesError,
    InvalidBaseError,
    InvalidDigitError,
    InvalidFieldPrimeError,
    InvalidShareIdentifierError,
    InvalidThresholdError,
    MalformedInputError,
    NonIntegerResultError,
    ShamirError,
    ShareCountMismatch,
)
from .reconstruct import ReconstructionCoordinator, ReconstructionResult, reconstruct, recover_secret
from .shares import Point, ReconstructionRequest, Share, extract

__all__ = [
    "Fraction",
    "interpolate",
    "interpolate_mod",
    "decode",
    "encode",
    "ReconstructionSettings",
    "load_settings",
    "DuplicateIdentifierError",
    "DuplicateXValueError",
    "InconsistentSharesError",
    "InsufficientSharesError",
    "InvalidBaseError",
    "InvalidDigitError",
    "InvalidFieldPrimeError",
    "InvalidShareIdentifierError",
    "InvalidThresholdError",
    "MalformedInputError",
    "NonIntegerResultError",
    "ShamirError",
    "ShareCountMismatch",
    "ReconstructionCoordinator",
    "ReconstructionResult",
    "reconstruct",
    "recover_secret",
    "Point",
    "ReconstructionRequest",
    "Share",
    "extract",
]
