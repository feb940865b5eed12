from .base import ALPHABET, MAX_BASE, MIN_BASE, check_base, decode, encode

__all__ = ["ALPHABET", "MAX_BASE", "MIN_BASE", "check_base", "decode", "encode"]
