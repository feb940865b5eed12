from .fraction import Fraction
from .lagrange import interpolate, interpolate_mod, is_prime, lagrange_basis_at_zero

__all__ = ["Fraction", "interpolate", "interpolate_mod", "is_prime", "lagrange_basis_at_zero"]
