"""Fixed-point primitives for pool exit math."""

from lp_adapter.math.fixed_point import AMP_PRECISION, ONE_18, Bfp

__all__ = ["AMP_PRECISION", "ONE_18", "Bfp"]
