"""Conversions between native token decimals and 18-decimal fixed point.

A reserve's scaling factor is 10^(18 - decimals): 1 for DAI, 10^12 for USDC.
Amounts paid to the exiting account are scaled down rounding down; amounts
charged to it round up.
"""

from decimal import Decimal

from lp_adapter.math.fixed_point import Bfp

from .errors import InvalidFeeError, InvalidScalingFactorError


def _check_scaling_factor(scaling_factor: int) -> None:
    if scaling_factor <= 0:
        raise InvalidScalingFactorError(f"Scaling factor must be positive, got {scaling_factor}")


def scale_up(amount: int, scaling_factor: int) -> Bfp:
    """Native amount -> 18 decimals.

    Raises:
        InvalidScalingFactorError: If scaling_factor <= 0
    """
    _check_scaling_factor(scaling_factor)
    return Bfp.from_wei(amount * scaling_factor)


def scale_down_down(bfp: Bfp, scaling_factor: int) -> int:
    """18 decimals -> native amount, rounding down."""
    _check_scaling_factor(scaling_factor)
    return bfp.value // scaling_factor


def fee_to_bfp(swap_fee: Decimal) -> Bfp:
    """Swap fee fraction as Bfp.

    Raises:
        InvalidFeeError: If swap_fee is not in range [0, 1)
    """
    if not swap_fee.is_finite() or not 0 <= swap_fee < 1:
        raise InvalidFeeError(f"Swap fee must be in range [0, 1), got {swap_fee}")
    return Bfp.from_decimal(swap_fee)
