"""Balancer stable pool math and the exit oracle built on it.

Pool types supported:
- Stable pools (StableSwap / Curve-style), single-token exits
"""

from .errors import (
    InvalidFeeError,
    InvalidScalingFactorError,
    PoolMathError,
    StableGetBalanceDidNotConverge,
    StableInvariantDidNotConverge,
    TokenNotInPool,
    ZeroBalanceError,
)
from .oracle import StablePoolExitOracle
from .parsing import parse_stable_pool
from .pools import StablePool, StableTokenReserve
from .scaling import fee_to_bfp, scale_down_down, scale_up
from .stable_math import (
    calc_bpt_in_given_exact_tokens_out,
    calc_token_out_given_exact_bpt_in,
    calculate_invariant,
    get_token_balance_given_invariant_and_all_other_balances,
)

__all__ = [
    # Pool dataclasses
    "StableTokenReserve",
    "StablePool",
    # Oracle
    "StablePoolExitOracle",
    # Parsing
    "parse_stable_pool",
    # Math
    "calculate_invariant",
    "get_token_balance_given_invariant_and_all_other_balances",
    "calc_token_out_given_exact_bpt_in",
    "calc_bpt_in_given_exact_tokens_out",
    # Scaling helpers
    "scale_up",
    "scale_down_down",
    "fee_to_bfp",
    # Errors
    "PoolMathError",
    "InvalidFeeError",
    "InvalidScalingFactorError",
    "ZeroBalanceError",
    "TokenNotInPool",
    "StableInvariantDidNotConverge",
    "StableGetBalanceDidNotConverge",
]
