"""Mainnet addresses and protocol constants for the boosted-pool adapter.

Centralizes well-known addresses and fixed-point scales.
"""

from lp_adapter.models.types import is_valid_address, is_valid_pool_id

# Full unit of an 18-decimal token; also 100% for slippage tolerances
ONE = 10**18

# One basis point expressed in 18-decimal fixed point (1e18 / 10_000)
BASIS_POINT = 10**14

# Basis points in 100%
BPS_DENOMINATOR = 10_000

# Default slippage tolerance: 0.5% (50 bips)
DEFAULT_SLIPPAGE = 5 * 10**15


def _validate_address(name: str, address: str) -> str:
    """Validate and return an address, failing at import time on typos."""
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


def _validate_pool_id(name: str, pool_id: str) -> str:
    if not is_valid_pool_id(pool_id):
        raise ValueError(f"Invalid {name} pool id: {pool_id} (must be 0x + 64 hex chars)")
    return pool_id


BALANCER_VAULT = _validate_address("BALANCER_VAULT", "0xba12222222228d8ba445958a75a0704d566bf2c8")

# Balancer Boosted Aave USD (bb-a-USD) and its liquidity gauge
BB_A_USD = _validate_address("BB_A_USD", "0x7b50775383d3d6f0215a8f290f2c9e2eebbeceb2")
BB_A_USD_POOL_ID = _validate_pool_id(
    "BB_A_USD", "0x7b50775383d3d6f0215a8f290f2c9e2eebbeceb20000000000000000000000fe"
)
BB_A_USD_GAUGE = _validate_address("BB_A_USD_GAUGE", "0x68d019f64a7aa97e2d4e7363aee42251d08124fb")

DAI = _validate_address("DAI", "0x6b175474e89094c44da98b954eedeac495271d0f")
