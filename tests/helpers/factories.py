"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_pool, make_config

    pool = make_pool(dai_balance=10**24)
"""

from decimal import Decimal

from lp_adapter.config import AdapterConfig
from lp_adapter.pool.pools import StablePool, StableTokenReserve
from tests.helpers.constants import (
    AVATAR,
    DAI,
    GAUGE,
    POOL,
    POOL_BPT_SUPPLY,
    POOL_DAI_BALANCE,
    POOL_ID,
    POOL_USDC_BALANCE,
    POOL_USDT_BALANCE,
    SLIPPAGE,
    USDC,
    USDT,
    VAULT,
)


def make_pool(
    dai_balance: int = POOL_DAI_BALANCE,
    usdc_balance: int = POOL_USDC_BALANCE,
    usdt_balance: int = POOL_USDT_BALANCE,
    bpt_total_supply: int = POOL_BPT_SUPPLY,
    amplification_parameter: str = "1472",
    fee: str = "0.0001",
) -> StablePool:
    """Create a DAI/USDC/USDT stable pool with sensible defaults.

    Reserves are ordered by token address, so DAI sits at index 0.
    """
    return StablePool(
        address=POOL,
        pool_id=POOL_ID,
        reserves=(
            StableTokenReserve(token=DAI, balance=dai_balance, scaling_factor=1),
            StableTokenReserve(token=USDC, balance=usdc_balance, scaling_factor=10**12),
            StableTokenReserve(token=USDT, balance=usdt_balance, scaling_factor=10**12),
        ),
        amplification_parameter=Decimal(amplification_parameter),
        fee=Decimal(fee),
        bpt_total_supply=bpt_total_supply,
    )


def make_config(slippage: int = SLIPPAGE, exit_token: str = DAI) -> AdapterConfig:
    """Create an adapter config pointing at the test pool and avatar."""
    return AdapterConfig(
        vault=VAULT,
        pool_id=POOL_ID,
        bpt=POOL,
        gauge=GAUGE,
        avatar=AVATAR,
        exit_token=exit_token,
        slippage=slippage,
    )


def make_pool_payload(pool: StablePool | None = None) -> dict[str, object]:
    """JSON body for a pool, as the HTTP surface expects it."""
    pool = pool or make_pool()
    return {
        "address": pool.address,
        "poolId": pool.pool_id,
        "reserves": [
            {
                "token": r.token,
                "balance": str(r.balance),
                "scalingFactor": str(r.scaling_factor),
            }
            for r in pool.reserves
        ],
        "amplificationParameter": str(pool.amplification_parameter),
        "fee": str(pool.fee),
        "bptTotalSupply": str(pool.bpt_total_supply),
    }
