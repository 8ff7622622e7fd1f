"""Pytest configuration and fixtures."""

import pytest

from lp_adapter.config import AdapterConfig
from lp_adapter.planner import WithdrawalPlanner
from lp_adapter.pool.oracle import StablePoolExitOracle
from lp_adapter.pool.pools import StablePool
from tests.helpers import (
    AVATAR_BPT_BALANCE,
    AVATAR_GAUGE_BALANCE,
    DAI,
    GAUGE,
    VAULT,
    SimulatedAvatar,
    make_config,
    make_pool,
)


@pytest.fixture
def pool() -> StablePool:
    """DAI/USDC/USDT stable pool with 150M of each token."""
    return make_pool()


@pytest.fixture
def config() -> AdapterConfig:
    """Adapter config for the test pool with 0.5% slippage."""
    return make_config()


@pytest.fixture
def oracle(pool: StablePool) -> StablePoolExitOracle:
    """Exit oracle quoting DAI exits from the test pool."""
    return StablePoolExitOracle(pool, DAI)


@pytest.fixture
def avatar(pool: StablePool) -> SimulatedAvatar:
    """Avatar holding 1M unstaked and 1M staked BPT, and no DAI."""
    return SimulatedAvatar(
        pool,
        exit_token=DAI,
        gauge=GAUGE,
        vault=VAULT,
        bpt_balance=AVATAR_BPT_BALANCE,
        gauge_balance=AVATAR_GAUGE_BALANCE,
    )


@pytest.fixture
def planner(avatar: SimulatedAvatar, pool: StablePool, config: AdapterConfig) -> WithdrawalPlanner:
    """Planner reading the avatar's live balances.

    Quotes come from the pool snapshot at construction time; build a new
    planner after executing instructions that change the pool.
    """
    return WithdrawalPlanner.for_stable_pool(avatar, pool, config)
