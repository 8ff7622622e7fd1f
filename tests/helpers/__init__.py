"""Test helpers module for shared test utilities.

- constants: Addresses, pool sizes and the starting position
- factories: Pool, config and request payload factories
- oracles: Fake oracles, position sources and encoders
- avatar: Simulated avatar that executes planned instructions
"""

from tests.helpers.avatar import ExecutionReverted, SimulatedAvatar
from tests.helpers.constants import (
    AVATAR,
    AVATAR_BPT_BALANCE,
    AVATAR_GAUGE_BALANCE,
    DAI,
    GAUGE,
    ONE,
    POOL,
    POOL_ID,
    SLIPPAGE,
    USDC,
    USDT,
    VAULT,
    WETH,
)
from tests.helpers.factories import make_config, make_pool, make_pool_payload
from tests.helpers.oracles import (
    CountingSource,
    FailingOracle,
    FailingSource,
    InverseFailingOracle,
    LinearOracle,
    RecordingEncoder,
)

__all__ = [
    # Constants
    "AVATAR",
    "AVATAR_BPT_BALANCE",
    "AVATAR_GAUGE_BALANCE",
    "DAI",
    "GAUGE",
    "ONE",
    "POOL",
    "POOL_ID",
    "SLIPPAGE",
    "USDC",
    "USDT",
    "VAULT",
    "WETH",
    # Factories
    "make_config",
    "make_pool",
    "make_pool_payload",
    # Doubles
    "CountingSource",
    "FailingOracle",
    "FailingSource",
    "InverseFailingOracle",
    "LinearOracle",
    "RecordingEncoder",
    "ExecutionReverted",
    "SimulatedAvatar",
]
