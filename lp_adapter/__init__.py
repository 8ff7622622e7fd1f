"""Withdrawal planning for gauge-staked Balancer LP positions."""

from lp_adapter.errors import AdapterError, InsufficientLiquidity, OracleFailure
from lp_adapter.planner import WithdrawalPlanner
from lp_adapter.position import Position
from lp_adapter.slippage import SlippageBounds, bounds, slippage_slice

__version__ = "0.1.0"
__all__ = [
    "WithdrawalPlanner",
    "Position",
    "SlippageBounds",
    "bounds",
    "slippage_slice",
    "AdapterError",
    "OracleFailure",
    "InsufficientLiquidity",
    "__version__",
]
