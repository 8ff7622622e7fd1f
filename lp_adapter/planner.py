"""Withdrawal planner for a gauge-staked LP position.

The WithdrawalPlanner is the entry point: given a requested exit-token
amount it reads the position, picks a withdrawal shape and returns the
instructions the avatar executes, in order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from lp_adapter.config import DEFAULT_ADAPTER_CONFIG, AdapterConfig
from lp_adapter.encoding import VaultExitEncoder
from lp_adapter.plan import WithdrawalDecision, decide, lower
from lp_adapter.pool.oracle import StablePoolExitOracle
from lp_adapter.position import read_position
from lp_adapter.slippage import SlippageBounds, bounds, validate_tolerance

if TYPE_CHECKING:
    from lp_adapter.base import ExitOracle, InstructionEncoder, PositionSource
    from lp_adapter.models.instruction import Instruction
    from lp_adapter.pool.pools import StablePool

logger = structlog.get_logger()


class WithdrawalPlanner:
    """Plans withdrawals from an unstaked + staked BPT position.

    Every call reads the balances afresh; nothing is cached between calls and
    the position is never modified. Oracle and balance failures propagate to
    the caller unchanged, so a call either returns a complete plan or raises.

    Args:
        position_source: Live balance queries
        oracle: Exit quotes for the pool
        encoder: Instruction builder
        slippage: Tolerance as an 18-decimal fraction (10^18 = 100%)

    Raises:
        ValueError: If slippage is outside [0, 10^18]
    """

    def __init__(
        self,
        position_source: PositionSource,
        oracle: ExitOracle,
        encoder: InstructionEncoder,
        slippage: int = DEFAULT_ADAPTER_CONFIG.slippage,
    ) -> None:
        self.position_source = position_source
        self.oracle = oracle
        self.encoder = encoder
        self._slippage = validate_tolerance(slippage)

    @classmethod
    def for_stable_pool(
        cls,
        position_source: PositionSource,
        pool: StablePool,
        config: AdapterConfig = DEFAULT_ADAPTER_CONFIG,
    ) -> WithdrawalPlanner:
        """Planner quoting and encoding exits from a Balancer stable pool.

        Raises:
            TokenNotInPool: If config.exit_token is not in the pool
        """
        return cls(
            position_source=position_source,
            oracle=StablePoolExitOracle(pool, config.exit_token),
            encoder=VaultExitEncoder.for_pool(pool, config),
            slippage=config.slippage,
        )

    def slippage_tolerance(self) -> int:
        """Configured tolerance (10^18 = 100%)."""
        return self._slippage

    def current_position_value(self) -> int:
        """Exit-token output of burning the whole position right now."""
        position = read_position(self.position_source)
        return self.oracle.out_given_in(position.total)

    def forecast_bounds(self) -> SlippageBounds:
        """Slippage band around current_position_value()."""
        return bounds(self.current_position_value(), self._slippage)

    def decide(self, requested_out: int) -> WithdrawalDecision:
        """Withdrawal shape for `requested_out`, without encoding it."""
        position = read_position(self.position_source)
        return decide(requested_out, position, self.oracle, self._slippage)

    def plan(self, requested_out: int) -> list[Instruction]:
        """Ordered instructions that withdraw `requested_out` of the exit token.

        Requests at or above the lower slippage bound of the position value
        drain the position instead (the caller receives whatever the full
        exit yields).

        Raises:
            OracleFailure: If a balance query or pool quote fails
            ValueError: If requested_out is negative
        """
        decision = self.decide(requested_out)
        instructions = lower(decision, self.encoder)
        logger.debug(
            "withdrawal_planned",
            kind=decision.kind,
            requested_out=requested_out,
            instruction_count=len(instructions),
        )
        return instructions
