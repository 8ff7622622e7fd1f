"""Withdrawal decisions and their lowering to instructions.

The planner first picks one of three shapes, then turns the shape into the
ordered instruction list:

- FullExit: unstake everything that is staked, burn the whole balance
- ExitOnly: the unstaked balance covers the exit, the gauge is untouched
- PartialUnstake: unstake the shortfall, then exit
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import structlog

from lp_adapter.slippage import bounds

if TYPE_CHECKING:
    from lp_adapter.base import ExitOracle, InstructionEncoder
    from lp_adapter.models.instruction import Instruction
    from lp_adapter.position import Position

logger = structlog.get_logger()


@dataclass(frozen=True)
class FullExit:
    """Drain the whole position.

    Attributes:
        unstake_amount: Entire staked balance (0 skips the unstake step)
        bpt_amount_in: Entire combined balance
        expected_amount_out: Quoted output of burning bpt_amount_in
        min_amount_out: Lower slippage bound of expected_amount_out
    """

    kind: ClassVar[str] = "full_exit"

    unstake_amount: int
    bpt_amount_in: int
    expected_amount_out: int
    min_amount_out: int


@dataclass(frozen=True)
class ExitOnly:
    """Exit from unstaked BPT alone."""

    kind: ClassVar[str] = "exit_only"

    amount_out: int
    bpt_amount_in: int


@dataclass(frozen=True)
class PartialUnstake:
    """Unstake the shortfall, then exit.

    When the quoted BPT exceeds the whole position the unstake is capped at
    the staked balance and the exit burns exactly what is held instead,
    with amount_out as its minimum output.

    Attributes:
        unstake_amount: bpt_amount_in - unstaked, capped at the staked balance
        amount_out: Exit-token amount requested (exact, or the minimum if clamped)
        bpt_amount_in: BPT quoted for amount_out, or the whole position if clamped
        clamped: True if unstake_amount hit the staked balance cap
    """

    kind: ClassVar[str] = "partial_unstake"

    unstake_amount: int
    amount_out: int
    bpt_amount_in: int
    clamped: bool = False


WithdrawalDecision = FullExit | ExitOnly | PartialUnstake


def decide(
    requested_out: int,
    position: Position,
    oracle: ExitOracle,
    tolerance: int,
) -> WithdrawalDecision:
    """Pick the withdrawal shape for `requested_out` against a position snapshot.

    A request at or above the lower slippage bound of the full position value
    drains the position; the requested amount is then ignored. Below that,
    the BPT needed for the exact amount decides whether staked BPT is touched.

    Args:
        requested_out: Exit-token amount wanted
        position: Balances read for this call
        oracle: Exit quotes
        tolerance: Slippage tolerance (10^18 = 100%)

    Returns:
        The decision. Oracle failures propagate unchanged.

    Raises:
        ValueError: If requested_out is negative
    """
    if requested_out < 0:
        raise ValueError(f"requested_out must be non-negative, got {requested_out}")

    max_withdrawable = oracle.out_given_in(position.total)
    ceiling = bounds(max_withdrawable, tolerance).lower

    if requested_out >= ceiling:
        logger.debug(
            "withdrawal_full_exit",
            requested_out=requested_out,
            max_withdrawable=max_withdrawable,
            ceiling=ceiling,
        )
        return FullExit(
            unstake_amount=position.staked,
            bpt_amount_in=position.total,
            expected_amount_out=max_withdrawable,
            min_amount_out=ceiling,
        )

    bpt_needed = oracle.in_given_out(requested_out)

    if bpt_needed <= position.unstaked:
        logger.debug(
            "withdrawal_exit_only",
            requested_out=requested_out,
            bpt_needed=bpt_needed,
            unstaked=position.unstaked,
        )
        return ExitOnly(amount_out=requested_out, bpt_amount_in=bpt_needed)

    shortfall = bpt_needed - position.unstaked
    unstake_amount = min(shortfall, position.staked)
    clamped = unstake_amount < shortfall
    if clamped:
        logger.debug(
            "partial_unstake_clamped",
            shortfall=shortfall,
            staked=position.staked,
            bpt_needed=bpt_needed,
        )
        bpt_needed = position.total
    logger.debug(
        "withdrawal_partial_unstake",
        requested_out=requested_out,
        bpt_needed=bpt_needed,
        unstake_amount=unstake_amount,
    )
    return PartialUnstake(
        unstake_amount=unstake_amount,
        amount_out=requested_out,
        bpt_amount_in=bpt_needed,
        clamped=clamped,
    )


def lower(decision: WithdrawalDecision, encoder: InstructionEncoder) -> list[Instruction]:
    """Encode a decision as the ordered instruction list.

    The unstake step, when present, always comes first.
    """
    if isinstance(decision, FullExit):
        instructions: list[Instruction] = []
        if decision.unstake_amount > 0:
            instructions.append(encoder.encode_unstake(decision.unstake_amount))
        instructions.append(
            encoder.encode_exit_exact_bpt_in(decision.bpt_amount_in, decision.min_amount_out)
        )
        return instructions

    if isinstance(decision, ExitOnly):
        return [encoder.encode_exit_exact_tokens_out(decision.amount_out, decision.bpt_amount_in)]

    if isinstance(decision, PartialUnstake):
        unstake = encoder.encode_unstake(decision.unstake_amount)
        if decision.clamped:
            return [
                unstake,
                encoder.encode_exit_exact_bpt_in(decision.bpt_amount_in, decision.amount_out),
            ]
        return [
            unstake,
            encoder.encode_exit_exact_tokens_out(decision.amount_out, decision.bpt_amount_in),
        ]

    raise TypeError(f"Unknown withdrawal decision: {decision!r}")
