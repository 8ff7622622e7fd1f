"""Protocols for the planner's external collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lp_adapter.models.instruction import Instruction


@runtime_checkable
class PositionSource(Protocol):
    """Live balance queries for the two tiers of the position.

    Implementations raise OracleFailure when a query fails.
    """

    def balance_unstaked(self) -> int:
        """BPT held directly by the avatar."""
        ...

    def balance_staked(self) -> int:
        """BPT staked in the gauge on behalf of the avatar."""
        ...


@runtime_checkable
class ExitOracle(Protocol):
    """Pool-exit quotes in both directions.

    Both quotes must be monotonically non-decreasing in their argument.
    Implementations raise OracleFailure (or InsufficientLiquidity) when the
    pool cannot be quoted.
    """

    def out_given_in(self, bpt_amount_in: int) -> int:
        """Exit-token output for burning `bpt_amount_in` BPT."""
        ...

    def in_given_out(self, amount_out: int) -> int:
        """BPT that must be burned to receive exactly `amount_out`."""
        ...


class InstructionEncoder(Protocol):
    """Builds the calls the avatar executes."""

    def encode_unstake(self, amount: int) -> Instruction:
        """Withdraw `amount` BPT from the gauge."""
        ...

    def encode_exit_exact_bpt_in(self, bpt_amount_in: int, min_amount_out: int) -> Instruction:
        """Burn exactly `bpt_amount_in` BPT for at least `min_amount_out`."""
        ...

    def encode_exit_exact_tokens_out(self, amount_out: int, max_bpt_amount_in: int) -> Instruction:
        """Receive exactly `amount_out`, burning at most `max_bpt_amount_in` BPT."""
        ...
