"""Test doubles for the planner's collaborators."""

from dataclasses import dataclass, field

from lp_adapter.errors import InsufficientLiquidity, OracleFailure
from lp_adapter.models.instruction import Instruction


class LinearOracle:
    """Exit oracle with a constant BPT price of numerator / denominator.

    in_given_out rounds up, so burning the quoted BPT always covers the
    requested output.
    """

    def __init__(self, numerator: int = 1, denominator: int = 1) -> None:
        self.numerator = numerator
        self.denominator = denominator

    def out_given_in(self, bpt_amount_in: int) -> int:
        return bpt_amount_in * self.numerator // self.denominator

    def in_given_out(self, amount_out: int) -> int:
        return -(-amount_out * self.denominator // self.numerator)


class FailingOracle:
    """Oracle whose quotes always fail."""

    def __init__(self, error: OracleFailure | None = None) -> None:
        self.error = error or InsufficientLiquidity("pool has no liquidity")

    def out_given_in(self, bpt_amount_in: int) -> int:
        raise self.error

    def in_given_out(self, amount_out: int) -> int:
        raise self.error


class InverseFailingOracle(LinearOracle):
    """Forward quotes succeed, inverse quotes fail."""

    def in_given_out(self, amount_out: int) -> int:
        raise OracleFailure("inverse quote reverted")


@dataclass
class CountingSource:
    """PositionSource that records how often it was queried."""

    unstaked: int
    staked: int
    reads: int = 0

    def balance_unstaked(self) -> int:
        self.reads += 1
        return self.unstaked

    def balance_staked(self) -> int:
        self.reads += 1
        return self.staked


class FailingSource:
    """PositionSource whose staked balance query fails."""

    def balance_unstaked(self) -> int:
        return 0

    def balance_staked(self) -> int:
        raise OracleFailure("gauge balance query reverted")


@dataclass
class RecordingEncoder:
    """InstructionEncoder that records calls and returns placeholder instructions."""

    calls: list[tuple[str, tuple[int, ...]]] = field(default_factory=list)

    def _instruction(self, name: str, *args: int) -> Instruction:
        self.calls.append((name, args))
        return Instruction(target="0x" + "11" * 20, value="0", data="0x" + name.encode().hex())

    def encode_unstake(self, amount: int) -> Instruction:
        return self._instruction("unstake", amount)

    def encode_exit_exact_bpt_in(self, bpt_amount_in: int, min_amount_out: int) -> Instruction:
        return self._instruction("exit_exact_bpt_in", bpt_amount_in, min_amount_out)

    def encode_exit_exact_tokens_out(self, amount_out: int, max_bpt_amount_in: int) -> Instruction:
        return self._instruction("exit_exact_tokens_out", amount_out, max_bpt_amount_in)
