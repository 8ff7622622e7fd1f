"""Two-tier position snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lp_adapter.base import PositionSource


@dataclass(frozen=True)
class Position:
    """Unstaked and staked BPT balances, read at the start of a planning call.

    A Position also satisfies PositionSource, so a fixed snapshot can be
    handed to the planner directly.

    Attributes:
        unstaked: BPT held directly
        staked: BPT staked in the gauge
    """

    unstaked: int
    staked: int

    def __post_init__(self) -> None:
        if self.unstaked < 0 or self.staked < 0:
            raise ValueError(
                f"Position balances must be non-negative, got "
                f"unstaked={self.unstaked} staked={self.staked}"
            )

    @property
    def total(self) -> int:
        return self.unstaked + self.staked

    def balance_unstaked(self) -> int:
        return self.unstaked

    def balance_staked(self) -> int:
        return self.staked


def read_position(source: PositionSource) -> Position:
    """Query both balances once. Failures propagate to the caller."""
    return Position(unstaked=source.balance_unstaked(), staked=source.balance_staked())
