"""End-to-end withdrawals against the simulated avatar.

The avatar starts with 1M BPT unstaked, 1M BPT staked and no DAI. Each test
plans a withdrawal, executes the instructions in order and checks the
resulting balances.
"""

import pytest

from lp_adapter.errors import InsufficientLiquidity
from lp_adapter.plan import PartialUnstake
from lp_adapter.planner import WithdrawalPlanner
from lp_adapter.slippage import bounds, slippage_slice
from tests.helpers import (
    AVATAR_BPT_BALANCE,
    AVATAR_GAUGE_BALANCE,
    ExecutionReverted,
    SimulatedAvatar,
    make_config,
)


def assert_starting_position(avatar: SimulatedAvatar) -> None:
    assert avatar.token_balance == 0
    assert avatar.bpt_balance == AVATAR_BPT_BALANCE
    assert avatar.gauge_balance == AVATAR_GAUGE_BALANCE


class TestFullExit:
    """Requests at or near the position value drain both balances."""

    def test_over_request_drains_position(
        self, avatar: SimulatedAvatar, planner: WithdrawalPlanner
    ) -> None:
        """Requesting 10x the position value exits everything."""
        assert_starting_position(avatar)
        liquidity = planner.current_position_value()

        instructions = planner.plan(liquidity * 10)
        assert len(instructions) == 2
        avatar.exec_all(instructions)

        assert avatar.bpt_balance == 0
        assert avatar.gauge_balance == 0
        band = bounds(liquidity, planner.slippage_tolerance())
        assert band.contains(avatar.token_balance)

    def test_request_within_slippage_drains_position(
        self, avatar: SimulatedAvatar, planner: WithdrawalPlanner
    ) -> None:
        """Slightly less than the position value still exits everything."""
        assert_starting_position(avatar)
        liquidity = planner.current_position_value()
        slippage = planner.slippage_tolerance()

        instructions = planner.plan(liquidity - slippage_slice(liquidity, slippage))
        assert len(instructions) == 2
        avatar.exec_all(instructions)

        assert avatar.bpt_balance == 0
        assert avatar.gauge_balance == 0
        assert bounds(liquidity, slippage).contains(avatar.token_balance)


class TestPartialUnstake:
    """Requests beyond the unstaked BPT unstake only the shortfall."""

    def test_three_quarters_of_liquidity(
        self, avatar: SimulatedAvatar, planner: WithdrawalPlanner
    ) -> None:
        """75% of the position needs about half of the staked BPT."""
        assert_starting_position(avatar)
        liquidity = planner.current_position_value()
        requested = liquidity // 100 * 75

        instructions = planner.plan(requested)
        assert len(instructions) == 2
        avatar.exec_all(instructions)

        assert avatar.token_balance == requested
        assert AVATAR_GAUGE_BALANCE // 100 * 49 < avatar.gauge_balance
        assert avatar.gauge_balance < AVATAR_GAUGE_BALANCE // 100 * 51

        bpt_swapped = 1_500_000 * 10**18
        max_leftovers = slippage_slice(bpt_swapped, planner.slippage_tolerance())
        assert avatar.bpt_balance < max_leftovers

    def test_clamped_unstake_executes(self, avatar: SimulatedAvatar) -> None:
        """A clamped plan burns exactly the BPT held.

        Just under the position value with no slippage, the exact-out quote
        needs more BPT than the position holds.
        """
        planner = WithdrawalPlanner.for_stable_pool(avatar, avatar.pool, make_config(slippage=0))
        liquidity = planner.current_position_value()
        requested = liquidity - 1

        decision = planner.decide(requested)
        assert isinstance(decision, PartialUnstake)
        assert decision.clamped
        assert decision.bpt_amount_in == AVATAR_BPT_BALANCE + AVATAR_GAUGE_BALANCE

        avatar.exec_all(planner.plan(requested))

        assert avatar.bpt_balance == 0
        assert avatar.gauge_balance == 0
        assert avatar.token_balance >= requested


class TestExitOnly:
    """Small requests leave the staked BPT alone."""

    def test_ten_percent_of_liquidity(
        self, avatar: SimulatedAvatar, planner: WithdrawalPlanner
    ) -> None:
        assert_starting_position(avatar)
        liquidity = planner.current_position_value()
        requested = liquidity // 100 * 10

        instructions = planner.plan(requested)
        assert len(instructions) == 1
        avatar.exec_all(instructions)

        assert avatar.token_balance == requested
        assert avatar.gauge_balance == AVATAR_GAUGE_BALANCE

        # 10% of the position is about 20% of the unstaked BPT
        slippage = planner.slippage_tolerance()
        bpt_used = AVATAR_BPT_BALANCE // 100 * 20
        unused_upper = AVATAR_BPT_BALANCE - (bpt_used - slippage_slice(bpt_used, slippage))
        unused_lower = AVATAR_BPT_BALANCE - (bpt_used + slippage_slice(bpt_used, slippage))
        assert unused_lower < avatar.bpt_balance < unused_upper

    def test_repeated_withdrawals_read_fresh_balances(self, avatar: SimulatedAvatar) -> None:
        """A second plan sees the balances left by the first."""
        config = make_config()
        first = WithdrawalPlanner.for_stable_pool(avatar, avatar.pool, config)
        requested = first.current_position_value() // 100 * 30
        avatar.exec_all(first.plan(requested))
        assert avatar.gauge_balance == AVATAR_GAUGE_BALANCE

        second = WithdrawalPlanner.for_stable_pool(avatar, avatar.pool, config)
        avatar.exec_all(second.plan(requested))

        assert avatar.token_balance == 2 * requested
        assert avatar.gauge_balance < AVATAR_GAUGE_BALANCE


class TestExecutionLimits:
    """Instructions carry limits the avatar enforces."""

    def test_stale_full_exit_reverts(
        self, avatar: SimulatedAvatar, planner: WithdrawalPlanner
    ) -> None:
        """A full exit planned before another withdrawal no longer fits the position."""
        stale = planner.plan(planner.current_position_value() * 10)

        other = WithdrawalPlanner.for_stable_pool(avatar, avatar.pool, make_config())
        avatar.exec_all(other.plan(other.current_position_value() // 2))

        with pytest.raises(ExecutionReverted):
            avatar.exec_all(stale)

    def test_position_larger_than_supply(self, avatar: SimulatedAvatar) -> None:
        avatar.bpt_balance = avatar.pool.bpt_total_supply
        planner = WithdrawalPlanner.for_stable_pool(avatar, avatar.pool, make_config())
        with pytest.raises(InsufficientLiquidity):
            planner.plan(1)
