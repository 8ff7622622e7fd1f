"""Tests for position snapshots."""

import pytest

from lp_adapter.base import PositionSource
from lp_adapter.errors import OracleFailure
from lp_adapter.position import Position, read_position
from tests.helpers import CountingSource, FailingSource


class TestPosition:
    """Tests for the Position dataclass."""

    def test_total(self) -> None:
        assert Position(unstaked=3, staked=4).total == 7

    def test_negative_balance_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Position(unstaked=-1, staked=0)

    def test_is_a_position_source(self) -> None:
        position = Position(unstaked=3, staked=4)
        assert isinstance(position, PositionSource)
        assert position.balance_unstaked() == 3
        assert position.balance_staked() == 4

    def test_frozen(self) -> None:
        position = Position(unstaked=3, staked=4)
        with pytest.raises(AttributeError):
            position.unstaked = 5  # type: ignore[misc]


class TestReadPosition:
    """Tests for read_position."""

    def test_reads_both_balances_once(self) -> None:
        source = CountingSource(unstaked=10, staked=20)
        assert read_position(source) == Position(unstaked=10, staked=20)
        assert source.reads == 2

    def test_query_failure_propagates(self) -> None:
        with pytest.raises(OracleFailure, match="gauge balance"):
            read_position(FailingSource())
