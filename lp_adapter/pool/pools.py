"""Stable pool dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from lp_adapter.models.types import normalize_address


@dataclass(frozen=True)
class StableTokenReserve:
    """Reserve information for a token in a stable pool.

    Attributes:
        token: Token address (case-insensitive comparison supported)
        balance: Raw balance in the token's native decimals
        scaling_factor: Multiplier to 18 decimals (10^12 for USDC)
    """

    token: str
    balance: int
    scaling_factor: int = 1


@dataclass(frozen=True)
class StablePool:
    """Balancer V2 stable pool (StableSwap / Curve-style) with BPT supply.

    Attributes:
        address: Pool contract address, which is also the BPT address
        pool_id: balancerPoolId (32-byte hex string)
        reserves: Token reserves, sorted by token address
        amplification_parameter: Raw A parameter (e.g. 1472). The math
            multiplies it by AMP_PRECISION internally.
        fee: Swap fee as decimal (e.g. 0.0001 for 0.01%)
        bpt_total_supply: Outstanding BPT, 18 decimals
    """

    address: str
    pool_id: str
    reserves: tuple[StableTokenReserve, ...]
    amplification_parameter: Decimal
    fee: Decimal
    bpt_total_supply: int

    def index_of(self, token: str) -> int | None:
        """Index of a token in reserves, or None if absent."""
        token_norm = normalize_address(token)
        for i, reserve in enumerate(self.reserves):
            if normalize_address(reserve.token) == token_norm:
                return i
        return None

    def with_exit(self, token_index: int, amount_out: int, bpt_in: int) -> StablePool:
        """Return the pool state after an exit paid `amount_out` for `bpt_in`.

        Used to simulate execution; quoting never mutates a pool.
        """
        reserves = list(self.reserves)
        reserve = reserves[token_index]
        reserves[token_index] = replace(reserve, balance=reserve.balance - amount_out)
        return replace(
            self,
            reserves=tuple(reserves),
            bpt_total_supply=self.bpt_total_supply - bpt_in,
        )
