"""Exit oracle backed by Balancer stable pool math.

Quotes single-token exits from a StablePool snapshot. Pool math failures are
converted to OracleFailure here, so the planner only ever sees adapter errors.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

import structlog

from lp_adapter.errors import InsufficientLiquidity, OracleFailure
from lp_adapter.math.fixed_point import AMP_PRECISION, Bfp
from lp_adapter.safe_int import SafeIntError

from .errors import PoolMathError, TokenNotInPool, ZeroBalanceError
from .pools import StablePool
from .scaling import fee_to_bfp, scale_down_down, scale_up
from .stable_math import calc_bpt_in_given_exact_tokens_out, calc_token_out_given_exact_bpt_in

logger = structlog.get_logger()


def _scaled_amp(pool: StablePool) -> int:
    """Amplification parameter multiplied by AMP_PRECISION, rounded half up."""
    amp = pool.amplification_parameter
    if not amp.is_finite() or amp <= 0:
        raise PoolMathError(f"Amplification parameter must be positive and finite, got {amp}")
    return int((amp * AMP_PRECISION).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StablePoolExitOracle:
    """ExitOracle for exiting `pool` into `exit_token`.

    Args:
        pool: Pool snapshot to quote against (never mutated)
        exit_token: Address of the token the position exits into

    Raises:
        TokenNotInPool: If exit_token is not one of the pool's tokens
    """

    def __init__(self, pool: StablePool, exit_token: str) -> None:
        index = pool.index_of(exit_token)
        if index is None:
            raise TokenNotInPool(f"Token {exit_token} is not in pool {pool.address}")
        self.pool = pool
        self.exit_token = exit_token
        self.exit_index = index

    def _scaled_balances(self) -> list[Bfp]:
        return [scale_up(r.balance, r.scaling_factor) for r in self.pool.reserves]

    def out_given_in(self, bpt_amount_in: int) -> int:
        """Exit-token amount paid for burning exactly `bpt_amount_in`.

        Raises:
            InsufficientLiquidity: If the pool has a zero balance or the burn
                exceeds the BPT supply
            OracleFailure: If the pool math fails to converge
        """
        if bpt_amount_in < 0:
            raise OracleFailure(f"bpt_amount_in must be non-negative, got {bpt_amount_in}")
        if bpt_amount_in == 0:
            return 0

        reserve = self.pool.reserves[self.exit_index]
        try:
            amount_out_scaled = calc_token_out_given_exact_bpt_in(
                amp=_scaled_amp(self.pool),
                balances=self._scaled_balances(),
                token_index=self.exit_index,
                bpt_amount_in=bpt_amount_in,
                bpt_total_supply=self.pool.bpt_total_supply,
                swap_fee=fee_to_bfp(self.pool.fee),
            )
            amount_out = scale_down_down(amount_out_scaled, reserve.scaling_factor)
        except ZeroBalanceError as e:
            self._log_failure("out_given_in", bpt_amount_in, e)
            raise InsufficientLiquidity(str(e)) from e
        except (PoolMathError, SafeIntError, ZeroDivisionError) as e:
            self._log_failure("out_given_in", bpt_amount_in, e)
            raise OracleFailure(f"out_given_in failed: {e}") from e

        logger.debug(
            "stable_oracle_out_given_in",
            pool=self.pool.address,
            bpt_amount_in=bpt_amount_in,
            amount_out=amount_out,
        )
        return amount_out

    def in_given_out(self, amount_out: int) -> int:
        """BPT burned to receive exactly `amount_out` of the exit token.

        Raises:
            InsufficientLiquidity: If amount_out is not below the pool's
                balance of the exit token
            OracleFailure: If the pool math fails to converge
        """
        if amount_out < 0:
            raise OracleFailure(f"amount_out must be non-negative, got {amount_out}")
        if amount_out == 0:
            return 0

        reserve = self.pool.reserves[self.exit_index]
        if amount_out >= reserve.balance:
            error = ZeroBalanceError(
                f"amount_out {amount_out} exceeds pool balance {reserve.balance}"
            )
            self._log_failure("in_given_out", amount_out, error)
            raise InsufficientLiquidity(str(error))

        amounts_out = [Bfp(0)] * len(self.pool.reserves)
        try:
            amounts_out[self.exit_index] = scale_up(amount_out, reserve.scaling_factor)
            bpt_in = calc_bpt_in_given_exact_tokens_out(
                amp=_scaled_amp(self.pool),
                balances=self._scaled_balances(),
                amounts_out=amounts_out,
                bpt_total_supply=self.pool.bpt_total_supply,
                swap_fee=fee_to_bfp(self.pool.fee),
            )
        except ZeroBalanceError as e:
            self._log_failure("in_given_out", amount_out, e)
            raise InsufficientLiquidity(str(e)) from e
        except (PoolMathError, SafeIntError, ZeroDivisionError) as e:
            self._log_failure("in_given_out", amount_out, e)
            raise OracleFailure(f"in_given_out failed: {e}") from e

        logger.debug(
            "stable_oracle_in_given_out",
            pool=self.pool.address,
            amount_out=amount_out,
            bpt_amount_in=bpt_in,
        )
        return bpt_in

    def _log_failure(self, quote: str, amount: int, error: Exception) -> None:
        logger.debug(
            "stable_oracle_failed",
            pool=self.pool.address,
            quote=quote,
            amount=amount,
            error=str(error),
        )
