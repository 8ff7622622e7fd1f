"""Stable pool parsing from HTTP request models."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

import structlog

from .pools import StablePool, StableTokenReserve

if TYPE_CHECKING:
    from lp_adapter.models.api import PoolModel

logger = structlog.get_logger()


def parse_stable_pool(model: PoolModel) -> StablePool | None:
    """Convert a validated PoolModel into a StablePool.

    The pool's own BPT is skipped if listed among the tokens (composable
    pools report it as a reserve).

    Returns:
        StablePool, or None if the pool data is unusable
    """
    try:
        amplification_parameter = Decimal(model.amplification_parameter)
        fee = Decimal(model.fee)
    except InvalidOperation:
        logger.warning(
            "stable_pool_invalid_decimal",
            pool=model.address,
            amp=model.amplification_parameter,
            fee=model.fee,
        )
        return None

    if not amplification_parameter.is_finite() or not fee.is_finite():
        logger.warning(
            "stable_pool_non_finite_decimal",
            pool=model.address,
            amp=model.amplification_parameter,
            fee=model.fee,
        )
        return None

    if amplification_parameter <= 0:
        logger.warning(
            "stable_pool_invalid_amp_value",
            pool=model.address,
            amp=str(amplification_parameter),
        )
        return None

    if fee < 0 or fee >= 1:
        logger.warning("stable_pool_invalid_fee", pool=model.address, fee=str(fee))
        return None

    pool_address_lower = model.address.lower()
    reserves: list[StableTokenReserve] = []
    for reserve in model.reserves:
        if reserve.token.lower() == pool_address_lower:
            continue
        reserves.append(
            StableTokenReserve(
                token=reserve.token.lower(),
                balance=int(reserve.balance),
                scaling_factor=int(reserve.scaling_factor),
            )
        )

    if len(reserves) < 2:
        logger.debug(
            "stable_pool_insufficient_tokens",
            pool=model.address,
            token_count=len(reserves),
        )
        return None

    if any(r.scaling_factor <= 0 for r in reserves):
        logger.debug("stable_pool_invalid_scaling_factor", pool=model.address)
        return None

    # Balancer orders pool tokens by address
    reserves.sort(key=lambda r: r.token)

    return StablePool(
        address=pool_address_lower,
        pool_id=model.pool_id.lower(),
        reserves=tuple(reserves),
        amplification_parameter=amplification_parameter,
        fee=fee,
        bpt_total_supply=int(model.bpt_total_supply),
    )
