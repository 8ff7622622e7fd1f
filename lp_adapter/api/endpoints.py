"""API endpoints for the withdrawal planner."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException

from lp_adapter.config import AdapterConfig
from lp_adapter.errors import OracleFailure
from lp_adapter.models.api import (
    BalanceRequest,
    BalanceResponse,
    BoundsModel,
    PlanRequest,
    PlanResponse,
    SlippageResponse,
)
from lp_adapter.plan import lower
from lp_adapter.planner import WithdrawalPlanner
from lp_adapter.pool.errors import TokenNotInPool
from lp_adapter.pool.parsing import parse_stable_pool
from lp_adapter.position import Position
from lp_adapter.slippage import SlippageBounds, count_basis_points

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_config() -> AdapterConfig:
    """Dependency provider for the adapter configuration.

    Override this in tests:
        app.dependency_overrides[get_config] = lambda: AdapterConfig(slippage=0)
    """
    return AdapterConfig.from_env()


def _build_planner(request: BalanceRequest, config: AdapterConfig) -> WithdrawalPlanner:
    pool = parse_stable_pool(request.pool)
    if pool is None:
        raise HTTPException(status_code=422, detail="Invalid pool data")

    position = Position(
        unstaked=int(request.position.unstaked),
        staked=int(request.position.staked),
    )
    try:
        return WithdrawalPlanner.for_stable_pool(position, pool, config)
    except TokenNotInPool as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _bounds_model(band: SlippageBounds) -> BoundsModel:
    return BoundsModel(lower=str(band.lower), upper=str(band.upper))


@router.get("/slippage")
def slippage(config: AdapterConfig = Depends(get_config)) -> SlippageResponse:
    """Configured slippage tolerance."""
    return SlippageResponse(
        slippage=str(config.slippage),
        basis_points=count_basis_points(config.slippage),
    )


@router.post("/balance")
def balance(
    request: BalanceRequest,
    config: AdapterConfig = Depends(get_config),
) -> BalanceResponse:
    """Value of the whole position in the exit token, with its slippage band.

    Error Handling:
        - Invalid request schema or pool data: 422
        - Oracle failure (e.g. insufficient pool liquidity): 422
    """
    planner = _build_planner(request, config)
    try:
        band = planner.forecast_bounds()
    except OracleFailure as e:
        logger.warning("balance_oracle_failure", pool=request.pool.address, error=str(e))
        raise HTTPException(status_code=422, detail=str(e)) from e

    return BalanceResponse(balance=str(band.forecast), bounds=_bounds_model(band))


@router.post("/plan")
def plan(
    request: PlanRequest,
    config: AdapterConfig = Depends(get_config),
) -> PlanResponse:
    """Plan a withdrawal of `requestedAmountOut` of the exit token.

    Error Handling:
        - Invalid request schema or pool data: 422
        - Oracle failure: 422 with the failure message, no instructions
    """
    requested_out = int(request.requested_amount_out)
    logger.info(
        "received_plan_request",
        pool=request.pool.address,
        requested_out=requested_out,
    )

    planner = _build_planner(request, config)
    try:
        band = planner.forecast_bounds()
        decision = planner.decide(requested_out)
        instructions = lower(decision, planner.encoder)
    except OracleFailure as e:
        logger.warning(
            "plan_oracle_failure",
            pool=request.pool.address,
            requested_out=requested_out,
            error=str(e),
        )
        raise HTTPException(status_code=422, detail=str(e)) from e

    logger.info(
        "returning_plan",
        kind=decision.kind,
        instruction_count=len(instructions),
    )
    return PlanResponse(
        kind=decision.kind,
        instructions=instructions,
        forecast=str(band.forecast),
        bounds=_bounds_model(band),
    )
