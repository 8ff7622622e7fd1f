"""Pydantic models for the planner's HTTP surface.

Amounts are uint256 decimal strings; field names are camelCase on the wire.
"""

from pydantic import BaseModel, Field

from lp_adapter.models.instruction import Instruction
from lp_adapter.models.types import Address, PoolId, Uint256


class PositionModel(BaseModel):
    """Unstaked and staked BPT balances."""

    unstaked: Uint256 = Field(description="BPT held directly by the avatar.")
    staked: Uint256 = Field(description="BPT staked in the gauge.")


class ReserveModel(BaseModel):
    """One token reserve of a stable pool."""

    token: Address
    balance: Uint256 = Field(description="Balance in the token's native decimals.")
    scaling_factor: Uint256 = Field(
        default="1",
        alias="scalingFactor",
        description="Multiplier to 18 decimals (1000000000000 for USDC).",
    )

    model_config = {"populate_by_name": True}


class PoolModel(BaseModel):
    """Stable pool snapshot the exit is quoted against."""

    address: Address = Field(description="Pool (and BPT) address.")
    pool_id: PoolId = Field(alias="poolId")
    reserves: list[ReserveModel] = Field(min_length=2)
    amplification_parameter: str = Field(
        alias="amplificationParameter",
        description="Raw A parameter, e.g. '1472'.",
    )
    fee: str = Field(default="0.0001", description="Swap fee as a decimal fraction.")
    bpt_total_supply: Uint256 = Field(alias="bptTotalSupply")

    model_config = {"populate_by_name": True}


class BalanceRequest(BaseModel):
    """Position and pool to value."""

    position: PositionModel
    pool: PoolModel


class PlanRequest(BalanceRequest):
    """Withdrawal request."""

    requested_amount_out: Uint256 = Field(alias="requestedAmountOut")

    model_config = {"populate_by_name": True}


class BoundsModel(BaseModel):
    """Slippage band around a forecast."""

    lower: Uint256
    upper: Uint256


class BalanceResponse(BaseModel):
    """Current value of the whole position in the exit token."""

    balance: Uint256
    bounds: BoundsModel


class PlanResponse(BaseModel):
    """Planned withdrawal."""

    kind: str = Field(description="full_exit, exit_only or partial_unstake.")
    instructions: list[Instruction]
    forecast: Uint256 = Field(description="Value of the whole position before the withdrawal.")
    bounds: BoundsModel


class SlippageResponse(BaseModel):
    """Configured slippage tolerance."""

    slippage: Uint256 = Field(description="Tolerance as an 18-decimal fraction.")
    basis_points: int = Field(alias="basisPoints")

    model_config = {"populate_by_name": True}
