"""Pydantic models for instructions and the HTTP surface."""

from lp_adapter.models.api import (
    BalanceRequest,
    BalanceResponse,
    BoundsModel,
    PlanRequest,
    PlanResponse,
    PoolModel,
    PositionModel,
    ReserveModel,
    SlippageResponse,
)
from lp_adapter.models.instruction import Instruction
from lp_adapter.models.types import (
    Address,
    Bytes,
    PoolId,
    Uint256,
    is_valid_address,
    normalize_address,
)

__all__ = [
    # Instruction
    "Instruction",
    # HTTP models
    "BalanceRequest",
    "BalanceResponse",
    "BoundsModel",
    "PlanRequest",
    "PlanResponse",
    "PoolModel",
    "PositionModel",
    "ReserveModel",
    "SlippageResponse",
    # Types
    "Address",
    "Bytes",
    "PoolId",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
