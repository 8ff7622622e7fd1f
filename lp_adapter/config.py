"""Adapter configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from lp_adapter.constants import (
    BALANCER_VAULT,
    BB_A_USD,
    BB_A_USD_GAUGE,
    BB_A_USD_POOL_ID,
    DAI,
    DEFAULT_SLIPPAGE,
)
from lp_adapter.errors import ConfigError
from lp_adapter.models.types import is_valid_address, is_valid_pool_id, normalize_address
from lp_adapter.slippage import validate_tolerance

# Placeholder avatar; deployments always override it
_DEFAULT_AVATAR = "0x" + "00" * 19 + "01"


@dataclass(frozen=True)
class AdapterConfig:
    """Addresses and tolerance for one adapter deployment.

    Attributes:
        vault: Balancer Vault the exit goes through
        pool_id: balancerPoolId of the pool being exited
        bpt: Pool token (also the pool address)
        gauge: Liquidity gauge holding the staked BPT
        avatar: Account that holds the position and executes instructions
        exit_token: Token the position is withdrawn into
        slippage: Tolerance as an 18-decimal fraction (10^18 = 100%)
    """

    vault: str = BALANCER_VAULT
    pool_id: str = BB_A_USD_POOL_ID
    bpt: str = BB_A_USD
    gauge: str = BB_A_USD_GAUGE
    avatar: str = _DEFAULT_AVATAR
    exit_token: str = DAI
    slippage: int = DEFAULT_SLIPPAGE

    def __post_init__(self) -> None:
        for name in ("vault", "bpt", "gauge", "avatar", "exit_token"):
            address = getattr(self, name)
            if not is_valid_address(address):
                raise ConfigError(f"Invalid {name} address: {address}")
            object.__setattr__(self, name, normalize_address(address))
        if not is_valid_pool_id(self.pool_id):
            raise ConfigError(f"Invalid pool id: {self.pool_id}")
        object.__setattr__(self, "pool_id", self.pool_id.lower())
        try:
            validate_tolerance(self.slippage)
        except ValueError as err:
            raise ConfigError(str(err)) from err

    @classmethod
    def from_env(cls) -> AdapterConfig:
        """Build a config from ADAPTER_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        overrides: dict[str, str | int] = {}
        for name in ("vault", "pool_id", "bpt", "gauge", "avatar", "exit_token"):
            value = os.environ.get(f"ADAPTER_{name.upper()}")
            if value:
                overrides[name] = value
        slippage_raw = os.environ.get("ADAPTER_SLIPPAGE")
        if slippage_raw:
            try:
                overrides["slippage"] = int(slippage_raw)
            except ValueError as err:
                raise ConfigError(f"ADAPTER_SLIPPAGE must be an integer: {slippage_raw}") from err
        return cls(**overrides)  # type: ignore[arg-type]


# Default configuration instance
DEFAULT_ADAPTER_CONFIG = AdapterConfig()
