"""Calldata encoding for gauge withdrawals and Balancer Vault exits."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from eth_abi import encode  # type: ignore[attr-defined]

from lp_adapter.models.instruction import Instruction
from lp_adapter.models.types import normalize_address

if TYPE_CHECKING:
    from lp_adapter.config import AdapterConfig
    from lp_adapter.pool.pools import StablePool

# withdraw(uint256)
GAUGE_WITHDRAW_SELECTOR = bytes.fromhex("2e1a7d4d")

# exitPool(bytes32,address,address,(address[],uint256[],bytes,bool))
EXIT_POOL_SELECTOR = bytes.fromhex("8bdb3913")

EXIT_POOL_ARG_TYPES = ["bytes32", "address", "address", "(address[],uint256[],bytes,bool)"]


class StableExitKind(IntEnum):
    """StablePool exit kinds, encoded as the first word of userData."""

    EXACT_BPT_IN_FOR_ONE_TOKEN_OUT = 0
    EXACT_BPT_IN_FOR_TOKENS_OUT = 1
    BPT_IN_FOR_EXACT_TOKENS_OUT = 2


def _address_bytes(address: str) -> bytes:
    return bytes.fromhex(normalize_address(address)[2:])


def encode_gauge_withdraw(gauge: str, amount: int) -> Instruction:
    """Encode gauge.withdraw(amount)."""
    calldata = GAUGE_WITHDRAW_SELECTOR + encode(["uint256"], [amount])
    return Instruction(target=normalize_address(gauge), value="0", data="0x" + calldata.hex())


class VaultExitEncoder:
    """InstructionEncoder for a gauge-staked Balancer stable pool position.

    Sender and recipient of every exit are the avatar.

    Args:
        vault: Balancer Vault address
        pool_id: 32-byte pool id (hex)
        assets: Pool tokens in pool order
        exit_index: Index of the exit token in assets
        gauge: Liquidity gauge address
        avatar: Account executing the instructions
    """

    def __init__(
        self,
        *,
        vault: str,
        pool_id: str,
        assets: list[str],
        exit_index: int,
        gauge: str,
        avatar: str,
    ) -> None:
        if not 0 <= exit_index < len(assets):
            raise IndexError(f"exit_index {exit_index} out of range for {len(assets)} assets")
        self.vault = normalize_address(vault)
        self.pool_id = pool_id.lower()
        self.assets = [normalize_address(a) for a in assets]
        self.exit_index = exit_index
        self.gauge = normalize_address(gauge)
        self.avatar = normalize_address(avatar)

    @classmethod
    def for_pool(cls, pool: StablePool, config: AdapterConfig) -> VaultExitEncoder:
        """Encoder for exiting `pool` into `config.exit_token`.

        Raises:
            ValueError: If the exit token is not in the pool
        """
        exit_index = pool.index_of(config.exit_token)
        if exit_index is None:
            raise ValueError(f"Exit token {config.exit_token} is not in pool {pool.address}")
        return cls(
            vault=config.vault,
            pool_id=pool.pool_id,
            assets=[r.token for r in pool.reserves],
            exit_index=exit_index,
            gauge=config.gauge,
            avatar=config.avatar,
        )

    def encode_unstake(self, amount: int) -> Instruction:
        return encode_gauge_withdraw(self.gauge, amount)

    def encode_exit_exact_bpt_in(self, bpt_amount_in: int, min_amount_out: int) -> Instruction:
        user_data = encode(
            ["uint256", "uint256", "uint256"],
            [int(StableExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT), bpt_amount_in, self.exit_index],
        )
        min_amounts_out = [0] * len(self.assets)
        min_amounts_out[self.exit_index] = min_amount_out
        return self._exit_pool(min_amounts_out, user_data)

    def encode_exit_exact_tokens_out(self, amount_out: int, max_bpt_amount_in: int) -> Instruction:
        amounts_out = [0] * len(self.assets)
        amounts_out[self.exit_index] = amount_out
        user_data = encode(
            ["uint256", "uint256[]", "uint256"],
            [int(StableExitKind.BPT_IN_FOR_EXACT_TOKENS_OUT), amounts_out, max_bpt_amount_in],
        )
        return self._exit_pool(amounts_out, user_data)

    def _exit_pool(self, min_amounts_out: list[int], user_data: bytes) -> Instruction:
        avatar = _address_bytes(self.avatar)
        request = (
            [_address_bytes(a) for a in self.assets],
            min_amounts_out,
            user_data,
            False,  # toInternalBalance
        )
        encoded = encode(
            EXIT_POOL_ARG_TYPES,
            [bytes.fromhex(self.pool_id[2:]), avatar, avatar, request],
        )
        calldata = EXIT_POOL_SELECTOR + encoded
        return Instruction(target=self.vault, value="0", data="0x" + calldata.hex())
