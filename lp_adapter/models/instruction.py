"""Instruction model: one call the avatar executes verbatim."""

from pydantic import BaseModel, Field

from lp_adapter.models.types import Address, Bytes, Uint256


class Instruction(BaseModel):
    """An already-encoded contract call.

    The planner decides how many instructions there are and in which order;
    the avatar executes each one as ``exec(to, value, data)``.
    """

    target: Address = Field(alias="to", description="Contract address to call.")
    value: Uint256 = Field(default="0", description="ETH value to send.")
    data: Bytes = Field(description="ABI-encoded function call.")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def selector(self) -> str:
        """First four bytes of the calldata as 0x-prefixed hex."""
        return self.data[:10]
