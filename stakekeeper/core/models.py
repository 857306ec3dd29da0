"""
Typed records decoded from the DPOS contract.

`ValidatorRecord.from_info` is the only place where the contract's positional
`ValidatorBasicInfo` tuple is mapped to names.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Declared order of the `ValidatorBasicInfo` struct returned by the contract.
VALIDATOR_INFO_FIELDS: Tuple[str, ...] = (
    "total_stake",
    "commission_reward",
    "commission_rate",
    "last_commission_change_block",
    "pending_undelegations_count",
    "owner",
    "description",
    "endpoint",
)

MAX_COMMISSION_RATE = 10_000  # basis points, precision up to 0.01%


class ValidatorRecord(BaseModel):
    """Snapshot of one validator, rebuilt on every read."""

    model_config = ConfigDict(frozen=True)

    address: str
    # Total number of tokens delegated to the validator (own + delegators').
    total_stake: int = Field(ge=0)
    # Owner's share of delegator rewards, accrued and not yet claimed.
    commission_reward: int = Field(ge=0)
    commission_rate: int = Field(ge=0, le=MAX_COMMISSION_RATE)
    last_commission_change_block: int = Field(ge=0)
    pending_undelegations_count: int = Field(ge=0)
    owner: str
    description: str = ""
    endpoint: str = ""

    @classmethod
    def from_info(cls, address: str, info: Sequence[Any]) -> "ValidatorRecord":
        """Decode a raw `ValidatorBasicInfo` tuple. Raises ValueError on a malformed tuple."""
        if len(info) != len(VALIDATOR_INFO_FIELDS):
            raise ValueError(
                f"expected {len(VALIDATOR_INFO_FIELDS)} validator info fields for {address}, got {len(info)}"
            )
        # pydantic.ValidationError subclasses ValueError.
        return cls(address=address, **dict(zip(VALIDATOR_INFO_FIELDS, info)))


class UndelegationEvent(BaseModel):
    """Decoded `Undelegated`-family log: `delegator` withdrew `amount` from `validator`."""

    delegator: str
    validator: str
    amount: int = Field(ge=0)
    block_number: Optional[int] = None
    tx_hash: Optional[str] = None


class DelegationReceipt(BaseModel):
    """Confirmation of a delegate transaction that landed with status 1."""

    validator: str
    tx_hash: str
    block_number: int
    amount: int
