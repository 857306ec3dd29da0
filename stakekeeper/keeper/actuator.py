"""
Remediation: delegate the configured amount to a stranded validator.

There is no lock or dedup key around `remediate`. If the sweep and an event
handler (or two event handlers) reach the same validator at once, both
delegate; the second delegation is accepted as extra stake.
"""

from __future__ import annotations

from typing import Optional

import bittensor as bt

from stakekeeper.core.errors import (
    ConfirmationFailure,
    ConfirmationTimeoutError,
    RemediationSubmissionError,
)
from stakekeeper.core.models import DelegationReceipt
from stakekeeper.ledger.gateway import LedgerGateway

WEI_PER_TOKEN = 10**18
DEFAULT_DELEGATION_AMOUNT = 1000 * WEI_PER_TOKEN


async def remediate(
    gateway: LedgerGateway,
    validator: str,
    amount: int = DEFAULT_DELEGATION_AMOUNT,
    *,
    dry_run: bool = False,
) -> Optional[DelegationReceipt]:
    """
    Submit `delegate(validator)` carrying `amount` and wait for its receipt.

    Returns None in dry-run mode. Never retries.
    """
    if dry_run:
        bt.logging.info(f"[dry-run] Would delegate {amount} to validator {validator}")
        return None

    bt.logging.info(f"Delegating {amount} to validator {validator}...")
    try:
        tx_hash = await gateway.send_transaction("delegate", validator, value=amount)
    except Exception as exc:
        raise RemediationSubmissionError(validator, f"delegate submission rejected: {exc}") from exc

    try:
        receipt = await gateway.wait_for_confirmation(tx_hash)
    except TimeoutError as exc:
        raise ConfirmationTimeoutError(validator, f"no receipt for {tx_hash}", tx_hash=tx_hash) from exc
    except Exception as exc:
        raise ConfirmationFailure(validator, f"receipt lookup for {tx_hash} failed: {exc}", tx_hash=tx_hash) from exc

    if receipt.get("status") != 1:
        raise ConfirmationFailure(validator, f"delegate transaction {tx_hash} reverted", tx_hash=tx_hash)

    bt.logging.success(f"Delegated {amount} to {validator} in block {receipt.get('blockNumber')} ({tx_hash})")
    return DelegationReceipt(
        validator=validator,
        tx_hash=tx_hash,
        block_number=int(receipt.get("blockNumber") or 0),
        amount=amount,
    )
