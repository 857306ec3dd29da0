"""One-shot startup pass over the full validator directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import bittensor as bt

from stakekeeper.core.errors import RemediationError
from stakekeeper.keeper.actuator import DEFAULT_DELEGATION_AMOUNT, remediate
from stakekeeper.keeper.directory import DEFAULT_MAX_PAGES, list_all_validators
from stakekeeper.keeper.eligibility import needs_remediation
from stakekeeper.ledger.gateway import LedgerGateway


@dataclass
class SweepReport:
    scanned: int = 0
    candidates: List[str] = field(default_factory=list)
    remediated: List[str] = field(default_factory=list)
    # dry-run candidates; nothing was sent for them
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


async def run_startup_sweep(
    gateway: LedgerGateway,
    *,
    amount: int = DEFAULT_DELEGATION_AMOUNT,
    max_pages: int = DEFAULT_MAX_PAGES,
    dry_run: bool = False,
) -> SweepReport:
    """
    Remediate every stranded validator in the current directory.

    Candidates are handled one at a time so the signer never has two
    delegations racing for a nonce. A failed remediation is logged and the
    sweep moves on; directory read failures propagate.
    """
    bt.logging.info("Checking existing validators...")
    validators = await list_all_validators(gateway, max_pages=max_pages)
    stranded = [v for v in validators if needs_remediation(v)]

    report = SweepReport(scanned=len(validators), candidates=[v.address for v in stranded])
    bt.logging.info(f"Found {len(stranded)} validators with no stake that have a commission reward")

    for record in stranded:
        try:
            receipt = await remediate(gateway, record.address, amount, dry_run=dry_run)
        except RemediationError as exc:
            bt.logging.error(f"Remediation failed for {record.address}: {exc}")
            report.failed.append(record.address)
            continue
        if receipt is None:
            report.skipped.append(record.address)
        else:
            report.remediated.append(record.address)

    bt.logging.info(
        f"Startup sweep done: scanned={report.scanned} candidates={len(report.candidates)} "
        f"remediated={len(report.remediated)} skipped={len(report.skipped)} failed={len(report.failed)}"
    )
    return report
