"""Event reactor: re-check a validator each time it loses stake."""

from __future__ import annotations

import asyncio
import enum
from typing import Optional, Set

import bittensor as bt

from stakekeeper.core.errors import KeeperError
from stakekeeper.core.models import DelegationReceipt, UndelegationEvent
from stakekeeper.keeper.actuator import DEFAULT_DELEGATION_AMOUNT, remediate
from stakekeeper.keeper.directory import get_validator
from stakekeeper.keeper.eligibility import needs_remediation
from stakekeeper.ledger.gateway import LedgerGateway


class ReactorState(enum.Enum):
    IDLE = "idle"
    SUBSCRIBED = "subscribed"


class EventReactor:
    """
    Single always-on subscription to an undelegation event.

    Each event becomes its own asyncio task. Tasks are not ordered relative to
    each other and are not deduplicated, so two quick events for the same
    validator may both delegate to it.
    """

    def __init__(
        self,
        gateway: LedgerGateway,
        *,
        amount: int = DEFAULT_DELEGATION_AMOUNT,
        event_name: str = "Undelegated",
        dry_run: bool = False,
    ) -> None:
        self.gateway = gateway
        self.amount = amount
        self.event_name = event_name
        self.dry_run = dry_run
        self.state = ReactorState.IDLE
        self._inflight: Set[asyncio.Task] = set()

    async def run(self) -> None:
        if self.state is ReactorState.SUBSCRIBED:
            raise RuntimeError("reactor is already subscribed")
        self.state = ReactorState.SUBSCRIBED
        bt.logging.info(f"Listening for {self.event_name} events...")
        await self.gateway.subscribe(self.event_name, self.on_event)

    def on_event(self, event: UndelegationEvent) -> asyncio.Task:
        bt.logging.info(f"Undelegated {event.amount} from {event.validator} to {event.delegator}")
        task = asyncio.get_running_loop().create_task(self.handle(event))
        self._inflight.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            bt.logging.error(f"Unexpected error in {self.event_name} handler: {exc!r}")

    async def handle(self, event: UndelegationEvent) -> Optional[DelegationReceipt]:
        """Fetch the validator, and delegate to it if it is now stranded. Failures are logged, not raised."""
        try:
            record = await get_validator(self.gateway, event.validator)
            if not needs_remediation(record):
                bt.logging.debug(
                    f"{event.validator} still eligible (stake={record.total_stake}, "
                    f"commission_reward={record.commission_reward})"
                )
                return None
            return await remediate(self.gateway, record.address, self.amount, dry_run=self.dry_run)
        except KeeperError as exc:
            bt.logging.error(f"Handling {self.event_name} for {event.validator} failed: {exc}")
        return None

    async def drain(self) -> None:
        """Wait for every in-flight handler to finish."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)
