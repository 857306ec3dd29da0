"""
Ledger gateway: the keeper's only path to the chain.

One `Web3LedgerGateway` is built at startup and passed explicitly to the
directory, actuator, sweep and reactor. It holds the RPC connection, the DPOS
contract binding and the signing account.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping, Optional, Protocol

import bittensor as bt
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted

from stakekeeper.core.models import UndelegationEvent
from stakekeeper.ledger.abi import DPOS_ABI

EventHandler = Callable[[UndelegationEvent], None]


class LedgerGateway(Protocol):
    """Operations the keeper needs from the ledger."""

    async def read_call(self, method: str, *args: Any) -> Any:
        """Run a view call and return the decoded result."""

    async def send_transaction(self, method: str, *args: Any, value: int = 0) -> str:
        """Sign and submit a contract call; return the transaction hash."""

    async def wait_for_confirmation(self, tx_hash: str) -> Mapping[str, Any]:
        """Block until the transaction has a receipt. Raises TimeoutError if it never lands."""

    async def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Call `handler` once per matching event, for as long as the process lives."""


class Web3LedgerGateway:
    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        *,
        private_key: Optional[str] = None,
        event_poll_s: float = 4.0,
    ) -> None:
        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self.contract = self.w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(contract_address),
            abi=DPOS_ABI,
        )
        self.account: Optional[LocalAccount] = Account.from_key(private_key) if private_key else None
        self.event_poll_s = event_poll_s

    @property
    def signer_address(self) -> Optional[str]:
        return self.account.address if self.account is not None else None

    def _coerce_args(self, args: tuple) -> list:
        # Contract calls reject non-checksummed addresses.
        return [
            AsyncWeb3.to_checksum_address(a) if isinstance(a, str) and AsyncWeb3.is_address(a) else a
            for a in args
        ]

    async def read_call(self, method: str, *args: Any) -> Any:
        fn = getattr(self.contract.functions, method)
        return await fn(*self._coerce_args(args)).call()

    async def send_transaction(self, method: str, *args: Any, value: int = 0) -> str:
        if self.account is None:
            raise RuntimeError("no signing key configured; cannot submit transactions")
        fn = getattr(self.contract.functions, method)(*self._coerce_args(args))
        sender = self.account.address
        nonce = await self.w3.eth.get_transaction_count(sender, "pending")
        tx = await fn.build_transaction({"from": sender, "value": int(value), "nonce": nonce})
        signed = self.account.sign_transaction(tx)
        tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        return AsyncWeb3.to_hex(tx_hash)

    async def wait_for_confirmation(self, tx_hash: str) -> Mapping[str, Any]:
        # web3's own receipt wait (120s default) is the only timeout applied.
        try:
            return await self.w3.eth.wait_for_transaction_receipt(tx_hash)
        except TimeExhausted as exc:
            raise TimeoutError(str(exc)) from exc

    async def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """
        Poll `eth_getLogs` for `event_name` and hand every log to `handler`.

        Polling starts at the block after the current head, so only events
        emitted after the call are delivered. A failed poll is logged and the
        same block range is retried on the next tick.
        """
        event = getattr(self.contract.events, event_name)()
        from_block = await self.w3.eth.block_number + 1
        bt.logging.info(f"Subscribed to {event_name} from block {from_block}")

        while True:
            await asyncio.sleep(self.event_poll_s)
            try:
                head = await self.w3.eth.block_number
                if head < from_block:
                    continue
                logs = await event.get_logs(from_block=from_block, to_block=head)
            except Exception as exc:
                bt.logging.warning(f"Polling {event_name} logs failed: {exc}")
                continue

            for log in logs:
                handler(
                    UndelegationEvent(
                        delegator=log["args"]["delegator"],
                        validator=log["args"]["validator"],
                        amount=int(log["args"]["amount"]),
                        block_number=log.get("blockNumber"),
                        tx_hash=AsyncWeb3.to_hex(log["transactionHash"]) if log.get("transactionHash") else None,
                    )
                )
            from_block = head + 1
