import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Ensure repo root is on sys.path so `import stakekeeper` works under all pytest import modes.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SIGNER = "0x" + "ab" * 20


def validator_info(stake: int, reward: int, *, owner: str = "0x" + "0f" * 20) -> Tuple[Any, ...]:
    return (stake, reward, 500, 1200, 0, owner, "node description", "https://node.example")


class FakeGateway:
    """In-memory stand-in for Web3LedgerGateway."""

    def __init__(self) -> None:
        self.signer_address = SIGNER
        self.pages: List[Tuple[list, bool]] = []
        self.records: Dict[str, Tuple[Any, ...]] = {}
        self.endless = False
        self.read_calls: List[Tuple[str, tuple]] = []
        self.reject: set = set()
        self.receipt: Dict[str, Any] = {"status": 1, "blockNumber": 42}
        self.confirm_timeout = False
        self.delegations: List[Tuple[str, int]] = []
        self.events: list = []
        self.subscribed: Optional[str] = None
        self.calls: List[str] = []
        self._sending = 0
        self.max_concurrent_sends = 0

    def add_page(self, entries: List[Tuple[str, int, int]], *, last: bool) -> None:
        page = []
        for address, stake, reward in entries:
            info = validator_info(stake, reward)
            page.append((address, info))
            self.records[address] = info
        self.pages.append((page, last))

    def set_validator(self, address: str, stake: int, reward: int) -> None:
        self.records[address] = validator_info(stake, reward)

    async def read_call(self, method: str, *args: Any) -> Any:
        self.read_calls.append((method, args))
        self.calls.append(method)
        if method == "getValidators":
            if self.endless:
                return [], False
            return self.pages[args[0]]
        if method == "getValidator":
            return self.records[args[0]]
        raise AssertionError(f"unexpected read {method}")

    async def send_transaction(self, method: str, *args: Any, value: int = 0) -> str:
        assert method == "delegate"
        self.calls.append(method)
        # A delegation counts as in flight from submission until its receipt returns.
        self._sending += 1
        self.max_concurrent_sends = max(self.max_concurrent_sends, self._sending)
        await asyncio.sleep(0)
        if args[0] in self.reject:
            self._sending -= 1
            raise ValueError("insufficient funds for gas * price + value")
        self.delegations.append((args[0], value))
        return "0x" + f"{len(self.delegations):064x}"

    async def wait_for_confirmation(self, tx_hash: str) -> Dict[str, Any]:
        try:
            await asyncio.sleep(0)
            if self.confirm_timeout:
                raise TimeoutError(f"{tx_hash} not in chain after 120 seconds")
            return dict(self.receipt, transactionHash=tx_hash)
        finally:
            self._sending -= 1

    async def subscribe(self, event_name: str, handler) -> None:
        self.subscribed = event_name
        self.calls.append(f"subscribe:{event_name}")
        for event in self.events:
            handler(event)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()
