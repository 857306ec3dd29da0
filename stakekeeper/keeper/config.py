from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from stakekeeper.keeper.actuator import WEI_PER_TOKEN
from stakekeeper.keeper.directory import DEFAULT_MAX_PAGES
from stakekeeper.ledger.abi import DEFAULT_RPC_URL, DPOS_CONTRACT_ADDRESS, UNDELEGATION_EVENTS
from stakekeeper.utils.env import _env_bool, _env_float, _env_int, _env_str

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


@dataclass(frozen=True)
class KeeperEnvConfig:
    rpc_url: str
    contract_address: str
    private_key: Optional[str]
    delegation_amount: int  # smallest unit
    max_pages: int
    watch_event: str
    event_poll_s: float
    skip_sweep: bool
    dry_run: bool


def _die(msg: str) -> None:
    raise SystemExit(f"[stakekeeper] {msg}")


def load_keeper_env(*, dry_run: bool = False) -> KeeperEnvConfig:
    """
    Load keeper configuration from env/.env with strict validation.

    `dry_run` comes from the command line; KEEPER_DRY_RUN=true also enables it.
    A signing key is only required when transactions will actually be sent.
    """
    rpc_url = _env_str("KEEPER_RPC_URL", DEFAULT_RPC_URL) or DEFAULT_RPC_URL
    if not rpc_url.startswith("http"):
        _die(f"KEEPER_RPC_URL must be http(s). Got: {rpc_url!r}")

    contract_address = _env_str("KEEPER_CONTRACT_ADDRESS", DPOS_CONTRACT_ADDRESS) or DPOS_CONTRACT_ADDRESS
    if not _ADDRESS_RE.match(contract_address):
        _die(f"KEEPER_CONTRACT_ADDRESS is not a 0x-prefixed 20-byte address: {contract_address!r}")

    dry_run = dry_run or _env_bool("KEEPER_DRY_RUN", False)
    private_key = _env_str("WALLET_PRIVATE_KEY", "") or None
    if private_key is None and not dry_run:
        _die("Missing required env var: WALLET_PRIVATE_KEY (required unless running with dry-run).")

    amount_tokens = _env_int("KEEPER_DELEGATION_AMOUNT", 1000)
    if amount_tokens <= 0:
        _die(f"KEEPER_DELEGATION_AMOUNT must be positive. Got: {amount_tokens}")

    max_pages = _env_int("KEEPER_MAX_PAGES", DEFAULT_MAX_PAGES)
    if max_pages < 1:
        _die(f"KEEPER_MAX_PAGES must be at least 1. Got: {max_pages}")

    watch_event = _env_str("KEEPER_WATCH_EVENT", "Undelegated") or "Undelegated"
    if watch_event not in UNDELEGATION_EVENTS:
        _die(f"Invalid KEEPER_WATCH_EVENT={watch_event!r} (expected one of {', '.join(UNDELEGATION_EVENTS)}).")

    event_poll_s = _env_float("KEEPER_EVENT_POLL_S", 4.0)
    event_poll_s = max(0.5, min(60.0, event_poll_s))

    return KeeperEnvConfig(
        rpc_url=rpc_url,
        contract_address=contract_address,
        private_key=private_key,
        delegation_amount=int(amount_tokens) * WEI_PER_TOKEN,
        max_pages=int(max_pages),
        watch_event=watch_event,
        event_poll_s=float(event_poll_s),
        skip_sweep=_env_bool("KEEPER_SKIP_SWEEP", False),
        dry_run=dry_run,
    )
