"""
stakekeeper process: sweep the validator set once, then react to undelegations.

Run with `python -m neurons.keeper` (env/.env supplies the endpoint and key).
"""

from __future__ import annotations

import asyncio

import bittensor as bt

from stakekeeper import __version__
from stakekeeper.bittensor_config import config as build_config
from stakekeeper.keeper.config import KeeperEnvConfig, load_keeper_env
from stakekeeper.keeper.reactor import EventReactor
from stakekeeper.keeper.sweep import run_startup_sweep
from stakekeeper.ledger.gateway import Web3LedgerGateway
from stakekeeper.utils.config import check_config


def build_gateway(cfg: KeeperEnvConfig) -> Web3LedgerGateway:
    return Web3LedgerGateway(
        cfg.rpc_url,
        cfg.contract_address,
        private_key=cfg.private_key,
        event_poll_s=cfg.event_poll_s,
    )


async def run(cfg: KeeperEnvConfig, gateway: Web3LedgerGateway) -> None:
    bt.logging.info(
        f"🛡️ stakekeeper v{__version__} | rpc={cfg.rpc_url} contract={cfg.contract_address} "
        f"signer={gateway.signer_address} amount={cfg.delegation_amount} dry_run={cfg.dry_run}"
    )

    if cfg.skip_sweep:
        bt.logging.warning("Startup sweep disabled (KEEPER_SKIP_SWEEP=true)")
    else:
        await run_startup_sweep(
            gateway,
            amount=cfg.delegation_amount,
            max_pages=cfg.max_pages,
            dry_run=cfg.dry_run,
        )

    # The subscription only starts once the sweep has returned.
    reactor = EventReactor(
        gateway,
        amount=cfg.delegation_amount,
        event_name=cfg.watch_event,
        dry_run=cfg.dry_run,
    )
    await reactor.run()


def main() -> None:
    config = build_config()
    check_config(config)
    bt.logging.set_config(config=config.logging)

    cfg = load_keeper_env(dry_run=bool(config.keeper.dry_run))
    asyncio.run(run(cfg, build_gateway(cfg)))


if __name__ == "__main__":
    main()
