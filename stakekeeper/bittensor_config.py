from __future__ import annotations

import argparse

import bittensor as bt

from stakekeeper.utils.config import add_args as _add_keeper_args


def config() -> bt.config:
    """
    Build the process config: bittensor logging flags plus the keeper flags.

    Everything else (RPC endpoint, signer, amounts) comes from env/.env, see
    `stakekeeper.keeper.config.load_keeper_env`.
    """
    parser = argparse.ArgumentParser(conflict_handler="resolve")
    _add_keeper_args(parser)

    # bittensor exposes `bt.config(parser)` in newer versions, and `bt.Config(parser=...)` in older.
    try:
        return bt.config(parser)
    except Exception:
        return bt.Config(parser=parser)
