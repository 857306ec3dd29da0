"""Command-line configuration helpers for the stakekeeper process."""

from __future__ import annotations

import argparse
import os

import bittensor as bt


def add_args(parser: argparse.ArgumentParser) -> None:
    bt.logging.add_args(parser)

    parser.add_argument(
        "--keeper.name",
        type=str,
        default="stakekeeper",
        help="Process name used for the local log path segment.",
    )
    parser.add_argument(
        "--keeper.dry_run",
        action="store_true",
        default=False,
        help="Log delegations that would be submitted instead of sending them.",
    )


def check_config(config: "bt.Config") -> None:
    r"""Resolves the on-disk log directory for this process."""
    full_path = os.path.expanduser(
        "{}/{}".format(config.logging.logging_dir, config.keeper.name)
    )
    config.keeper.full_path = full_path
    if not os.path.exists(full_path):
        os.makedirs(full_path, exist_ok=True)
