"""Validator directory: paginated and single reads of the DPOS validator set."""

from __future__ import annotations

from typing import Any, List

import bittensor as bt

from stakekeeper.core.errors import DirectoryExhaustedError, DirectoryReadError
from stakekeeper.core.models import ValidatorRecord
from stakekeeper.ledger.gateway import LedgerGateway

DEFAULT_MAX_PAGES = 1000


def _decode(address: Any, info: Any) -> ValidatorRecord:
    try:
        return ValidatorRecord.from_info(str(address), tuple(info))
    except (TypeError, ValueError) as exc:
        raise DirectoryReadError(f"malformed validator info for {address}: {exc}") from exc


async def list_all_validators(
    gateway: LedgerGateway,
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> List[ValidatorRecord]:
    """
    Read every page of `getValidators(cursor)` starting at cursor 0.

    Stops on the first page flagged as last, so a directory whose last page is
    `k` costs exactly `k + 1` calls. Raises DirectoryExhaustedError if
    `max_pages` calls go by without that flag.
    """
    records: List[ValidatorRecord] = []
    for cursor in range(max_pages):
        try:
            page, is_last_page = await gateway.read_call("getValidators", cursor)
        except Exception as exc:
            raise DirectoryReadError(f"getValidators({cursor}) failed: {exc}") from exc

        records.extend(_decode(address, info) for address, info in page)
        bt.logging.debug(f"Validator page {cursor}: {len(page)} entries (last={bool(is_last_page)})")
        if is_last_page:
            return records

    raise DirectoryExhaustedError(max_pages, len(records))


async def get_validator(gateway: LedgerGateway, address: str) -> ValidatorRecord:
    try:
        info = await gateway.read_call("getValidator", address)
    except Exception as exc:
        raise DirectoryReadError(f"getValidator({address}) failed: {exc}") from exc
    return _decode(address, info)
