import asyncio

import pytest

from stakekeeper.core.errors import DirectoryExhaustedError, DirectoryReadError
from stakekeeper.keeper.sweep import run_startup_sweep

V1 = "0x" + "01" * 20
V2 = "0x" + "02" * 20
V5 = "0x" + "05" * 20


def test_sweep_remediates_only_stranded_validators(gateway):
    gateway.add_page([(V1, 0, 5)], last=False)
    gateway.add_page([(V2, 10, 0)], last=True)

    report = asyncio.run(run_startup_sweep(gateway, amount=1000))

    assert gateway.delegations == [(V1, 1000)]
    assert report.scanned == 2
    assert report.candidates == [V1]
    assert report.remediated == [V1]
    assert report.failed == []


def test_sweep_fails_when_directory_never_ends(gateway):
    gateway.endless = True

    with pytest.raises(DirectoryExhaustedError):
        asyncio.run(run_startup_sweep(gateway, max_pages=3))

    assert gateway.delegations == []


def test_sweep_aborts_on_directory_read_failure(gateway):
    async def boom(method, *args):
        raise TimeoutError("rpc timed out")

    gateway.read_call = boom

    with pytest.raises(DirectoryReadError):
        asyncio.run(run_startup_sweep(gateway))

    assert gateway.delegations == []


def test_sweep_continues_after_a_failed_remediation(gateway):
    gateway.add_page([(V1, 0, 5), (V2, 10, 0), (V5, 0, 9)], last=True)
    gateway.reject.add(V1)

    report = asyncio.run(run_startup_sweep(gateway, amount=7))

    assert gateway.delegations == [(V5, 7)]
    assert report.failed == [V1]
    assert report.remediated == [V5]


def test_sweep_remediates_sequentially(gateway):
    gateway.add_page([(V1, 0, 5), (V2, 0, 1), (V5, 0, 9)], last=True)

    asyncio.run(run_startup_sweep(gateway))

    assert [v for v, _ in gateway.delegations] == [V1, V2, V5]
    assert gateway.max_concurrent_sends == 1


def test_sweep_dry_run(gateway):
    gateway.add_page([(V1, 0, 5)], last=True)

    report = asyncio.run(run_startup_sweep(gateway, dry_run=True))

    assert gateway.delegations == []
    assert report.remediated == []
    assert report.skipped == [V1]
