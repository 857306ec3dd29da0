import asyncio

import pytest

from stakekeeper.core.errors import (
    ConfirmationFailure,
    ConfirmationTimeoutError,
    RemediationError,
    RemediationSubmissionError,
)
from stakekeeper.keeper.actuator import DEFAULT_DELEGATION_AMOUNT, remediate

V1 = "0x" + "01" * 20


def test_default_amount_is_1000_tokens():
    assert DEFAULT_DELEGATION_AMOUNT == 1000 * 10**18


def test_remediate_delegates_and_returns_receipt(gateway):
    receipt = asyncio.run(remediate(gateway, V1, 123))

    assert gateway.delegations == [(V1, 123)]
    assert receipt is not None
    assert receipt.validator == V1
    assert receipt.block_number == 42
    assert receipt.amount == 123


def test_submission_rejection(gateway):
    gateway.reject.add(V1)

    with pytest.raises(RemediationSubmissionError) as err:
        asyncio.run(remediate(gateway, V1))

    assert err.value.validator == V1
    assert isinstance(err.value, RemediationError)


def test_reverted_receipt(gateway):
    gateway.receipt = {"status": 0, "blockNumber": 43}

    with pytest.raises(ConfirmationFailure) as err:
        asyncio.run(remediate(gateway, V1))

    assert err.value.tx_hash is not None


def test_confirmation_timeout(gateway):
    gateway.confirm_timeout = True

    with pytest.raises(ConfirmationTimeoutError):
        asyncio.run(remediate(gateway, V1))


def test_dry_run_sends_nothing(gateway):
    assert asyncio.run(remediate(gateway, V1, dry_run=True)) is None
    assert gateway.delegations == []
