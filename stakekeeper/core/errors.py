"""Exceptions raised by the keeper and its ledger gateway."""


class KeeperError(Exception):
    """Base class for every keeper failure."""


class DirectoryReadError(KeeperError):
    """A validator read (paginated or single) failed on the network or while decoding."""


class DirectoryExhaustedError(KeeperError):
    """Pagination ran past the configured page bound without a last-page signal."""

    def __init__(self, max_pages: int, collected: int):
        super().__init__(
            f"validator directory did not signal its last page within {max_pages} pages "
            f"({collected} validators collected)"
        )
        self.max_pages = max_pages
        self.collected = collected


class RemediationError(KeeperError):
    """A delegation to a stranded validator did not go through."""

    def __init__(self, validator: str, message: str, *, tx_hash: str | None = None):
        super().__init__(f"{validator}: {message}")
        self.validator = validator
        self.tx_hash = tx_hash


class RemediationSubmissionError(RemediationError):
    """The delegate transaction was rejected before inclusion (nonce, funds, revert on estimate)."""


class ConfirmationFailure(RemediationError):
    """The delegate transaction was included but reverted."""


class ConfirmationTimeoutError(RemediationError):
    """The delegate transaction was never confirmed within the gateway's wait."""
