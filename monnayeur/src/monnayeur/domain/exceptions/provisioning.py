"""
Provisioning workflow exceptions.

Taxonomy:
- Precondition errors: invalid input, detected before any network call
- Planning errors: rent query failed, nothing built
- Submission errors: ledger rejected a transaction
- StageFailedError: submission error attributed to a workflow stage
"""

from typing import Any, Optional

from monnayeur.domain.exceptions.base import MonnayeurException, PreconditionError
from monnayeur.domain.value_objects.launch_stage import LaunchStage


class InvalidMetadataError(PreconditionError):
    """Token metadata is malformed or does not fit the ledger limits."""


class WalletNotConnectedError(PreconditionError):
    """Wallet does not expose a fee payer public key."""

    def __init__(
        self,
        message: str = "Wallet not connected: no fee payer public key",
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)


class InvalidOwnerError(PreconditionError):
    """Associated account owner is off the ed25519 curve."""

    def __init__(self, owner: str):
        """
        Initialize invalid owner error.

        Args:
            owner: Owner address that failed the curve check
        """
        super().__init__(
            f"Owner is off curve and off-curve owners are not allowed: {owner}",
            details={"owner": owner},
        )
        self.owner = owner


class UnsupportedExtensionError(PreconditionError):
    """Requested mint extension has no fixed size or is an account extension."""


class InvalidAmountError(PreconditionError):
    """Mint amount or decimals outside the ledger's integer range."""


class PlanningError(MonnayeurException):
    """Mint layout could not be planned (rent query failed)."""


class SubmissionError(MonnayeurException):
    """Ledger rejected a transaction or the submission failed."""


class LedgerConnectionError(SubmissionError):
    """RPC call to the ledger node failed."""


class AccountAlreadyExistsError(SubmissionError):
    """Ledger reported that the target account is already in use."""


class StageFailedError(MonnayeurException):
    """
    A network stage of the launch workflow failed.

    Earlier stages stay committed on-chain; partial_result describes them.
    """

    def __init__(
        self,
        stage: LaunchStage,
        cause: Exception,
        partial_result: Optional[Any] = None,
    ):
        """
        Initialize stage failure.

        Args:
            stage: Workflow stage that failed
            cause: Underlying exception
            partial_result: LaunchTokenResult with completed stages
        """
        super().__init__(
            f"Token launch failed at stage {stage.value}: {cause}",
            details={"stage": stage.value, "cause": type(cause).__name__},
        )
        self.stage = stage
        self.cause = cause
        self.partial_result = partial_result
