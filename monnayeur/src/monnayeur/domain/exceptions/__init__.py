"""
Domain exceptions package.
"""

from monnayeur.domain.exceptions.base import (
    MintIdentityConsumedError,
    MonnayeurException,
    PreconditionError,
)
from monnayeur.domain.exceptions.provisioning import (
    AccountAlreadyExistsError,
    InvalidAmountError,
    InvalidMetadataError,
    InvalidOwnerError,
    LedgerConnectionError,
    PlanningError,
    StageFailedError,
    SubmissionError,
    UnsupportedExtensionError,
    WalletNotConnectedError,
)

__all__ = [
    "MonnayeurException",
    "PreconditionError",
    "MintIdentityConsumedError",
    "InvalidMetadataError",
    "WalletNotConnectedError",
    "InvalidOwnerError",
    "UnsupportedExtensionError",
    "InvalidAmountError",
    "PlanningError",
    "SubmissionError",
    "LedgerConnectionError",
    "AccountAlreadyExistsError",
    "StageFailedError",
]
