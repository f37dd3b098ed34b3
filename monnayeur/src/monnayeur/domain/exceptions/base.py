"""
Base domain exceptions.
"""

from typing import Optional


class MonnayeurException(Exception):
    """Base exception for all Monnayeur errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class PreconditionError(MonnayeurException):
    """Input or environment invalid; detected before any network call."""


class MintIdentityConsumedError(MonnayeurException):
    """Transient mint keypair was asked to sign more than once."""

    def __init__(self, mint_address: str):
        """
        Initialize consumed identity error.

        Args:
            mint_address: Address of the already used mint identity
        """
        super().__init__(
            f"Mint identity already used: {mint_address}",
            details={"mint": mint_address},
        )
        self.mint_address = mint_address
