"""
Ledger connection interface.

Defines the RPC operations the provisioning workflow consumes.
"""

from abc import ABC, abstractmethod

from solders.hash import Hash  # type: ignore


class ILedgerConnection(ABC):
    """
    Abstract interface for a Solana ledger connection.

    Timeouts and transport retries belong to the implementation.
    """

    @abstractmethod
    async def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        """
        Get rent-exempt minimum balance for an account size.

        Args:
            size: Account data size in bytes

        Returns:
            Minimum balance in lamports

        Raises:
            LedgerConnectionError: If the RPC call fails
        """

    @abstractmethod
    async def get_latest_blockhash(self) -> Hash:
        """
        Get the latest blockhash for transaction construction.

        Returns:
            Recent blockhash

        Raises:
            LedgerConnectionError: If the RPC call fails
        """

    @abstractmethod
    async def send_raw_transaction(self, payload: bytes) -> str:
        """
        Submit a fully signed, serialized transaction.

        Used by wallet implementations inside send_transaction.

        Args:
            payload: Wire-format transaction bytes

        Returns:
            Transaction signature (base58)

        Raises:
            AccountAlreadyExistsError: If the ledger reports an account in use
            SubmissionError: If the ledger rejects the transaction
        """
