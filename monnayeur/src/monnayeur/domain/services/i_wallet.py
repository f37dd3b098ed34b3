"""
Wallet interface.

The wallet owns the fee payer identity and adds its signature when
sending.
"""

from abc import ABC, abstractmethod
from typing import Optional

from solders.pubkey import Pubkey  # type: ignore
from solders.transaction import Transaction  # type: ignore

from monnayeur.domain.services.i_ledger_connection import ILedgerConnection


class IWallet(ABC):
    """
    Abstract interface for the fee payer's wallet.

    The fee payer pays fees and acts as mint authority and metadata
    update authority for mints created by the workflow.
    """

    @property
    @abstractmethod
    def public_key(self) -> Optional[Pubkey]:
        """Fee payer address, or None when the wallet is not connected."""

    @abstractmethod
    async def send_transaction(
        self,
        transaction: Transaction,
        connection: ILedgerConnection,
    ) -> str:
        """
        Sign as fee payer and submit a transaction.

        The transaction may already carry other signatures (e.g. the
        mint identity); those must be preserved.

        Args:
            transaction: Transaction with the fee payer as payer
            connection: Ledger connection used for submission

        Returns:
            Transaction signature (base58)

        Raises:
            SubmissionError: If signing or submission fails
        """
