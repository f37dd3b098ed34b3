"""
Keypair-backed wallet.

Signs as fee payer with a local keypair and submits through the
ledger connection. Used by the CLI and by tests; browser wallets
implement IWallet on their side.
"""

from typing import Optional

from solders.keypair import Keypair  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.signature import Signature  # type: ignore
from solders.transaction import Transaction  # type: ignore

from shared.blockchain import load_keypair

from monnayeur.domain.exceptions import SubmissionError, WalletNotConnectedError
from monnayeur.domain.services.i_ledger_connection import ILedgerConnection
from monnayeur.domain.services.i_wallet import IWallet


class KeypairWallet(IWallet):
    """Wallet holding the fee payer keypair in memory."""

    def __init__(self, keypair: Optional[Keypair] = None):
        """
        Initialize keypair wallet.

        Args:
            keypair: Fee payer keypair (None = disconnected wallet)
        """
        self._keypair = keypair

    @classmethod
    def from_file(cls, keypair_path: str) -> "KeypairWallet":
        """
        Load the fee payer from a Solana CLI keypair file.

        Raises:
            WalletNotConnectedError: If the file is missing or malformed
        """
        try:
            keypair = load_keypair(keypair_path)
        except (OSError, ValueError) as e:
            raise WalletNotConnectedError(
                f"Could not load fee payer keypair: {e}",
                details={"keypair_path": keypair_path},
            ) from e
        return cls(keypair)

    @property
    def public_key(self) -> Optional[Pubkey]:
        """Fee payer address, None when no keypair is loaded."""
        return self._keypair.pubkey() if self._keypair else None

    async def send_transaction(
        self,
        transaction: Transaction,
        connection: ILedgerConnection,
    ) -> str:
        """
        Add the fee payer signature and submit.

        Existing signatures are kept: signing reuses the message's
        blockhash.
        """
        if self._keypair is None:
            raise SubmissionError("Wallet has no keypair loaded")

        message = transaction.message
        signers = message.account_keys[: message.header.num_required_signatures]
        if self._keypair.pubkey() not in signers:
            raise SubmissionError(
                "Wallet is not a required signer of the transaction",
                details={"wallet": str(self._keypair.pubkey())},
            )

        transaction.partial_sign([self._keypair], message.recent_blockhash)

        missing = [
            str(signer)
            for signer, signature in zip(signers, transaction.signatures)
            if signature == Signature.default()
        ]
        if missing:
            raise SubmissionError(
                "Transaction is missing signatures",
                details={"missing": missing},
            )

        return await connection.send_raw_transaction(bytes(transaction))
