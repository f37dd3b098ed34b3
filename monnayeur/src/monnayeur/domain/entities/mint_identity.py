"""
MintIdentity entity - transient keypair owning the new mint address.
"""

from typing import Optional

from solders.keypair import Keypair  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.transaction import Transaction  # type: ignore

from monnayeur.domain.exceptions import MintIdentityConsumedError


class MintIdentity:
    """
    Single-use signing identity for a mint account.

    The keypair is generated in memory, co-signs the mint creation
    transaction exactly once and is dropped right after. The mint
    account persists on-chain independently of this key.
    """

    def __init__(self, keypair: Optional[Keypair] = None):
        """
        Initialize mint identity.

        Args:
            keypair: Optional pre-generated keypair (fresh one if None)
        """
        self._keypair: Optional[Keypair] = keypair or Keypair()
        self._address: Pubkey = self._keypair.pubkey()

    @property
    def address(self) -> Pubkey:
        """Mint account address."""
        return self._address

    @property
    def consumed(self) -> bool:
        """True once the identity has signed."""
        return self._keypair is None

    def co_sign(self, transaction: Transaction) -> None:
        """
        Add the mint signature to a partially signed transaction.

        Signs against the blockhash already in the message so signatures
        added by other parties stay valid.

        Args:
            transaction: Transaction listing the mint as a signer

        Raises:
            MintIdentityConsumedError: If the identity already signed
        """
        if self._keypair is None:
            raise MintIdentityConsumedError(str(self._address))

        transaction.partial_sign([self._keypair], transaction.message.recent_blockhash)
        self._keypair = None

    def __repr__(self) -> str:
        return f"MintIdentity(address={self._address}, consumed={self.consumed})"
