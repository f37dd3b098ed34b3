"""
Blockchain infrastructure.
"""

from monnayeur.infrastructure.blockchain.keypair_wallet import KeypairWallet
from monnayeur.infrastructure.blockchain.solana_ledger_connection import (
    SolanaLedgerConnection,
)

__all__ = [
    "KeypairWallet",
    "SolanaLedgerConnection",
]
