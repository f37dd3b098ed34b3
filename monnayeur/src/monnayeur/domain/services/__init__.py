"""
Domain service interfaces.
"""

from monnayeur.domain.services.i_ledger_connection import ILedgerConnection
from monnayeur.domain.services.i_wallet import IWallet

__all__ = [
    "ILedgerConnection",
    "IWallet",
]
