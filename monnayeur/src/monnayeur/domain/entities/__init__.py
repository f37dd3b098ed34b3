"""
Domain entities.
"""

from monnayeur.domain.entities.mint_account_layout import MintAccountLayout
from monnayeur.domain.entities.mint_identity import MintIdentity
from monnayeur.domain.entities.token_metadata import TokenMetadata

__all__ = [
    "MintAccountLayout",
    "MintIdentity",
    "TokenMetadata",
]
