"""Blockchain helpers shared across components."""

from shared.blockchain.keypairs import (
    get_keypair_address,
    keypair_to_json,
    load_keypair,
)

__all__ = [
    "load_keypair",
    "get_keypair_address",
    "keypair_to_json",
]
