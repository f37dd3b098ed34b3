"""
Test helpers.
"""

from helpers.fake_ledger import FakeLedgerConnection, decode_instructions

__all__ = [
    "FakeLedgerConnection",
    "decode_instructions",
]
