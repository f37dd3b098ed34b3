"""
Monnayeur - Token-2022 mint provisioning.

Creates a fungible token mint with on-chain metadata, provisions the
holder's associated token account and mints the initial supply.
"""

__version__ = "0.1.0"
