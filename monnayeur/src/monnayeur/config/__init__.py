"""
Configuration module for Monnayeur.
"""

from monnayeur.config.settings import (
    ConnectionConfig,
    MonnayeurConfig,
    TokenDefaultsConfig,
    get_settings,
    load_config,
    override_settings,
    reset_settings,
)

__all__ = [
    "ConnectionConfig",
    "MonnayeurConfig",
    "TokenDefaultsConfig",
    "get_settings",
    "load_config",
    "override_settings",
    "reset_settings",
]
