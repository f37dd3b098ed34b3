"""
Shared utilities for Monnayeur.

Logging reporter, keypair loading and the common test base class.
"""

from shared.reporter import SystemReporter

__all__ = [
    "SystemReporter",
]
