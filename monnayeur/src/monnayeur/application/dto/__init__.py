"""
Application DTOs.
"""

from monnayeur.application.dto.launch_dto import (
    LaunchTokenRequest,
    LaunchTokenResult,
    StageReceipt,
)

__all__ = [
    "LaunchTokenRequest",
    "LaunchTokenResult",
    "StageReceipt",
]
