"""
Domain value objects.
"""

from monnayeur.domain.value_objects.extension_type import ExtensionType
from monnayeur.domain.value_objects.launch_stage import LaunchStage, StageStatus

__all__ = [
    "ExtensionType",
    "LaunchStage",
    "StageStatus",
]
