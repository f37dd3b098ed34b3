"""
Launch workflow stages and stage outcomes.
"""

from enum import Enum


class LaunchStage(str, Enum):
    """Ordered stages of the token launch workflow."""

    PLANNING = "planning"
    MINT_CREATION = "mint_creation"
    HOLDER_ACCOUNT = "holder_account"
    SUPPLY_MINT = "supply_mint"


class StageStatus(str, Enum):
    """Outcome of a submitted stage."""

    SUBMITTED = "submitted"
    ALREADY_EXISTS = "already_exists"
