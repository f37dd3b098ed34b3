"""
Application use cases.
"""

from monnayeur.application.use_cases.initialize_mint import InitializeMint
from monnayeur.application.use_cases.launch_token import LaunchToken
from monnayeur.application.use_cases.mint_initial_supply import MintInitialSupply
from monnayeur.application.use_cases.plan_mint_layout import PlanMintLayout
from monnayeur.application.use_cases.provision_holder_account import (
    ProvisionHolderAccount,
)

__all__ = [
    "InitializeMint",
    "LaunchToken",
    "MintInitialSupply",
    "PlanMintLayout",
    "ProvisionHolderAccount",
]
