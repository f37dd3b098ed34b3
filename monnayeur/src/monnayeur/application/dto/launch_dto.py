"""
Token launch Data Transfer Objects.

Requests carry raw user input; results carry the on-chain outcome of
each workflow stage.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from solders.pubkey import Pubkey  # type: ignore

from monnayeur.domain.entities.mint_account_layout import MintAccountLayout
from monnayeur.domain.value_objects.launch_stage import LaunchStage, StageStatus


@dataclass
class LaunchTokenRequest:
    """
    Request DTO for launching a token.

    initial_supply is in raw units (already scaled by 10**decimals).
    """

    name: str
    symbol: str
    uri: str
    initial_supply: int = 1_000_000_000
    decimals: int = 9
    additional_metadata: Tuple[Tuple[str, str], ...] = ()


@dataclass
class StageReceipt:
    """Outcome of one submitted workflow stage."""

    stage: LaunchStage
    signature: Optional[str]
    status: StageStatus = StageStatus.SUBMITTED

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "stage": self.stage.value,
            "signature": self.signature,
            "status": self.status.value,
        }


@dataclass
class LaunchTokenResult:
    """
    Result DTO for a token launch.

    Also used as the partial result of a failed launch: receipts only
    list the stages that completed.
    """

    mint_address: Pubkey
    holder_account: Optional[Pubkey] = None
    layout: Optional[MintAccountLayout] = None
    receipts: List[StageReceipt] = field(default_factory=list)

    def receipt_for(self, stage: LaunchStage) -> Optional[StageReceipt]:
        """Receipt of a given stage, None if it did not complete."""
        for receipt in self.receipts:
            if receipt.stage == stage:
                return receipt
        return None

    @property
    def completed(self) -> bool:
        """True when every network stage completed."""
        done = {receipt.stage for receipt in self.receipts}
        return {
            LaunchStage.MINT_CREATION,
            LaunchStage.HOLDER_ACCOUNT,
            LaunchStage.SUPPLY_MINT,
        } <= done

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "mint_address": str(self.mint_address),
            "holder_account": (
                str(self.holder_account) if self.holder_account else None
            ),
            "layout": self.layout.to_dict() if self.layout else None,
            "receipts": [receipt.to_dict() for receipt in self.receipts],
        }
