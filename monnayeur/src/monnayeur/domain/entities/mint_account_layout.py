"""
MintAccountLayout entity - storage plan for a new mint account.
"""

from dataclasses import dataclass
from typing import Tuple

from monnayeur.domain.value_objects.extension_type import ExtensionType


@dataclass(frozen=True)
class MintAccountLayout:
    """
    Byte layout and rent for a mint account with extensions.

    Attributes:
        extensions: Mint extensions the base size accounts for
        base_size: Mint size with the extensions, without metadata
        metadata_size: TLV header plus packed metadata length
        rent_lamports: Rent-exempt balance for base_size + metadata_size
    """

    extensions: Tuple[ExtensionType, ...]
    base_size: int
    metadata_size: int
    rent_lamports: int

    @property
    def total_size(self) -> int:
        """Account size once the metadata has been written."""
        return self.base_size + self.metadata_size

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "extensions": [ext.name for ext in self.extensions],
            "base_size": self.base_size,
            "metadata_size": self.metadata_size,
            "total_size": self.total_size,
            "rent_lamports": self.rent_lamports,
        }
