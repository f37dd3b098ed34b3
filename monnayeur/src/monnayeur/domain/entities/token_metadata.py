"""
TokenMetadata entity - on-chain token metadata record.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from solders.pubkey import Pubkey  # type: ignore

from monnayeur.domain.exceptions import InvalidMetadataError


def _check_utf8(field_name: str, value: object) -> None:
    if not isinstance(value, str):
        raise InvalidMetadataError(
            f"Metadata field '{field_name}' must be a string",
            details={"field": field_name, "type": type(value).__name__},
        )
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidMetadataError(
            f"Metadata field '{field_name}' is not valid UTF-8",
            details={"field": field_name},
        ) from e


@dataclass(frozen=True)
class TokenMetadata:
    """
    Token metadata stored inside the mint account.

    Business rules:
    - name, symbol and uri are stored byte-for-byte (no trimming)
    - additional_metadata is an ordered sequence of (key, value) pairs
      with unique keys
    - update_authority None means the metadata can never be updated

    Attributes:
        mint: Mint address the metadata belongs to
        name: Token name
        symbol: Token symbol
        uri: Pointer to the off-chain JSON document
        additional_metadata: Extra key/value pairs, empty by default
        update_authority: Authority allowed to update the metadata
    """

    mint: Pubkey
    name: str
    symbol: str
    uri: str
    additional_metadata: Tuple[Tuple[str, str], ...] = ()
    update_authority: Optional[Pubkey] = None

    def __post_init__(self):
        """Validate metadata fields on creation."""
        if not isinstance(self.mint, Pubkey):
            raise InvalidMetadataError("Metadata mint must be a Pubkey")

        _check_utf8("name", self.name)
        _check_utf8("symbol", self.symbol)
        _check_utf8("uri", self.uri)

        pairs = []
        for entry in self.additional_metadata:
            if len(entry) != 2:
                raise InvalidMetadataError(
                    "Additional metadata entries must be (key, value) pairs",
                    details={"entry": repr(entry)},
                )
            key, value = entry
            _check_utf8("additional_metadata key", key)
            _check_utf8("additional_metadata value", value)
            if any(key == seen for seen, _ in pairs):
                # UpdateField overwrites, so a repeated key would be sized twice
                raise InvalidMetadataError(
                    f"Duplicate additional metadata key '{key}'",
                    details={"key": key},
                )
            pairs.append((key, value))

        object.__setattr__(self, "additional_metadata", tuple(pairs))

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "mint": str(self.mint),
            "name": self.name,
            "symbol": self.symbol,
            "uri": self.uri,
            "additional_metadata": [list(pair) for pair in self.additional_metadata],
            "update_authority": (
                str(self.update_authority) if self.update_authority else None
            ),
        }
