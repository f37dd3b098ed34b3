"""
Borsh codec for the token-metadata interface record.

The packed record is what the token program stores (after the TLV
header) in the mint account, so its length drives account sizing.
"""

from typing import Optional

from borsh_construct import U8, CStruct, String, Vec
from construct import ConstructError
from solders.pubkey import Pubkey  # type: ignore

from monnayeur.domain.entities.token_metadata import TokenMetadata
from monnayeur.domain.exceptions import InvalidMetadataError

KeyValueLayout = CStruct(
    "key" / String,
    "value" / String,
)

TokenMetadataLayout = CStruct(
    "update_authority" / U8[32],
    "mint" / U8[32],
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "additional_metadata" / Vec(KeyValueLayout),
)

_ZERO_PUBKEY = bytes(32)


def _optional_pubkey_bytes(pubkey: Optional[Pubkey]) -> bytes:
    return bytes(pubkey) if pubkey is not None else _ZERO_PUBKEY


def pack_token_metadata(metadata: TokenMetadata) -> bytes:
    """
    Serialize token metadata in the on-chain layout.

    Strings are stored as u32 little-endian length followed by UTF-8
    bytes, without trimming or padding.

    Args:
        metadata: Token metadata to pack

    Returns:
        Packed metadata bytes (without TLV header)
    """
    return TokenMetadataLayout.build(
        {
            "update_authority": list(_optional_pubkey_bytes(metadata.update_authority)),
            "mint": list(bytes(metadata.mint)),
            "name": metadata.name,
            "symbol": metadata.symbol,
            "uri": metadata.uri,
            "additional_metadata": [
                {"key": key, "value": value}
                for key, value in metadata.additional_metadata
            ],
        }
    )


def unpack_token_metadata(data: bytes) -> TokenMetadata:
    """
    Deserialize token metadata packed by pack_token_metadata.

    Args:
        data: Packed metadata bytes (without TLV header)

    Returns:
        Decoded TokenMetadata

    Raises:
        InvalidMetadataError: If data is truncated, has trailing bytes or
            contains invalid UTF-8
    """
    try:
        parsed = TokenMetadataLayout.parse(data)
    except (ConstructError, UnicodeDecodeError) as e:
        raise InvalidMetadataError(
            f"Cannot decode token metadata: {e}",
            details={"length": len(data)},
        ) from e

    update_authority = bytes(parsed.update_authority)
    metadata = TokenMetadata(
        mint=Pubkey.from_bytes(bytes(parsed.mint)),
        name=parsed.name,
        symbol=parsed.symbol,
        uri=parsed.uri,
        additional_metadata=tuple(
            (entry.key, entry.value) for entry in parsed.additional_metadata
        ),
        update_authority=(
            None
            if update_authority == _ZERO_PUBKEY
            else Pubkey.from_bytes(update_authority)
        ),
    )

    consumed = len(pack_token_metadata(metadata))
    if consumed != len(data):
        raise InvalidMetadataError(
            "Trailing bytes after token metadata",
            details={"length": len(data), "consumed": consumed},
        )

    return metadata


def packed_token_metadata_len(metadata: TokenMetadata) -> int:
    """Length in bytes of the packed metadata record."""
    return len(pack_token_metadata(metadata))
