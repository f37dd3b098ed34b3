"""
Token-2022 mint account size calculations.

A mint with extensions is laid out as:
    [82-byte mint][padding to 165][1-byte account type][TLV entries...]
where every TLV entry is a 2-byte type, a 2-byte length and the value.
"""

from typing import Dict, Iterable, Tuple

from monnayeur.domain.exceptions import UnsupportedExtensionError
from monnayeur.domain.value_objects.extension_type import ExtensionType

MINT_SIZE = 82
ACCOUNT_SIZE = 165
ACCOUNT_TYPE_SIZE = 1
MULTISIG_SIZE = 355

TYPE_SIZE = 2
LENGTH_SIZE = 2

# Ledger limits
MAX_PERMITTED_DATA_LENGTH = 10 * 1024 * 1024
PACKET_DATA_SIZE = 1232

# Fixed-size extensions that can live on a mint account
MINT_EXTENSION_SIZES: Dict[ExtensionType, int] = {
    ExtensionType.TRANSFER_FEE_CONFIG: 108,
    ExtensionType.MINT_CLOSE_AUTHORITY: 32,
    ExtensionType.CONFIDENTIAL_TRANSFER_MINT: 65,
    ExtensionType.DEFAULT_ACCOUNT_STATE: 1,
    ExtensionType.NON_TRANSFERABLE: 0,
    ExtensionType.INTEREST_BEARING_CONFIG: 52,
    ExtensionType.PERMANENT_DELEGATE: 32,
    ExtensionType.TRANSFER_HOOK: 64,
    ExtensionType.METADATA_POINTER: 64,
    ExtensionType.GROUP_POINTER: 64,
    ExtensionType.GROUP_MEMBER_POINTER: 64,
    ExtensionType.TOKEN_GROUP: 80,
    ExtensionType.TOKEN_GROUP_MEMBER: 72,
}


def normalize_extensions(
    extensions: Iterable[ExtensionType],
) -> Tuple[ExtensionType, ...]:
    """
    Validate and de-duplicate requested mint extensions.

    Order of first appearance is kept.

    Raises:
        UnsupportedExtensionError: For variable-size or account extensions
    """
    unique = []
    for extension in extensions:
        try:
            extension = ExtensionType(extension)
        except ValueError as e:
            raise UnsupportedExtensionError(
                f"Unknown extension type: {extension}",
                details={"extension": extension},
            ) from e
        if extension not in MINT_EXTENSION_SIZES:
            raise UnsupportedExtensionError(
                f"Extension {extension.name} is not a fixed-size mint extension",
                details={"extension": extension.name},
            )
        if extension not in unique:
            unique.append(extension)
    return tuple(unique)


def get_extension_len(extension: ExtensionType) -> int:
    """Value length of a fixed-size mint extension."""
    return MINT_EXTENSION_SIZES[normalize_extensions([extension])[0]]


def tlv_len(value_len: int) -> int:
    """Length of a TLV entry holding value_len bytes."""
    return TYPE_SIZE + LENGTH_SIZE + value_len


def get_mint_len(extensions: Iterable[ExtensionType]) -> int:
    """
    Mint account size with the given extensions enabled.

    Args:
        extensions: Requested mint extensions

    Returns:
        Account size in bytes (82 when no extensions)

    Examples:
        >>> get_mint_len([])
        82
        >>> get_mint_len([ExtensionType.METADATA_POINTER])
        234
    """
    extensions = normalize_extensions(extensions)
    if not extensions:
        return MINT_SIZE

    account_len = ACCOUNT_SIZE + ACCOUNT_TYPE_SIZE + sum(
        tlv_len(MINT_EXTENSION_SIZES[ext]) for ext in extensions
    )

    # A mint must never be mistaken for a multisig account
    if account_len == MULTISIG_SIZE:
        return account_len + TYPE_SIZE
    return account_len


def get_metadata_len(packed_len: int) -> int:
    """Space the token metadata TLV entry takes for a packed payload."""
    return tlv_len(packed_len)
