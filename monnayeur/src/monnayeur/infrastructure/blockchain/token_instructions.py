"""
Instruction builders for Token-2022 mint provisioning.

Covers system account creation, the metadata pointer extension, mint
initialization, the token-metadata interface and MintTo.
"""

import hashlib
from enum import IntEnum
from typing import Optional, Union

from borsh_construct import U8, U64, CStruct, String
from solders.instruction import AccountMeta, Instruction  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.system_program import CreateAccountParams, create_account  # type: ignore

from monnayeur.domain.exceptions import InvalidAmountError
from monnayeur.infrastructure.blockchain.program_ids import (
    RENT_SYSVAR_ID,
    TOKEN_2022_PROGRAM_ID,
)

U64_MAX = 2**64 - 1


class TokenInstruction(IntEnum):
    """Token-2022 instruction indices used by the workflow."""

    INITIALIZE_MINT = 0
    MINT_TO = 7
    METADATA_POINTER_EXTENSION = 39


class MetadataPointerInstruction(IntEnum):
    """Sub-instructions of the metadata pointer extension."""

    INITIALIZE = 0
    UPDATE = 1


class MetadataField(IntEnum):
    """Token-metadata interface field selector."""

    NAME = 0
    SYMBOL = 1
    URI = 2
    KEY = 3


InitializeMintLayout = CStruct(
    "instruction" / U8,
    "decimals" / U8,
    "mint_authority" / U8[32],
    "freeze_authority_option" / U8,
    "freeze_authority" / U8[32],
)

InitializeMetadataPointerLayout = CStruct(
    "instruction" / U8,
    "pointer_instruction" / U8,
    "authority" / U8[32],
    "metadata_address" / U8[32],
)

MintToLayout = CStruct(
    "instruction" / U8,
    "amount" / U64,
)

InitializeTokenMetadataLayout = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
)


def interface_discriminator(name: str) -> bytes:
    """8-byte discriminator of a token-metadata interface instruction."""
    return hashlib.sha256(f"spl_token_metadata_interface:{name}".encode()).digest()[:8]


INITIALIZE_METADATA_DISCRIMINATOR = interface_discriminator("initialize_account")
UPDATE_FIELD_DISCRIMINATOR = interface_discriminator("updating_field")

_ZERO_PUBKEY = [0] * 32


def _pubkey_list(pubkey: Optional[Pubkey]) -> list:
    return list(bytes(pubkey)) if pubkey is not None else list(_ZERO_PUBKEY)


def create_mint_account_instruction(
    payer: Pubkey,
    mint: Pubkey,
    lamports: int,
    space: int,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Instruction:
    """
    Allocate the mint account, funded and owned by the token program.

    Both payer and mint must sign the transaction.
    """
    return create_account(
        CreateAccountParams(
            from_pubkey=payer,
            to_pubkey=mint,
            lamports=lamports,
            space=space,
            owner=program_id,
        )
    )


def initialize_metadata_pointer_instruction(
    mint: Pubkey,
    authority: Optional[Pubkey],
    metadata_address: Optional[Pubkey],
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Instruction:
    """
    Initialize the metadata pointer extension of an uninitialized mint.

    Must run before initialize_mint_instruction.
    """
    data = InitializeMetadataPointerLayout.build(
        {
            "instruction": TokenInstruction.METADATA_POINTER_EXTENSION,
            "pointer_instruction": MetadataPointerInstruction.INITIALIZE,
            "authority": _pubkey_list(authority),
            "metadata_address": _pubkey_list(metadata_address),
        }
    )
    return Instruction(
        program_id,
        data,
        [AccountMeta(pubkey=mint, is_signer=False, is_writable=True)],
    )


def initialize_mint_instruction(
    mint: Pubkey,
    decimals: int,
    mint_authority: Pubkey,
    freeze_authority: Optional[Pubkey] = None,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Instruction:
    """
    Initialize mint parameters.

    Args:
        mint: Mint account
        decimals: Decimal precision (0-255)
        mint_authority: Authority allowed to mint supply
        freeze_authority: Optional freeze authority (None = no freezing)
        program_id: Token program

    Raises:
        InvalidAmountError: If decimals is outside 0-255
    """
    if not 0 <= decimals <= 255:
        raise InvalidAmountError(
            f"Decimals must be between 0 and 255, got {decimals}",
            details={"decimals": decimals},
        )

    data = InitializeMintLayout.build(
        {
            "instruction": TokenInstruction.INITIALIZE_MINT,
            "decimals": decimals,
            "mint_authority": _pubkey_list(mint_authority),
            "freeze_authority_option": 1 if freeze_authority is not None else 0,
            "freeze_authority": _pubkey_list(freeze_authority),
        }
    )
    return Instruction(
        program_id,
        data,
        [
            AccountMeta(pubkey=mint, is_signer=False, is_writable=True),
            AccountMeta(pubkey=RENT_SYSVAR_ID, is_signer=False, is_writable=False),
        ],
    )


def initialize_token_metadata_instruction(
    metadata: Pubkey,
    update_authority: Pubkey,
    mint: Pubkey,
    mint_authority: Pubkey,
    name: str,
    symbol: str,
    uri: str,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Instruction:
    """
    Write name, symbol and uri into the metadata account.

    The token program reallocates the account to fit the record, so the
    account must already hold enough lamports for the grown size.
    """
    data = INITIALIZE_METADATA_DISCRIMINATOR + InitializeTokenMetadataLayout.build(
        {"name": name, "symbol": symbol, "uri": uri}
    )
    return Instruction(
        program_id,
        data,
        [
            AccountMeta(pubkey=metadata, is_signer=False, is_writable=True),
            AccountMeta(pubkey=update_authority, is_signer=False, is_writable=False),
            AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
            AccountMeta(pubkey=mint_authority, is_signer=True, is_writable=False),
        ],
    )


def update_token_metadata_field_instruction(
    metadata: Pubkey,
    update_authority: Pubkey,
    field: Union[MetadataField, str],
    value: str,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Instruction:
    """
    Set a metadata field.

    Args:
        metadata: Metadata account
        update_authority: Metadata update authority (signer)
        field: A MetadataField, or a str for an additional-metadata key
        value: New value
        program_id: Token program
    """
    if isinstance(field, MetadataField):
        if field == MetadataField.KEY:
            raise ValueError("Pass the additional-metadata key as a str")
        encoded_field = U8.build(field)
    else:
        encoded_field = U8.build(MetadataField.KEY) + String.build(field)

    data = UPDATE_FIELD_DISCRIMINATOR + encoded_field + String.build(value)
    return Instruction(
        program_id,
        data,
        [
            AccountMeta(pubkey=metadata, is_signer=False, is_writable=True),
            AccountMeta(pubkey=update_authority, is_signer=True, is_writable=False),
        ],
    )


def mint_to_instruction(
    mint: Pubkey,
    destination: Pubkey,
    authority: Pubkey,
    amount: int,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Instruction:
    """
    Mint raw token units into a token account.

    Args:
        mint: Mint account
        destination: Token account receiving the supply
        authority: Mint authority (signer)
        amount: Raw units, already scaled by 10**decimals
        program_id: Token program

    Raises:
        InvalidAmountError: If amount is not in 1..2**64-1
    """
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise InvalidAmountError(
            "Mint amount must be an integer of raw units",
            details={"amount": repr(amount)},
        )
    if not 0 < amount <= U64_MAX:
        raise InvalidAmountError(
            f"Mint amount must be between 1 and {U64_MAX}, got {amount}",
            details={"amount": amount},
        )

    data = MintToLayout.build(
        {"instruction": TokenInstruction.MINT_TO, "amount": amount}
    )
    return Instruction(
        program_id,
        data,
        [
            AccountMeta(pubkey=mint, is_signer=False, is_writable=True),
            AccountMeta(pubkey=destination, is_signer=False, is_writable=True),
            AccountMeta(pubkey=authority, is_signer=True, is_writable=False),
        ],
    )
