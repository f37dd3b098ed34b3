"""
Associated token account helpers.

The associated token account is a PDA of the associated-token program
with seeds [owner, token program, mint]; it can be derived offline.
"""

from solders.instruction import AccountMeta, Instruction  # type: ignore
from solders.pubkey import Pubkey  # type: ignore

from monnayeur.domain.exceptions import InvalidOwnerError
from monnayeur.infrastructure.blockchain.program_ids import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_2022_PROGRAM_ID,
)

CREATE = b""
CREATE_IDEMPOTENT = bytes([1])


def derive_associated_token_address(
    mint: Pubkey,
    owner: Pubkey,
    token_program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
    allow_owner_off_curve: bool = False,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Pubkey:
    """
    Derive the associated token account for (mint, owner).

    Pure function: same inputs always give the same address, no RPC.

    Args:
        mint: Token mint
        owner: Wallet owning the account
        token_program_id: Token program owning the mint
        allow_owner_off_curve: Allow PDA owners
        associated_token_program_id: Associated token program

    Returns:
        Associated token account address

    Raises:
        InvalidOwnerError: If owner is off curve and that is not allowed
    """
    if not allow_owner_off_curve and not owner.is_on_curve():
        raise InvalidOwnerError(str(owner))

    seeds = [bytes(owner), bytes(token_program_id), bytes(mint)]
    address, _ = Pubkey.find_program_address(seeds, associated_token_program_id)
    return address


def create_associated_token_account_instruction(
    payer: Pubkey,
    associated_token: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
    idempotent: bool = True,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Instruction:
    """
    Create the associated token account.

    The idempotent variant succeeds without changes when the account
    already exists; the plain variant fails in that case.
    """
    return Instruction(
        associated_token_program_id,
        CREATE_IDEMPOTENT if idempotent else CREATE,
        [
            AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
            AccountMeta(pubkey=associated_token, is_signer=False, is_writable=True),
            AccountMeta(pubkey=owner, is_signer=False, is_writable=False),
            AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
            AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            AccountMeta(pubkey=token_program_id, is_signer=False, is_writable=False),
        ],
    )
