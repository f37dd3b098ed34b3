"""
Transaction assembly helpers.
"""

from typing import Sequence

from solders.hash import Hash  # type: ignore
from solders.instruction import Instruction  # type: ignore
from solders.message import Message  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.transaction import Transaction  # type: ignore

from monnayeur.domain.exceptions import InvalidMetadataError
from monnayeur.infrastructure.blockchain.mint_layout import PACKET_DATA_SIZE


def build_transaction(
    instructions: Sequence[Instruction],
    payer: Pubkey,
    recent_blockhash: Hash,
) -> Transaction:
    """
    Build an unsigned legacy transaction.

    Instruction order is kept as given; the payer is the first signer.
    """
    message = Message.new_with_blockhash(list(instructions), payer, recent_blockhash)
    return Transaction.new_unsigned(message)


def ensure_fits_packet(transaction: Transaction) -> int:
    """
    Check the wire size of a transaction against the packet limit.

    Unsigned slots serialize as 64 zero bytes, so the size is final
    before signing.

    Returns:
        Serialized size in bytes

    Raises:
        InvalidMetadataError: If the transaction exceeds the packet size
    """
    size = len(bytes(transaction))
    if size > PACKET_DATA_SIZE:
        raise InvalidMetadataError(
            f"Transaction is {size} bytes, limit is {PACKET_DATA_SIZE}; "
            "shorten the token metadata",
            details={"size": size, "limit": PACKET_DATA_SIZE},
        )
    return size
