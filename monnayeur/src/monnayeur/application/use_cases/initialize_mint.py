"""
Initialize mint use case.

Creates the mint account and attaches the metadata pointer, the mint
state and the token metadata in one atomic transaction.
"""

from typing import List, Optional

from solders.hash import Hash  # type: ignore
from solders.instruction import Instruction  # type: ignore
from solders.pubkey import Pubkey  # type: ignore

from shared.reporter import SystemReporter

from monnayeur.application.dto.launch_dto import StageReceipt
from monnayeur.domain.entities.mint_account_layout import MintAccountLayout
from monnayeur.domain.entities.mint_identity import MintIdentity
from monnayeur.domain.entities.token_metadata import TokenMetadata
from monnayeur.domain.exceptions import InvalidMetadataError, WalletNotConnectedError
from monnayeur.domain.services.i_ledger_connection import ILedgerConnection
from monnayeur.domain.services.i_wallet import IWallet
from monnayeur.domain.value_objects.launch_stage import LaunchStage
from monnayeur.infrastructure.blockchain.program_ids import TOKEN_2022_PROGRAM_ID
from monnayeur.infrastructure.blockchain.token_instructions import (
    create_mint_account_instruction,
    initialize_metadata_pointer_instruction,
    initialize_mint_instruction,
    initialize_token_metadata_instruction,
    update_token_metadata_field_instruction,
)
from monnayeur.infrastructure.blockchain.transactions import (
    build_transaction,
    ensure_fits_packet,
)

_SIZING_LAYOUT = MintAccountLayout(
    extensions=(), base_size=0, metadata_size=0, rent_lamports=0
)


class InitializeMint:
    """
    Use case for creating and initializing a Token-2022 mint.

    Instruction order:
    1. System CreateAccount (space = base size, rent for the full size)
    2. MetadataPointer Initialize (pointer to the mint itself)
    3. InitializeMint (fee payer is mint authority, no freeze authority)
    4. Token metadata Initialize (name, symbol, uri)
    5. Token metadata UpdateField per additional metadata pair

    The metadata instructions grow the account into the space the rent
    already covers.
    """

    def __init__(
        self,
        connection: ILedgerConnection,
        wallet: IWallet,
        reporter: SystemReporter,
        program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
    ):
        """
        Initialize use case.

        Args:
            connection: Ledger connection
            wallet: Fee payer wallet
            reporter: System reporter
            program_id: Token program owning the mint
        """
        self.connection = connection
        self.wallet = wallet
        self.reporter = reporter
        self.program_id = program_id

    def build_instructions(
        self,
        mint: Pubkey,
        fee_payer: Pubkey,
        metadata: TokenMetadata,
        layout: MintAccountLayout,
        decimals: int,
    ) -> List[Instruction]:
        """Instructions of the mint creation transaction, in order."""
        instructions = [
            create_mint_account_instruction(
                payer=fee_payer,
                mint=mint,
                lamports=layout.rent_lamports,
                space=layout.base_size,
                program_id=self.program_id,
            ),
            initialize_metadata_pointer_instruction(
                mint=mint,
                authority=fee_payer,
                metadata_address=mint,
                program_id=self.program_id,
            ),
            initialize_mint_instruction(
                mint=mint,
                decimals=decimals,
                mint_authority=fee_payer,
                freeze_authority=None,
                program_id=self.program_id,
            ),
            initialize_token_metadata_instruction(
                metadata=mint,
                update_authority=fee_payer,
                mint=mint,
                mint_authority=fee_payer,
                name=metadata.name,
                symbol=metadata.symbol,
                uri=metadata.uri,
                program_id=self.program_id,
            ),
        ]

        for key, value in metadata.additional_metadata:
            instructions.append(
                update_token_metadata_field_instruction(
                    metadata=mint,
                    update_authority=fee_payer,
                    field=key,
                    value=value,
                    program_id=self.program_id,
                )
            )

        return instructions

    def check_transaction_size(
        self,
        mint: Pubkey,
        fee_payer: Pubkey,
        metadata: TokenMetadata,
        decimals: int,
        layout: Optional[MintAccountLayout] = None,
    ) -> int:
        """
        Serialize the mint creation transaction and check the packet limit.

        Lamports, space and blockhash are fixed-width fields, so a
        placeholder layout gives the final wire size without a rent query.

        Returns:
            Serialized size in bytes

        Raises:
            InvalidMetadataError: If the transaction exceeds the packet size
        """
        instructions = self.build_instructions(
            mint, fee_payer, metadata, layout or _SIZING_LAYOUT, decimals
        )
        return ensure_fits_packet(
            build_transaction(instructions, fee_payer, Hash.default())
        )

    async def execute(
        self,
        identity: MintIdentity,
        metadata: TokenMetadata,
        layout: MintAccountLayout,
        decimals: int,
    ) -> StageReceipt:
        """
        Create the mint on-chain.

        Args:
            identity: Unused mint identity (consumed by this call)
            metadata: Metadata for the mint at identity.address
            layout: Planned layout for this metadata
            decimals: Mint decimals (0-255)

        Returns:
            StageReceipt for MINT_CREATION

        Raises:
            WalletNotConnectedError: If the wallet has no public key
            InvalidMetadataError: If metadata targets another mint or the
                transaction exceeds the packet size
            InvalidAmountError: If decimals is out of range
            SubmissionError: If the ledger rejects the transaction
        """
        fee_payer = self.wallet.public_key
        if fee_payer is None:
            raise WalletNotConnectedError()

        mint = identity.address
        if metadata.mint != mint:
            raise InvalidMetadataError(
                "Metadata mint does not match the mint identity",
                details={"metadata_mint": str(metadata.mint), "mint": str(mint)},
            )

        size = self.check_transaction_size(
            mint, fee_payer, metadata, decimals, layout
        )
        instructions = self.build_instructions(
            mint, fee_payer, metadata, layout, decimals
        )

        self.reporter.info(
            f"Creating mint {mint} ({len(instructions)} instructions, "
            f"{size} bytes)",
            context="InitializeMint",
        )

        recent_blockhash = await self.connection.get_latest_blockhash()
        transaction = build_transaction(instructions, fee_payer, recent_blockhash)

        identity.co_sign(transaction)
        signature = await self.wallet.send_transaction(transaction, self.connection)

        self.reporter.info(
            f"Mint {mint} created: {signature}",
            context="InitializeMint",
        )
        return StageReceipt(stage=LaunchStage.MINT_CREATION, signature=signature)
