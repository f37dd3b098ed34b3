"""
Mint initial supply use case.
"""

from solders.pubkey import Pubkey  # type: ignore

from shared.reporter import SystemReporter

from monnayeur.application.dto.launch_dto import StageReceipt
from monnayeur.domain.exceptions import WalletNotConnectedError
from monnayeur.domain.services.i_ledger_connection import ILedgerConnection
from monnayeur.domain.services.i_wallet import IWallet
from monnayeur.domain.value_objects.launch_stage import LaunchStage
from monnayeur.infrastructure.blockchain.program_ids import TOKEN_2022_PROGRAM_ID
from monnayeur.infrastructure.blockchain.token_instructions import (
    mint_to_instruction,
)
from monnayeur.infrastructure.blockchain.transactions import build_transaction


class MintInitialSupply:
    """
    Use case for minting the initial supply to the holder account.

    The fee payer signs as mint authority. Amounts are raw units.
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
            wallet: Fee payer wallet (mint authority)
            reporter: System reporter
            program_id: Token program owning the mint
        """
        self.connection = connection
        self.wallet = wallet
        self.reporter = reporter
        self.program_id = program_id

    async def execute(
        self,
        mint: Pubkey,
        destination: Pubkey,
        amount: int,
    ) -> StageReceipt:
        """
        Mint tokens to the destination account.

        Args:
            mint: Token mint
            destination: Token account receiving the supply
            amount: Raw amount (1 to 2**64 - 1)

        Returns:
            StageReceipt for SUPPLY_MINT

        Raises:
            WalletNotConnectedError: If the wallet has no public key
            InvalidAmountError: If amount is out of range
            SubmissionError: If the ledger rejects the transaction
        """
        authority = self.wallet.public_key
        if authority is None:
            raise WalletNotConnectedError()

        instruction = mint_to_instruction(
            mint=mint,
            destination=destination,
            authority=authority,
            amount=amount,
            program_id=self.program_id,
        )

        self.reporter.info(
            f"Minting {amount} raw units of {mint} to {destination}",
            context="MintInitialSupply",
        )

        recent_blockhash = await self.connection.get_latest_blockhash()
        transaction = build_transaction([instruction], authority, recent_blockhash)
        signature = await self.wallet.send_transaction(transaction, self.connection)

        self.reporter.info(
            f"Supply minted: {signature}",
            context="MintInitialSupply",
        )
        return StageReceipt(stage=LaunchStage.SUPPLY_MINT, signature=signature)
