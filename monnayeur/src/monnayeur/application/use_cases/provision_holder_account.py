"""
Provision holder account use case.

Ensures the associated token account that receives the initial supply
exists.
"""

from typing import Optional, Tuple

from solders.pubkey import Pubkey  # type: ignore

from shared.reporter import SystemReporter

from monnayeur.application.dto.launch_dto import StageReceipt
from monnayeur.domain.exceptions import (
    AccountAlreadyExistsError,
    WalletNotConnectedError,
)
from monnayeur.domain.services.i_ledger_connection import ILedgerConnection
from monnayeur.domain.services.i_wallet import IWallet
from monnayeur.domain.value_objects.launch_stage import LaunchStage, StageStatus
from monnayeur.infrastructure.blockchain.associated_token import (
    create_associated_token_account_instruction,
    derive_associated_token_address,
)
from monnayeur.infrastructure.blockchain.program_ids import TOKEN_2022_PROGRAM_ID
from monnayeur.infrastructure.blockchain.transactions import build_transaction


class ProvisionHolderAccount:
    """
    Use case for creating the holder's associated token account.

    An account that already exists is not an error: the stage reports
    ALREADY_EXISTS and the workflow continues.
    """

    def __init__(
        self,
        connection: ILedgerConnection,
        wallet: IWallet,
        reporter: SystemReporter,
        idempotent: bool = True,
        program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
    ):
        """
        Initialize use case.

        Args:
            connection: Ledger connection
            wallet: Fee payer wallet
            reporter: System reporter
            idempotent: Use CreateIdempotent instead of Create
            program_id: Token program owning the mint
        """
        self.connection = connection
        self.wallet = wallet
        self.reporter = reporter
        self.idempotent = idempotent
        self.program_id = program_id

    async def execute(
        self,
        mint: Pubkey,
        owner: Optional[Pubkey] = None,
    ) -> Tuple[Pubkey, StageReceipt]:
        """
        Create the associated token account for (mint, owner).

        Args:
            mint: Token mint
            owner: Account owner (default: fee payer)

        Returns:
            Tuple of (associated token address, StageReceipt)

        Raises:
            WalletNotConnectedError: If the wallet has no public key
            InvalidOwnerError: If owner is off curve
            SubmissionError: If the ledger rejects the transaction
        """
        fee_payer = self.wallet.public_key
        if fee_payer is None:
            raise WalletNotConnectedError()

        owner = owner or fee_payer
        associated = derive_associated_token_address(
            mint, owner, self.program_id, allow_owner_off_curve=False
        )

        instruction = create_associated_token_account_instruction(
            payer=fee_payer,
            associated_token=associated,
            owner=owner,
            mint=mint,
            token_program_id=self.program_id,
            idempotent=self.idempotent,
        )

        self.reporter.info(
            f"Provisioning holder account {associated} for {owner}",
            context="ProvisionHolderAccount",
        )

        try:
            recent_blockhash = await self.connection.get_latest_blockhash()
            transaction = build_transaction([instruction], fee_payer, recent_blockhash)
            signature = await self.wallet.send_transaction(
                transaction, self.connection
            )
        except AccountAlreadyExistsError:
            self.reporter.info(
                f"Holder account {associated} already exists",
                context="ProvisionHolderAccount",
            )
            return associated, StageReceipt(
                stage=LaunchStage.HOLDER_ACCOUNT,
                signature=None,
                status=StageStatus.ALREADY_EXISTS,
            )

        self.reporter.info(
            f"Holder account {associated} created: {signature}",
            context="ProvisionHolderAccount",
        )
        return associated, StageReceipt(
            stage=LaunchStage.HOLDER_ACCOUNT, signature=signature
        )
