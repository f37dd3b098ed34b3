"""
Launch token use case.

Orchestrates the full provisioning workflow: plan, create the mint,
provision the holder account, mint the initial supply.
"""

from typing import Iterable, Optional

from shared.reporter import SystemReporter

from monnayeur.application.dto.launch_dto import (
    LaunchTokenRequest,
    LaunchTokenResult,
)
from monnayeur.application.use_cases.initialize_mint import InitializeMint
from monnayeur.application.use_cases.mint_initial_supply import MintInitialSupply
from monnayeur.application.use_cases.plan_mint_layout import PlanMintLayout
from monnayeur.application.use_cases.provision_holder_account import (
    ProvisionHolderAccount,
)
from monnayeur.domain.entities.mint_identity import MintIdentity
from monnayeur.domain.entities.token_metadata import TokenMetadata
from monnayeur.domain.exceptions import (
    InvalidAmountError,
    InvalidMetadataError,
    StageFailedError,
    SubmissionError,
    WalletNotConnectedError,
)
from monnayeur.domain.services.i_ledger_connection import ILedgerConnection
from monnayeur.domain.services.i_wallet import IWallet
from monnayeur.domain.value_objects.extension_type import ExtensionType
from monnayeur.domain.value_objects.launch_stage import LaunchStage
from monnayeur.infrastructure.blockchain.token_instructions import U64_MAX


class LaunchToken:
    """
    Use case for launching a Token-2022 token with embedded metadata.

    Flow:
    1. Check preconditions (wallet, metadata, decimals, supply)
    2. Generate the mint identity and check the mint creation
       transaction fits one packet
    3. Plan the mint layout (rent query)
    4. Create and initialize the mint
    5. Provision the holder account (fee payer is the holder)
    6. Mint the initial supply

    Stages run strictly in sequence. A failed network stage raises
    StageFailedError; earlier stages stay committed.
    """

    def __init__(
        self,
        connection: ILedgerConnection,
        wallet: IWallet,
        reporter: SystemReporter,
        idempotent_holder_account: bool = True,
        extensions: Optional[Iterable[ExtensionType]] = None,
    ):
        """
        Initialize use case.

        Args:
            connection: Ledger connection
            wallet: Fee payer wallet
            reporter: System reporter
            idempotent_holder_account: Use CreateIdempotent for stage 3
            extensions: Mint extensions (default: metadata pointer)
        """
        self.connection = connection
        self.wallet = wallet
        self.reporter = reporter
        self.extensions = tuple(extensions) if extensions is not None else None

        self.plan_mint_layout = PlanMintLayout(connection, reporter)
        self.initialize_mint = InitializeMint(connection, wallet, reporter)
        self.provision_holder_account = ProvisionHolderAccount(
            connection, wallet, reporter, idempotent=idempotent_holder_account
        )
        self.mint_initial_supply = MintInitialSupply(connection, wallet, reporter)

    def check_preconditions(self, request: LaunchTokenRequest) -> None:
        """
        Validate a launch request without touching the network.

        Raises:
            WalletNotConnectedError: If the wallet has no public key
            InvalidMetadataError: If name, symbol or uri is empty
            InvalidAmountError: If decimals or supply is out of range
        """
        if self.wallet.public_key is None:
            raise WalletNotConnectedError()

        for field_name in ("name", "symbol", "uri"):
            value = getattr(request, field_name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidMetadataError(
                    f"Token {field_name} is required",
                    details={"field": field_name},
                )

        decimals = request.decimals
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise InvalidAmountError("Decimals must be an integer")
        if not 0 <= decimals <= 255:
            raise InvalidAmountError(
                f"Decimals must be between 0 and 255, got {decimals}",
                details={"decimals": decimals},
            )

        supply = request.initial_supply
        if isinstance(supply, bool) or not isinstance(supply, int):
            raise InvalidAmountError("Initial supply must be an integer")
        if not 1 <= supply <= U64_MAX:
            raise InvalidAmountError(
                f"Initial supply must be between 1 and {U64_MAX}, got {supply}",
                details={"initial_supply": supply},
            )

    async def execute(
        self,
        request: LaunchTokenRequest,
        identity: Optional[MintIdentity] = None,
    ) -> LaunchTokenResult:
        """
        Launch a token.

        Args:
            request: Launch request
            identity: Optional mint identity (fresh one if None)

        Returns:
            LaunchTokenResult with mint, holder account, layout and
            one receipt per network stage

        Raises:
            PreconditionError: If the request is invalid
            PlanningError: If the rent query fails (nothing submitted)
            StageFailedError: If a network stage fails
        """
        self.check_preconditions(request)
        fee_payer = self.wallet.public_key

        identity = identity or MintIdentity()
        metadata = TokenMetadata(
            mint=identity.address,
            name=request.name,
            symbol=request.symbol,
            uri=request.uri,
            additional_metadata=tuple(request.additional_metadata),
            update_authority=fee_payer,
        )
        self.initialize_mint.check_transaction_size(
            identity.address, fee_payer, metadata, request.decimals
        )

        self.reporter.info(
            f"Launching {request.symbol} ({request.name}) as mint "
            f"{identity.address}",
            context="LaunchToken",
        )

        result = LaunchTokenResult(mint_address=identity.address)
        result.layout = await self.plan_mint_layout.execute(
            metadata, self.extensions
        )

        stage = LaunchStage.MINT_CREATION
        try:
            result.receipts.append(
                await self.initialize_mint.execute(
                    identity, metadata, result.layout, request.decimals
                )
            )

            stage = LaunchStage.HOLDER_ACCOUNT
            holder, receipt = await self.provision_holder_account.execute(
                identity.address, fee_payer
            )
            result.holder_account = holder
            result.receipts.append(receipt)

            stage = LaunchStage.SUPPLY_MINT
            result.receipts.append(
                await self.mint_initial_supply.execute(
                    identity.address, holder, request.initial_supply
                )
            )
        except SubmissionError as e:
            self.reporter.error(
                f"Stage {stage.value} failed for mint {identity.address}: {e}",
                context="LaunchToken",
            )
            raise StageFailedError(stage, e, partial_result=result) from e

        self.reporter.info(
            f"Token {request.symbol} launched: mint={identity.address} "
            f"holder={result.holder_account}",
            context="LaunchToken",
        )
        return result
