"""
Dependency Injection Container for Monnayeur.

Builds the ledger connection, wallet, reporter and use cases from
settings.
"""

from typing import Optional

from shared.reporter import SystemReporter

from monnayeur.application.use_cases.initialize_mint import InitializeMint
from monnayeur.application.use_cases.launch_token import LaunchToken
from monnayeur.application.use_cases.mint_initial_supply import MintInitialSupply
from monnayeur.application.use_cases.plan_mint_layout import PlanMintLayout
from monnayeur.application.use_cases.provision_holder_account import (
    ProvisionHolderAccount,
)
from monnayeur.config.settings import MonnayeurConfig, get_settings
from monnayeur.domain.services.i_ledger_connection import ILedgerConnection
from monnayeur.domain.services.i_wallet import IWallet
from monnayeur.infrastructure.blockchain.keypair_wallet import KeypairWallet
from monnayeur.infrastructure.blockchain.solana_ledger_connection import (
    SolanaLedgerConnection,
)


class DIContainer:
    """
    Dependency Injection Container.

    Connection, wallet and reporter are lazy singletons; use cases are
    built on each call.
    """

    def __init__(self, settings: Optional[MonnayeurConfig] = None):
        """
        Initialize container with None instances.

        Args:
            settings: Optional settings (global settings if None)
        """
        self._settings = settings
        self._reporter: Optional[SystemReporter] = None
        self._connection: Optional[ILedgerConnection] = None
        self._wallet: Optional[IWallet] = None

    @property
    def settings(self) -> MonnayeurConfig:
        """Get settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def reporter(self) -> SystemReporter:
        """Get system reporter singleton."""
        if self._reporter is None:
            self._reporter = SystemReporter(
                name="monnayeur",
                log_dir=self.settings.log_dir,
                level=self.settings.logging_level,
                verbose=self.settings.verbose,
            )
        return self._reporter

    @property
    def connection(self) -> ILedgerConnection:
        """Get ledger connection singleton."""
        if self._connection is None:
            self._connection = SolanaLedgerConnection(
                rpc_url=self.settings.solana_rpc_url,
                commitment=self.settings.connection.commitment,
                timeout=self.settings.connection.rpc_timeout,
                skip_preflight=self.settings.connection.skip_preflight,
            )
        return self._connection

    @property
    def wallet(self) -> IWallet:
        """
        Get fee payer wallet singleton.

        Without a configured keypair path the wallet is disconnected and
        the workflow fails its preconditions.
        """
        if self._wallet is None:
            path = self.settings.fee_payer_keypair_path
            self._wallet = KeypairWallet.from_file(path) if path else KeypairWallet()
        return self._wallet

    def override_connection(self, connection: ILedgerConnection) -> None:
        """Replace the ledger connection (tests, custom transports)."""
        self._connection = connection

    def override_wallet(self, wallet: IWallet) -> None:
        """Replace the fee payer wallet (tests, external signers)."""
        self._wallet = wallet

    # Use Cases

    def get_plan_mint_layout(self) -> PlanMintLayout:
        """Get plan mint layout use case."""
        return PlanMintLayout(self.connection, self.reporter)

    def get_initialize_mint(self) -> InitializeMint:
        """Get initialize mint use case."""
        return InitializeMint(self.connection, self.wallet, self.reporter)

    def get_provision_holder_account(self) -> ProvisionHolderAccount:
        """Get provision holder account use case."""
        return ProvisionHolderAccount(
            self.connection,
            self.wallet,
            self.reporter,
            idempotent=self.settings.idempotent_holder_account,
        )

    def get_mint_initial_supply(self) -> MintInitialSupply:
        """Get mint initial supply use case."""
        return MintInitialSupply(self.connection, self.wallet, self.reporter)

    def get_launch_token(self) -> LaunchToken:
        """Get launch token use case."""
        return LaunchToken(
            self.connection,
            self.wallet,
            self.reporter,
            idempotent_holder_account=self.settings.idempotent_holder_account,
        )

    async def shutdown(self) -> None:
        """Close the RPC client and log handlers."""
        if isinstance(self._connection, SolanaLedgerConnection):
            await self._connection.close()
        self._connection = None

        if self._reporter:
            self._reporter.close()
            self._reporter = None


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def shutdown_container() -> None:
    """Shutdown and drop the global DI container."""
    global _container
    if _container is not None:
        await _container.shutdown()
        _container = None
