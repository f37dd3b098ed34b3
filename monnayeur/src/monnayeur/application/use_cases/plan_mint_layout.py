"""
Plan mint layout use case.

Computes the storage size and rent of a mint account before anything is
built or submitted.
"""

from typing import Iterable, Optional

from shared.reporter import SystemReporter

from monnayeur.domain.entities.mint_account_layout import MintAccountLayout
from monnayeur.domain.entities.token_metadata import TokenMetadata
from monnayeur.domain.exceptions import (
    InvalidMetadataError,
    LedgerConnectionError,
    PlanningError,
)
from monnayeur.domain.services.i_ledger_connection import ILedgerConnection
from monnayeur.domain.value_objects.extension_type import ExtensionType
from monnayeur.infrastructure.blockchain.metadata_codec import (
    packed_token_metadata_len,
)
from monnayeur.infrastructure.blockchain.mint_layout import (
    MAX_PERMITTED_DATA_LENGTH,
    get_metadata_len,
    get_mint_len,
    normalize_extensions,
)

DEFAULT_EXTENSIONS = (ExtensionType.METADATA_POINTER,)


class PlanMintLayout:
    """
    Use case for sizing a mint account with embedded metadata.

    Flow:
    1. Validate extensions (fixed-size mint extensions only)
    2. Size the base mint and the metadata TLV entry
    3. Check the ledger's maximum account data length
    4. Query the rent-exempt balance for the full size
    """

    def __init__(self, connection: ILedgerConnection, reporter: SystemReporter):
        """
        Initialize use case.

        Args:
            connection: Ledger connection for the rent query
            reporter: System reporter
        """
        self.connection = connection
        self.reporter = reporter

    async def execute(
        self,
        metadata: TokenMetadata,
        extensions: Optional[Iterable[ExtensionType]] = None,
    ) -> MintAccountLayout:
        """
        Plan the mint account layout.

        Args:
            metadata: Metadata that will be written into the mint
            extensions: Mint extensions (default: metadata pointer)

        Returns:
            MintAccountLayout with sizes and rent

        Raises:
            UnsupportedExtensionError: If an extension is not supported
            InvalidMetadataError: If the account would exceed the size limit
            PlanningError: If the rent query fails
        """
        requested = normalize_extensions(
            DEFAULT_EXTENSIONS if extensions is None else extensions
        )

        base_size = get_mint_len(requested)
        metadata_size = get_metadata_len(packed_token_metadata_len(metadata))
        total_size = base_size + metadata_size

        if total_size > MAX_PERMITTED_DATA_LENGTH:
            raise InvalidMetadataError(
                f"Mint account would be {total_size} bytes, "
                f"limit is {MAX_PERMITTED_DATA_LENGTH}",
                details={"size": total_size, "limit": MAX_PERMITTED_DATA_LENGTH},
            )

        self.reporter.debug(
            f"Sizing mint: base={base_size} metadata={metadata_size}",
            context="PlanMintLayout",
        )

        try:
            rent_lamports = (
                await self.connection.get_minimum_balance_for_rent_exemption(
                    total_size
                )
            )
        except (LedgerConnectionError, OSError) as e:
            self.reporter.error(
                f"Rent query failed for {total_size} bytes: {e}",
                context="PlanMintLayout",
            )
            raise PlanningError(
                f"Could not query rent for {total_size} bytes: {e}",
                details={"size": total_size},
            ) from e

        layout = MintAccountLayout(
            extensions=requested,
            base_size=base_size,
            metadata_size=metadata_size,
            rent_lamports=rent_lamports,
        )

        self.reporter.info(
            f"Planned mint layout: {layout.total_size} bytes, "
            f"{rent_lamports} lamports",
            context="PlanMintLayout",
        )
        return layout
