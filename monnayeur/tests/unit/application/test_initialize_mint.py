"""
Unit tests for InitializeMint use case.

Tests instruction order, signatures and the metadata bytes written
against the planned layout.

Usage:
    pytest monnayeur/tests/unit/application/test_initialize_mint.py
"""

import struct

import pytest
from solders.keypair import Keypair  # type: ignore
from solders.signature import Signature  # type: ignore

from helpers import FakeLedgerConnection, decode_instructions
from helpers.fake_ledger import FAKE_BLOCKHASH
from monnayeur.application.use_cases.initialize_mint import InitializeMint
from monnayeur.application.use_cases.plan_mint_layout import PlanMintLayout
from monnayeur.domain.entities.mint_identity import MintIdentity
from monnayeur.domain.entities.token_metadata import TokenMetadata
from monnayeur.domain.exceptions import (
    InvalidMetadataError,
    SubmissionError,
    WalletNotConnectedError,
)
from monnayeur.domain.value_objects.launch_stage import LaunchStage, StageStatus
from monnayeur.infrastructure.blockchain.keypair_wallet import KeypairWallet
from monnayeur.infrastructure.blockchain.mint_layout import TYPE_SIZE, LENGTH_SIZE
from monnayeur.infrastructure.blockchain.program_ids import (
    SYSTEM_PROGRAM_ID,
    TOKEN_2022_PROGRAM_ID,
)
from monnayeur.infrastructure.blockchain.token_instructions import (
    INITIALIZE_METADATA_DISCRIMINATOR,
    UPDATE_FIELD_DISCRIMINATOR,
)
from shared.tests import LaborantTest


class TestInitializeMint(LaborantTest):
    """Unit tests for InitializeMint use case."""

    component_name = "monnayeur"
    test_category = "unit"

    def setup_test(self):
        self.fee_payer = Keypair()
        self.wallet = KeypairWallet(self.fee_payer)
        self.connection = FakeLedgerConnection()
        self.identity = MintIdentity()
        self.use_case = InitializeMint(self.connection, self.wallet, self.reporter)

    def _metadata(self, **overrides) -> TokenMetadata:
        fields = {
            "mint": self.identity.address,
            "name": "KIRA",
            "symbol": "KIR",
            "uri": "https://example.com/m.json",
            "update_authority": self.fee_payer.pubkey(),
        }
        fields.update(overrides)
        return TokenMetadata(**fields)

    async def _plan(self, metadata: TokenMetadata):
        return await PlanMintLayout(self.connection, self.reporter).execute(metadata)

    async def test_instruction_order(self):
        """Test create, pointer, mint, metadata in one transaction."""
        self.reporter.info("Testing instruction order", context="Test")

        metadata = self._metadata()
        layout = await self._plan(metadata)

        receipt = await self.use_case.execute(self.identity, metadata, layout, 9)

        assert receipt.stage == LaunchStage.MINT_CREATION
        assert receipt.status == StageStatus.SUBMITTED

        transaction = self.connection.submitted[0]
        instructions = decode_instructions(transaction)
        assert [ix.program_id for ix in instructions] == [
            SYSTEM_PROGRAM_ID,
            TOKEN_2022_PROGRAM_ID,
            TOKEN_2022_PROGRAM_ID,
            TOKEN_2022_PROGRAM_ID,
        ]
        assert instructions[1].data[:2] == bytes([39, 0])
        assert instructions[2].data[:2] == bytes([0, 9])
        assert instructions[3].data[:8] == INITIALIZE_METADATA_DISCRIMINATOR

    async def test_create_account_funding(self):
        """Test space is the base size and lamports cover the full size."""
        self.reporter.info("Testing account funding", context="Test")

        metadata = self._metadata()
        layout = await self._plan(metadata)

        await self.use_case.execute(self.identity, metadata, layout, 9)

        create = decode_instructions(self.connection.submitted[0])[0]
        _, lamports, space = struct.unpack("<IQQ", create.data[:20])
        assert lamports == layout.rent_lamports
        assert space == layout.base_size
        assert create.accounts == [self.fee_payer.pubkey(), self.identity.address]

    async def test_fully_signed(self):
        """Test fee payer and mint identity both signed."""
        self.reporter.info("Testing signatures", context="Test")

        metadata = self._metadata()
        layout = await self._plan(metadata)

        await self.use_case.execute(self.identity, metadata, layout, 9)

        transaction = self.connection.submitted[0]
        assert transaction.message.recent_blockhash == FAKE_BLOCKHASH
        assert transaction.message.account_keys[0] == self.fee_payer.pubkey()
        assert len(transaction.signatures) == 2
        assert Signature.default() not in transaction.signatures
        assert self.identity.consumed

    async def test_metadata_bytes_match_layout(self):
        """Test bytes written by the metadata instructions equal metadata_size."""
        self.reporter.info("Testing metadata size property", context="Test")

        metadata = self._metadata(
            symbol="KIR ",
            additional_metadata=[("website", "https://kira.example"), ("tw", "@k")],
        )
        layout = await self._plan(metadata)

        await self.use_case.execute(self.identity, metadata, layout, 6)

        instructions = decode_instructions(self.connection.submitted[0])
        initialize = instructions[3]
        updates = instructions[4:]
        assert len(updates) == 2
        assert all(ix.data[:8] == UPDATE_FIELD_DISCRIMINATOR for ix in updates)

        # authority + mint + name/symbol/uri + vec count + one (key, value) per update
        written = 32 + 32 + len(initialize.data[8:]) + 4
        written += sum(len(ix.data[9:]) for ix in updates)
        assert TYPE_SIZE + LENGTH_SIZE + written == layout.metadata_size

    async def test_wallet_not_connected(self):
        """Test disconnected wallet fails before any network call."""
        self.reporter.info("Testing disconnected wallet", context="Test")

        use_case = InitializeMint(self.connection, KeypairWallet(), self.reporter)
        metadata = self._metadata()
        layout = await self._plan(metadata)

        with pytest.raises(WalletNotConnectedError):
            await use_case.execute(self.identity, metadata, layout, 9)

        assert self.connection.blockhash_queries == 0
        assert not self.identity.consumed

    async def test_metadata_for_other_mint(self):
        """Test metadata must target the identity's mint."""
        self.reporter.info("Testing mint mismatch", context="Test")

        metadata = self._metadata(mint=Keypair().pubkey())
        layout = await self._plan(metadata)

        with pytest.raises(InvalidMetadataError):
            await self.use_case.execute(self.identity, metadata, layout, 9)

    async def test_transaction_too_large(self):
        """Test packet limit is checked before fetching a blockhash."""
        self.reporter.info("Testing packet size limit", context="Test")

        metadata = self._metadata(uri="https://example.com/" + "m" * 1200)
        layout = await self._plan(metadata)

        with pytest.raises(InvalidMetadataError):
            await self.use_case.execute(self.identity, metadata, layout, 9)

        assert self.connection.blockhash_queries == 0
        assert self.connection.send_attempts == 0
        assert not self.identity.consumed

    async def test_ledger_rejection(self):
        """Test submission errors propagate."""
        self.reporter.info("Testing ledger rejection", context="Test")

        self.connection.send_errors[0] = SubmissionError("custom program error")
        metadata = self._metadata()
        layout = await self._plan(metadata)

        with pytest.raises(SubmissionError):
            await self.use_case.execute(self.identity, metadata, layout, 9)


if __name__ == "__main__":
    TestInitializeMint.run_as_main()
