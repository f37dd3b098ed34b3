"""
Unit tests for LaunchToken use case.

End-to-end workflow against an in-memory ledger: stage order, shared
mint address, precondition and stage failure handling.

Usage:
    pytest monnayeur/tests/unit/application/test_launch_token.py
"""

import struct

import pytest
from solders.keypair import Keypair  # type: ignore

from helpers import FakeLedgerConnection, decode_instructions
from monnayeur.application.dto.launch_dto import LaunchTokenRequest
from monnayeur.application.use_cases.launch_token import LaunchToken
from monnayeur.domain.entities.mint_identity import MintIdentity
from monnayeur.domain.exceptions import (
    AccountAlreadyExistsError,
    InvalidAmountError,
    InvalidMetadataError,
    LedgerConnectionError,
    PlanningError,
    StageFailedError,
    SubmissionError,
    WalletNotConnectedError,
)
from monnayeur.domain.value_objects.launch_stage import LaunchStage, StageStatus
from monnayeur.infrastructure.blockchain.associated_token import (
    derive_associated_token_address,
)
from monnayeur.infrastructure.blockchain.keypair_wallet import KeypairWallet
from shared.tests import LaborantTest


class TestLaunchToken(LaborantTest):
    """Unit tests for LaunchToken use case."""

    component_name = "monnayeur"
    test_category = "unit"

    def setup_test(self):
        self.fee_payer = Keypair()
        self.wallet = KeypairWallet(self.fee_payer)
        self.connection = FakeLedgerConnection()

    def _use_case(self, **kwargs) -> LaunchToken:
        return LaunchToken(self.connection, self.wallet, self.reporter, **kwargs)

    def _request(self, **overrides) -> LaunchTokenRequest:
        fields = {
            "name": "KIRA",
            "symbol": "KIR",
            "uri": "https://example.com/m.json",
            "initial_supply": 1_000_000_000,
            "decimals": 9,
        }
        fields.update(overrides)
        return LaunchTokenRequest(**fields)

    async def test_kira_scenario(self):
        """Test full launch of KIRA/KIR with one billion raw units."""
        self.reporter.info("Testing KIRA launch", context="Test")

        identity = MintIdentity()
        result = await self._use_case().execute(self._request(), identity)

        assert result.completed
        assert result.mint_address == identity.address
        assert result.layout.base_size == 234
        assert result.layout.metadata_size == 117
        assert result.holder_account == derive_associated_token_address(
            identity.address, self.fee_payer.pubkey()
        )
        assert [receipt.stage for receipt in result.receipts] == [
            LaunchStage.MINT_CREATION,
            LaunchStage.HOLDER_ACCOUNT,
            LaunchStage.SUPPLY_MINT,
        ]
        assert len(self.connection.submitted) == 3

        mint_to = decode_instructions(self.connection.submitted[2])[0]
        assert mint_to.data == bytes([7]) + struct.pack("<Q", 1_000_000_000)

    async def test_same_mint_address_in_every_stage(self):
        """Test mint creation, holder and supply use one mint."""
        self.reporter.info("Testing mint address invariant", context="Test")

        result = await self._use_case().execute(self._request())
        mint = result.mint_address

        create_tx, holder_tx, supply_tx = self.connection.submitted
        assert decode_instructions(create_tx)[0].accounts[1] == mint
        assert decode_instructions(holder_tx)[0].accounts[3] == mint
        assert decode_instructions(supply_tx)[0].accounts[0] == mint
        assert decode_instructions(supply_tx)[0].accounts[1] == (
            result.holder_account
        )

    async def test_identity_consumed_after_launch(self):
        """Test the transient key is dropped after mint creation."""
        self.reporter.info("Testing identity consumption", context="Test")

        identity = MintIdentity()
        await self._use_case().execute(self._request(), identity)

        assert identity.consumed

    async def test_decimals_are_configurable(self):
        """Test decimals flow into InitializeMint."""
        self.reporter.info("Testing custom decimals", context="Test")

        await self._use_case().execute(self._request(decimals=6, initial_supply=5))

        initialize_mint = decode_instructions(self.connection.submitted[0])[2]
        assert initialize_mint.data[1] == 6

    async def test_holder_already_exists(self):
        """Test existing holder account does not stop the supply mint."""
        self.reporter.info("Testing existing holder account", context="Test")

        self.connection.send_errors[1] = AccountAlreadyExistsError("already in use")

        result = await self._use_case().execute(self._request())

        holder_receipt = result.receipt_for(LaunchStage.HOLDER_ACCOUNT)
        assert holder_receipt.status == StageStatus.ALREADY_EXISTS
        assert result.receipt_for(LaunchStage.SUPPLY_MINT) is not None
        assert result.completed

    async def test_rent_failure_submits_nothing(self):
        """Test planning failure happens before any transaction."""
        self.reporter.info("Testing rent failure", context="Test")

        self.connection.rent_error = LedgerConnectionError("node unreachable")

        with pytest.raises(PlanningError):
            await self._use_case().execute(self._request())

        assert self.connection.blockhash_queries == 0
        assert self.connection.send_attempts == 0

    async def test_mint_creation_failure(self):
        """Test stage 2 rejection is attributed to MINT_CREATION."""
        self.reporter.info("Testing mint creation failure", context="Test")

        cause = SubmissionError("custom program error: 0x0")
        self.connection.send_errors[0] = cause

        with pytest.raises(StageFailedError) as exc_info:
            await self._use_case().execute(self._request())

        error = exc_info.value
        assert error.stage == LaunchStage.MINT_CREATION
        assert error.cause is cause
        assert error.partial_result.receipts == []
        assert error.partial_result.layout is not None
        assert self.connection.send_attempts == 1

    async def test_supply_failure_keeps_earlier_stages(self):
        """Test partial result lists the committed stages."""
        self.reporter.info("Testing supply mint failure", context="Test")

        self.connection.send_errors[2] = SubmissionError("rejected")

        with pytest.raises(StageFailedError) as exc_info:
            await self._use_case().execute(self._request())

        partial = exc_info.value.partial_result
        assert exc_info.value.stage == LaunchStage.SUPPLY_MINT
        assert [receipt.stage for receipt in partial.receipts] == [
            LaunchStage.MINT_CREATION,
            LaunchStage.HOLDER_ACCOUNT,
        ]
        assert partial.holder_account is not None
        assert not partial.completed

    async def test_blockhash_failure_is_stage_failure(self):
        """Test connection errors inside a stage are wrapped."""
        self.reporter.info("Testing blockhash failure", context="Test")

        self.connection.blockhash_error = LedgerConnectionError("timeout")

        with pytest.raises(StageFailedError) as exc_info:
            await self._use_case().execute(self._request())

        assert exc_info.value.stage == LaunchStage.MINT_CREATION

    async def test_wallet_not_connected(self):
        """Test disconnected wallet fails before planning."""
        self.reporter.info("Testing disconnected wallet", context="Test")

        self.wallet = KeypairWallet()

        with pytest.raises(WalletNotConnectedError):
            await self._use_case().execute(self._request())

        assert self.connection.rent_queries == []

    async def test_invalid_requests(self):
        """Test precondition failures never touch the network."""
        self.reporter.info("Testing request validation", context="Test")

        cases = [
            (self._request(name=""), InvalidMetadataError),
            (self._request(symbol="   "), InvalidMetadataError),
            (self._request(uri=None), InvalidMetadataError),
            (self._request(symbol="\ud800"), InvalidMetadataError),
            (self._request(decimals=256), InvalidAmountError),
            (self._request(decimals=-1), InvalidAmountError),
            (self._request(initial_supply=0), InvalidAmountError),
            (self._request(initial_supply=2**64), InvalidAmountError),
            (self._request(initial_supply=1.5), InvalidAmountError),
        ]

        for request, error_type in cases:
            with pytest.raises(error_type):
                await self._use_case().execute(request)

        assert self.connection.rent_queries == []
        assert self.connection.send_attempts == 0

    async def test_oversized_metadata_fails_before_rent_query(self):
        """Test the packet limit is checked before any ledger call."""
        self.reporter.info("Testing oversized metadata", context="Test")

        request = self._request(uri="https://example.com/" + "m" * 1000)

        with pytest.raises(InvalidMetadataError):
            await self._use_case().execute(request)

        assert self.connection.rent_queries == []
        assert self.connection.blockhash_queries == 0
        assert self.connection.send_attempts == 0

    async def test_duplicate_metadata_key_fails_before_rent_query(self):
        """Test a repeated additional metadata key never reaches the ledger."""
        self.reporter.info("Testing duplicate metadata key", context="Test")

        request = self._request(
            additional_metadata=(("website", "a"), ("website", "b"))
        )

        with pytest.raises(InvalidMetadataError):
            await self._use_case().execute(request)

        assert self.connection.rent_queries == []

    async def test_result_to_dict(self):
        """Test result serializes with string addresses."""
        self.reporter.info("Testing result serialization", context="Test")

        result = await self._use_case().execute(self._request())
        data = result.to_dict()

        assert data["mint_address"] == str(result.mint_address)
        assert data["layout"]["total_size"] == 351
        assert [r["stage"] for r in data["receipts"]] == [
            "mint_creation",
            "holder_account",
            "supply_mint",
        ]


if __name__ == "__main__":
    TestLaunchToken.run_as_main()
