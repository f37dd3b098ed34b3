"""
Unit tests for TokenMetadata entity.

Tests field validation and immutability.

Usage:
    pytest monnayeur/tests/unit/domain/test_token_metadata.py
"""

import dataclasses

import pytest
from solders.keypair import Keypair  # type: ignore

from monnayeur.domain.entities.token_metadata import TokenMetadata
from monnayeur.domain.exceptions import InvalidMetadataError, PreconditionError
from shared.tests import LaborantTest


class TestTokenMetadata(LaborantTest):
    """Unit tests for TokenMetadata entity."""

    component_name = "monnayeur"
    test_category = "unit"

    def setup_test(self):
        self.mint = Keypair().pubkey()

    def test_create_minimal_metadata(self):
        """Test metadata with required fields only."""
        self.reporter.info("Testing minimal metadata", context="Test")

        metadata = TokenMetadata(
            mint=self.mint,
            name="Kira",
            symbol="KIR",
            uri="https://example.com/m.json",
        )

        assert metadata.additional_metadata == ()
        assert metadata.update_authority is None

    def test_fields_are_not_trimmed(self):
        """Test whitespace is kept byte-for-byte."""
        self.reporter.info("Testing whitespace preservation", context="Test")

        metadata = TokenMetadata(
            mint=self.mint, name=" Kira ", symbol="KIR ", uri="u"
        )

        assert metadata.name == " Kira "
        assert metadata.symbol == "KIR "

    def test_additional_metadata_coerced_to_tuple(self):
        """Test list input is stored as a tuple of pairs."""
        self.reporter.info("Testing additional metadata coercion", context="Test")

        metadata = TokenMetadata(
            mint=self.mint,
            name="Kira",
            symbol="KIR",
            uri="u",
            additional_metadata=[["website", "https://kira.example"], ("x", "y")],
        )

        assert metadata.additional_metadata == (
            ("website", "https://kira.example"),
            ("x", "y"),
        )

    def test_non_string_field_rejected(self):
        """Test non-string name raises InvalidMetadataError."""
        self.reporter.info("Testing non-string field", context="Test")

        with pytest.raises(InvalidMetadataError) as exc_info:
            TokenMetadata(mint=self.mint, name=42, symbol="KIR", uri="u")

        assert exc_info.value.details["field"] == "name"

    def test_lone_surrogate_rejected(self):
        """Test strings that cannot be UTF-8 encoded are rejected."""
        self.reporter.info("Testing lone surrogate", context="Test")

        with pytest.raises(InvalidMetadataError):
            TokenMetadata(mint=self.mint, name="Kira", symbol="\ud800", uri="u")

    def test_malformed_pair_rejected(self):
        """Test additional metadata entries must be pairs."""
        self.reporter.info("Testing malformed pair", context="Test")

        with pytest.raises(InvalidMetadataError):
            TokenMetadata(
                mint=self.mint,
                name="Kira",
                symbol="KIR",
                uri="u",
                additional_metadata=[("only-key",)],
            )

    def test_duplicate_key_rejected(self):
        """Test a repeated additional metadata key is rejected."""
        self.reporter.info("Testing duplicate metadata key", context="Test")

        with pytest.raises(InvalidMetadataError) as exc_info:
            TokenMetadata(
                mint=self.mint,
                name="Kira",
                symbol="KIR",
                uri="u",
                additional_metadata=[("k", "v1"), ("k", "v2")],
            )

        assert exc_info.value.details["key"] == "k"

    def test_invalid_mint_rejected(self):
        """Test mint must be a Pubkey."""
        self.reporter.info("Testing invalid mint type", context="Test")

        with pytest.raises(InvalidMetadataError):
            TokenMetadata(mint=str(self.mint), name="Kira", symbol="KIR", uri="u")

    def test_metadata_errors_are_preconditions(self):
        """Test InvalidMetadataError belongs to the precondition family."""
        self.reporter.info("Testing exception hierarchy", context="Test")

        assert issubclass(InvalidMetadataError, PreconditionError)

    def test_metadata_is_immutable(self):
        """Test frozen dataclass rejects assignment."""
        self.reporter.info("Testing immutability", context="Test")

        metadata = TokenMetadata(mint=self.mint, name="Kira", symbol="KIR", uri="u")

        with pytest.raises(dataclasses.FrozenInstanceError):
            metadata.name = "Other"

    def test_to_dict(self):
        """Test dictionary representation."""
        self.reporter.info("Testing to_dict", context="Test")

        authority = Keypair().pubkey()
        metadata = TokenMetadata(
            mint=self.mint,
            name="Kira",
            symbol="KIR",
            uri="u",
            additional_metadata=[("k", "v")],
            update_authority=authority,
        )

        data = metadata.to_dict()

        assert data["mint"] == str(self.mint)
        assert data["additional_metadata"] == [["k", "v"]]
        assert data["update_authority"] == str(authority)


if __name__ == "__main__":
    TestTokenMetadata.run_as_main()
