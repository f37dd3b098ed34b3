"""
Solana keypair file helpers.

Keypair files use the Solana CLI format: a JSON array of the 64 secret
key bytes.
"""

import json
from pathlib import Path

from solders.keypair import Keypair  # type: ignore


def load_keypair(keypair_path: str) -> Keypair:
    """
    Load Solana keypair from JSON file.

    Args:
        keypair_path: Path to keypair JSON file

    Returns:
        Solana Keypair object

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid 64-byte keypair

    Examples:
        >>> keypair = load_keypair("~/.config/solana/id.json")
        >>> print(keypair.pubkey())
    """
    path = Path(keypair_path).expanduser()

    if not path.exists():
        raise FileNotFoundError(f"Keypair not found: {keypair_path}")

    with open(path, "r") as f:
        try:
            secret_key = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Keypair file is not valid JSON: {keypair_path}") from e

    if not isinstance(secret_key, list) or len(secret_key) != 64:
        raise ValueError(
            f"Keypair file must contain 64 secret key bytes: {keypair_path}"
        )

    return Keypair.from_bytes(bytes(secret_key))


def get_keypair_address(keypair_path: str) -> str:
    """
    Get Solana address from keypair file.

    Args:
        keypair_path: Path to keypair JSON file

    Returns:
        Base58 encoded address string
    """
    keypair = load_keypair(keypair_path)
    return str(keypair.pubkey())


def keypair_to_json(keypair: Keypair) -> str:
    """Serialize keypair in the Solana CLI JSON format."""
    return json.dumps(list(bytes(keypair)))
