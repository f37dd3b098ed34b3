"""
Monnayeur configuration with hybrid YAML + ENV support.

Priority (highest to lowest):
1. Environment variables (MONNAYEUR_ prefix, from .env or system)
2. Environment-specific YAML config file (development.yaml, test.yaml...)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TokenDefaultsConfig(BaseSettings):
    """Defaults for new mints when the caller does not override them."""

    decimals: int = Field(default=9, ge=0, le=255)
    initial_supply: int = Field(
        default=1_000_000_000,
        ge=1,
        le=2**64 - 1,
        description="Initial supply in raw units (already scaled)",
    )


class ConnectionConfig(BaseSettings):
    """Ledger connection configuration."""

    rpc_timeout: float = Field(default=10.0, ge=1.0, le=120.0)
    commitment: str = Field(default="confirmed")
    skip_preflight: bool = Field(default=False)

    @field_validator("commitment")
    @classmethod
    def validate_commitment(cls, v: str) -> str:
        """Validate commitment level."""
        allowed = ["processed", "confirmed", "finalized"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid commitment. Must be one of: {allowed}")
        return v_lower


class MonnayeurConfig(BaseSettings):
    """
    Monnayeur configuration schema.

    Secrets (keypair files) are referenced by path only, never inlined
    in YAML.
    """

    model_config = SettingsConfigDict(
        env_prefix="MONNAYEUR_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="allow",
    )

    # Application
    app_name: str = "Monnayeur"
    env: str = Field(default="development", description="Environment name")

    # Blockchain
    solana_rpc_url: str = Field(default="https://api.devnet.solana.com")
    solana_network: str = Field(default="devnet")
    fee_payer_keypair_path: Optional[str] = Field(default=None)
    idempotent_holder_account: bool = Field(
        default=True,
        description="Create the holder account with CreateIdempotent",
    )

    # Logging
    log_level: str = Field(default="info")
    log_dir: Optional[str] = Field(default=None)
    verbose: int = Field(default=1, ge=0, le=3)

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    token_defaults: TokenDefaultsConfig = Field(default_factory=TokenDefaultsConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower

    @field_validator("solana_network")
    @classmethod
    def validate_network(cls, v: str) -> str:
        """Validate Solana network."""
        allowed = ["devnet", "testnet", "mainnet-beta", "localnet"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid network. Must be one of: {allowed}")
        return v_lower

    @field_validator("fee_payer_keypair_path")
    @classmethod
    def expand_keypair_path(cls, v: Optional[str]) -> Optional[str]:
        """Expand home directory in keypair path."""
        if v:
            return os.path.expanduser(v)
        return v

    @property
    def logging_level(self) -> int:
        """Numeric logging level for SystemReporter."""
        return {
            "debug": 10,
            "info": 20,
            "warning": 30,
            "error": 40,
            "critical": 50,
        }[self.log_level]


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        loaded = yaml.safe_load(f)
    return loaded or {}


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_file: Optional[str] = None,
    env: Optional[str] = None,
    config_dir: Optional[Path] = None,
) -> MonnayeurConfig:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML filename override
        env: Optional environment name override (development, test, ...)
        config_dir: Optional directory holding the YAML files

    Returns:
        MonnayeurConfig instance

    Raises:
        ValidationError: If a value is invalid
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = config_dir or project_root / "config"

    env_file_path = project_root / ".env"
    if env_file_path.exists():
        load_dotenv(env_file_path, override=False)

    environment = env or os.getenv("ENV", "production")

    config_map = {
        "production": "production.yaml",
        "development": "development.yaml",
        "test": "test.yaml",
    }

    if config_file is None:
        config_file = os.getenv("MONNAYEUR_CONFIG") or config_map.get(
            environment, "production.yaml"
        )

    merged_config = _read_yaml(config_dir / "default.yaml")
    merged_config = _merge(merged_config, _read_yaml(config_dir / config_file))
    merged_config.setdefault("env", environment)

    env_keys = {k.upper() for k in os.environ}
    merged_config = _drop_env_overrides(merged_config, "MONNAYEUR_", env_keys)

    return MonnayeurConfig(**merged_config)


def _drop_env_overrides(config: dict, prefix: str, env_keys: set) -> dict:
    # Init kwargs outrank env vars in pydantic-settings, so YAML values
    # shadowed by an env var are removed before construction.
    kept = {}
    for key, value in config.items():
        name = f"{prefix}{key}".upper()
        if name in env_keys:
            continue
        if isinstance(value, dict):
            value = _drop_env_overrides(value, f"{name}__", env_keys)
        kept[key] = value
    return kept


_settings: Optional[MonnayeurConfig] = None


def get_settings() -> MonnayeurConfig:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: MonnayeurConfig) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
