"""
Monnayeur CLI.

Usage:
    monnayeur launch --name NAME --symbol SYMBOL --uri URI [--supply N | --ui-amount X]
    monnayeur plan --name NAME --symbol SYMBOL --uri URI
    monnayeur derive-ata --mint MINT --owner OWNER
"""

import asyncio
import json
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Tuple

import click
from pydantic import ValidationError
from solders.keypair import Keypair  # type: ignore
from solders.pubkey import Pubkey  # type: ignore

from monnayeur.application.dto.launch_dto import LaunchTokenRequest
from monnayeur.config.settings import load_config
from monnayeur.di.container import DIContainer
from monnayeur.domain.entities.token_metadata import TokenMetadata
from monnayeur.domain.exceptions import (
    InvalidAmountError,
    MonnayeurException,
    StageFailedError,
)
from monnayeur.infrastructure.blockchain.associated_token import (
    derive_associated_token_address,
)
from monnayeur.infrastructure.blockchain.keypair_wallet import KeypairWallet


def ui_amount_to_raw(ui_amount: str, decimals: int) -> int:
    """
    Scale a human-readable amount to raw units.

    Raises:
        InvalidAmountError: If the amount is not a number or has more
            fractional digits than decimals allows
    """
    try:
        value = Decimal(ui_amount)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Not a number: {ui_amount}") from e
    if not value.is_finite():
        raise InvalidAmountError(f"Not a finite number: {ui_amount}")

    raw = value.scaleb(decimals)
    if raw != raw.to_integral_value():
        raise InvalidAmountError(
            f"{ui_amount} has more than {decimals} decimal places",
            details={"ui_amount": ui_amount, "decimals": decimals},
        )
    return int(raw)


def parse_metadata_pairs(pairs: Sequence[str]) -> Tuple[Tuple[str, str], ...]:
    """Parse repeated KEY=VALUE options."""
    parsed = []
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(
                f"Expected KEY=VALUE, got {pair!r}", param_hint="--metadata"
            )
        parsed.append((key, value))
    return tuple(parsed)


def _parse_pubkey(value: str, option: str) -> Pubkey:
    try:
        return Pubkey.from_string(value)
    except ValueError as e:
        raise click.BadParameter(f"Invalid address: {value}", param_hint=option) from e


def _fail(error: MonnayeurException) -> None:
    click.echo(f"Error: {error.message}", err=True)
    if error.details:
        click.echo(json.dumps(error.details, indent=2, default=str), err=True)
    sys.exit(1)


@click.group()
@click.option("--config", "-c", default=None, help="YAML config file name")
@click.option("--env", "-e", default=None, help="Environment (development, test...)")
@click.pass_context
def cli(ctx, config, env):
    """Monnayeur - Token-2022 mint provisioning."""
    ctx.obj = {"config": config, "env": env}


def _container(ctx) -> DIContainer:
    try:
        settings = load_config(config_file=ctx.obj["config"], env=ctx.obj["env"])
    except ValidationError as e:
        click.echo("Error: Invalid configuration", err=True)
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            click.echo(f"  {location}: {error['msg']}", err=True)
        sys.exit(1)
    return DIContainer(settings)


@cli.command()
@click.option("--name", required=True, help="Token name")
@click.option("--symbol", required=True, help="Token symbol")
@click.option("--uri", required=True, help="Metadata / image URL")
@click.option("--supply", type=int, default=None, help="Initial supply, raw units")
@click.option("--ui-amount", default=None, help="Initial supply, whole tokens")
@click.option("--decimals", type=int, default=None, help="Mint decimals")
@click.option(
    "--metadata", "-m", multiple=True, help="Additional metadata KEY=VALUE"
)
@click.option("--keypair", "-k", default=None, help="Fee payer keypair file")
@click.pass_context
def launch(ctx, name, symbol, uri, supply, ui_amount, decimals, metadata, keypair):
    """Create a mint with metadata and mint the initial supply."""
    if supply is not None and ui_amount is not None:
        raise click.UsageError("Use either --supply or --ui-amount, not both")

    container = _container(ctx)
    defaults = container.settings.token_defaults
    decimals = defaults.decimals if decimals is None else decimals

    try:
        if ui_amount is not None:
            supply = ui_amount_to_raw(ui_amount, decimals)
        elif supply is None:
            supply = defaults.initial_supply

        if keypair:
            container.override_wallet(KeypairWallet.from_file(keypair))

        request = LaunchTokenRequest(
            name=name,
            symbol=symbol,
            uri=uri,
            initial_supply=supply,
            decimals=decimals,
            additional_metadata=parse_metadata_pairs(metadata),
        )
        result = asyncio.run(_run_launch(container, request))
    except StageFailedError as e:
        if e.partial_result is not None:
            click.echo(json.dumps(e.partial_result.to_dict(), indent=2), err=True)
        _fail(e)
    except MonnayeurException as e:
        _fail(e)

    click.echo(json.dumps(result.to_dict(), indent=2))


async def _run_launch(container: DIContainer, request: LaunchTokenRequest):
    try:
        return await container.get_launch_token().execute(request)
    finally:
        await container.shutdown()


@cli.command()
@click.option("--name", required=True, help="Token name")
@click.option("--symbol", required=True, help="Token symbol")
@click.option("--uri", required=True, help="Metadata / image URL")
@click.option(
    "--metadata", "-m", multiple=True, help="Additional metadata KEY=VALUE"
)
@click.option("--mint", default=None, help="Mint address (random if omitted)")
@click.pass_context
def plan(ctx, name, symbol, uri, metadata, mint):
    """Print mint size and rent without submitting anything."""
    mint_address = (
        _parse_pubkey(mint, "--mint") if mint else Keypair().pubkey()
    )
    container = _container(ctx)

    try:
        token_metadata = TokenMetadata(
            mint=mint_address,
            name=name,
            symbol=symbol,
            uri=uri,
            additional_metadata=parse_metadata_pairs(metadata),
        )
        layout = asyncio.run(_run_plan(container, token_metadata))
    except MonnayeurException as e:
        _fail(e)

    click.echo(json.dumps(layout.to_dict(), indent=2))


async def _run_plan(container: DIContainer, metadata: TokenMetadata):
    try:
        return await container.get_plan_mint_layout().execute(metadata)
    finally:
        await container.shutdown()


@cli.command("derive-ata")
@click.option("--mint", required=True, help="Mint address")
@click.option("--owner", required=True, help="Owner wallet address")
@click.option(
    "--allow-off-curve", is_flag=True, default=False, help="Allow PDA owners"
)
def derive_ata(mint, owner, allow_off_curve):
    """Print the associated token account for a mint and owner."""
    try:
        address = derive_associated_token_address(
            _parse_pubkey(mint, "--mint"),
            _parse_pubkey(owner, "--owner"),
            allow_owner_off_curve=allow_off_curve,
        )
    except MonnayeurException as e:
        _fail(e)

    click.echo(str(address))


def main(argv: Optional[Sequence[str]] = None):
    """Entry point."""
    cli(args=argv)


if __name__ == "__main__":
    main()
