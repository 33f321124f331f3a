#!/usr/bin/env python3
"""
Main CLI Entry Point for the Group Ledger

Provides the command-line interface for ledger tools.
"""

import logging
import os

import click

from ..core.config import get_config
from ..core.currency import UnknownCurrencyError, get_currency, list_currencies


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Group Ledger - Shared Expense Netting and Settlement

    Splits expenses exactly, tracks who owes whom in every currency, and
    suggests the fewest practical payments to settle up.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["GROUPLEDGER_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("groupledger").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from groupledger import __author__, __version__

    click.echo(f"Group Ledger v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Ledger Directory: {config_obj.ledger.ledger_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Default Currency: {config_obj.ledger.default_currency}")
    click.echo(f"  Settlement Epsilon: {config_obj.ledger.settlement_epsilon}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.option("--code", help="Show a single currency")
def currencies(code: str | None) -> None:
    """
    List supported currencies and their decimal digits.

    Examples:
      groupledger currencies
      groupledger currencies --code JPY
    """
    if code:
        try:
            entries = [get_currency(code)]
        except UnknownCurrencyError as e:
            raise click.ClickException(str(e)) from e
    else:
        entries = list_currencies()

    for currency in entries:
        click.echo(f"{currency.code}  {currency.decimal_digits}  {currency.symbol:<5}  {currency.name}")


from .ledger import balances, settle_up, split  # noqa: E402

main.add_command(split)
main.add_command(balances)
main.add_command(settle_up)


if __name__ == "__main__":
    main()
