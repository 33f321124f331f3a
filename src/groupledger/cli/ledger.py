#!/usr/bin/env python3
"""
Ledger CLI - Split, Balance and Settle-Up Commands

Command-line interface over the netting engine. Reads JSON ledger files,
prints balances and suggested payments, and optionally writes JSON reports.
"""

from decimal import InvalidOperation
from pathlib import Path

import click

from ..core.currency import (
    UnknownCurrencyError,
    format_amount,
    get_amount_precision_error,
    normalize_currency_code,
    to_decimal,
)
from ..core.json_utils import write_json_with_defaults
from ..core.models import GroupBalances, SplitType
from ..ledger.group_balances import calculate_group_balances
from ..ledger.loader import Ledger, LedgerFormatError, load_ledger
from ..ledger.split_allocator import allocate_splits


def _load(ledger_file: str) -> Ledger:
    try:
        return load_ledger(ledger_file)
    except (FileNotFoundError, LedgerFormatError) as e:
        click.echo(f"❌ Error loading ledger: {e}", err=True)
        raise click.ClickException(str(e)) from e


def _report(ctx: click.Context, ledger: Ledger, currency: str | None) -> GroupBalances:
    config = ctx.obj["config"]
    report = calculate_group_balances(
        ledger.group_id,
        ledger.expenses,
        ledger.settlements,
        member_ids=ledger.members,
        epsilon=config.ledger.settlement_epsilon,
    )

    if currency:
        code = normalize_currency_code(currency)
        report = GroupBalances(
            group_id=report.group_id,
            balances_by_currency={k: v for k, v in report.balances_by_currency.items() if k == code},
            simplified_debts=report.debts_for(code),
            last_updated=report.last_updated,
        )
    return report


@click.command()
@click.argument("amount")
@click.argument("currency")
@click.argument("participants", nargs=-1, required=True)
@click.option(
    "--type",
    "split_type",
    type=click.Choice([t.value for t in SplitType]),
    default=SplitType.EQUAL.value,
    help="Split strategy (default: equal)",
)
def split(amount: str, currency: str, participants: tuple, split_type: str) -> None:
    """
    Show how an expense divides between participants.

    Examples:
      groupledger split 100 USD alice bob carol
      groupledger split 100 JPY alice bob carol --type percentage
    """
    try:
        total = to_decimal(amount)
        precision_error = get_amount_precision_error(total, currency)
    except (UnknownCurrencyError, ValueError, InvalidOperation) as e:
        raise click.ClickException(str(e)) from e

    if precision_error:
        raise click.ClickException(precision_error)
    if total <= 0:
        raise click.ClickException("Amount must be greater than zero")

    splits = allocate_splits(split_type, total, currency, list(participants))

    click.echo(f"Split of {format_amount(total, currency, with_code=True)} ({split_type}):")
    for s in splits:
        line = f"  {s.participant_id}: {format_amount(s.amount, currency)}"
        if s.percentage is not None:
            line += f" ({s.percentage}%)"
        click.echo(line)


@click.command()
@click.argument("ledger_file", type=click.Path(exists=False))
@click.option("--currency", help="Only show one currency")
@click.option("--output", type=click.Path(), help="Write the report as JSON")
@click.pass_context
def balances(ctx: click.Context, ledger_file: str, currency: str | None, output: str | None) -> None:
    """
    Show each member's balance in every currency of a ledger.

    Examples:
      groupledger balances data/ledgers/trip.json
      groupledger balances data/ledgers/trip.json --currency EUR --output balances.json
    """
    ledger = _load(ledger_file)
    report = _report(ctx, ledger, currency)
    include_zero = ctx.obj["config"].report.include_zero_balances

    if not report.balances_by_currency:
        click.echo("No balances recorded.")

    for code in report.currencies:
        click.echo(f"\n{code}")
        click.echo("-" * 40)
        for user_id, balance in sorted(report.balances_by_currency[code].items()):
            net = balance.derived_net()
            if not net and not include_zero:
                continue
            if net > 0:
                status = f"is owed {format_amount(net, code)}"
            elif net < 0:
                status = f"owes {format_amount(-net, code)}"
            else:
                status = "is settled up"
            click.echo(f"  {user_id} {status}")
            if ctx.obj.get("verbose", False):
                for other, amount in sorted(balance.owes.items()):
                    click.echo(f"    owes {other} {format_amount(amount, code)}")
                for other, amount in sorted(balance.owed_by.items()):
                    click.echo(f"    owed by {other} {format_amount(amount, code)}")

    if output:
        write_json_with_defaults(Path(output), report.to_dict())
        click.echo(f"\n✅ Report saved to: {output}")


@click.command(name="settle-up")
@click.argument("ledger_file", type=click.Path(exists=False))
@click.option("--currency", help="Only settle one currency")
@click.option("--output", type=click.Path(), help="Write suggested payments as JSON")
@click.pass_context
def settle_up(ctx: click.Context, ledger_file: str, currency: str | None, output: str | None) -> None:
    """
    Suggest the payments that bring every balance to zero.

    Examples:
      groupledger settle-up data/ledgers/trip.json
      groupledger settle-up data/ledgers/trip.json --currency USD --output payments.json
    """
    ledger = _load(ledger_file)
    report = _report(ctx, ledger, currency)

    if not report.simplified_debts:
        click.echo("✅ Everyone is settled up.")
    else:
        click.echo(f"Suggested payments ({len(report.simplified_debts)}):")
        for t in report.simplified_debts:
            click.echo(f"  {t.from_user} pays {t.to_user} {format_amount(t.amount, t.currency, with_code=True)}")

    if output:
        write_json_with_defaults(
            Path(output),
            {
                "group_id": report.group_id,
                "payments": [t.to_dict() for t in report.simplified_debts],
            },
        )
        click.echo(f"\n✅ Payments saved to: {output}")
