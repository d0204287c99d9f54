#!/usr/bin/env python3
"""
Main CLI Entry Point for the Firefly Reconciliator

Provides the command-line interface for reconciling Firefly III accounts.
"""

import logging

import click

from ..core.config import load_config
from ..core.errors import ConfigurationError


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to the accounts file (default: ~/.config/firefly_reconciliator.yml)",
)
@click.option("--verbose", "-v", count=True, help="Verbose mode (-v, -vv, -vvv)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: int, debug: bool) -> None:
    """
    Firefly Reconciliator

    Replays Firefly III account histories month by month and creates or
    adjusts correcting transactions wherever a month's closing balance
    differs from the expected one.
    """
    ctx.ensure_object(dict)

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("reconciliator").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug


@main.command()
def version() -> None:
    """Show version information."""
    from reconciliator import __version__

    click.echo(f"Firefly Reconciliator v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    try:
        config_obj = load_config(ctx.obj.get("config_path"))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    settings = config_obj.to_dict()

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {settings['environment']}")
    click.echo(f"  Config File: {settings['config_file']}")
    click.echo(f"  Firefly URL: {settings['firefly']['base_url']}")
    click.echo(f"  API Token: {settings['firefly']['api_token']}")
    click.echo(f"  Timeout: {settings['firefly']['timeout']}s")
    click.echo(f"  Reconciliation Account: {settings['firefly']['reconciliation_account_id']}")
    click.echo(f"  Log Level: {settings['log_level']}")
    click.echo(f"  Accounts ({len(settings['accounts'])}):")
    for account in settings["accounts"]:
        click.echo(f"    {account['name']} ({account['firefly_id']}): {account['months']} expected balances")


# Import reconcile command
from .reconcile import reconcile  # noqa: E402

main.add_command(reconcile)


if __name__ == "__main__":
    main()
