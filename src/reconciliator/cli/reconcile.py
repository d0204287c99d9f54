#!/usr/bin/env python3
"""
Reconcile CLI - Replay Accounts and Apply Corrections

Runs the reconciliation for every configured account, one after another.
A failure aborts only the account it happened in.
"""

import logging
from datetime import datetime

import click

from ..core.config import load_config
from ..core.errors import ConfigurationError, ReconciliatorError
from ..core.json_utils import write_json
from ..firefly.client import FireflyClient
from ..firefly.dry_run import DryRunMutations
from ..ledger.pipeline import reconcile_account
from ..ledger.replay import ReplayResult
from ..ledger.resolver import ReconciliationResolver

logger = logging.getLogger(__name__)


@click.command()
@click.option("--account", "-a", "account_names", multiple=True, help="Only reconcile this account (repeatable)")
@click.option("--dry-run", is_flag=True, help="Show corrections without changing Firefly")
@click.option("--report-file", type=click.Path(dir_okay=False), help="Write month-end balances as JSON")
@click.pass_context
def reconcile(
    ctx: click.Context, account_names: tuple[str, ...], dry_run: bool, report_file: str | None
) -> None:
    """
    Replay account histories and correct unbalanced months.

    Examples:
      reconciliator reconcile
      reconciliator -c ~/bank.yml reconcile --account Checking --dry-run
      reconciliator reconcile --report-file balances.json
    """
    try:
        config = load_config(ctx.obj.get("config_path"))
        accounts = config.select_accounts(account_names)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if ctx.obj.get("debug"):
        config.debug = True
    config.setup_logging(ctx.obj.get("verbose", 0))

    if dry_run:
        click.echo("DRY RUN MODE - No changes will be made in Firefly")

    results: list[tuple[str, ReplayResult]] = []
    failed: list[str] = []

    with FireflyClient(config.firefly) as client:
        mutations = DryRunMutations() if dry_run else client
        resolver = ReconciliationResolver(mutations, config.firefly.reconciliation_account_id)

        for account in accounts:
            try:
                result = reconcile_account(client, account, resolver)
            except ReconciliatorError as e:
                logger.debug(f"Reconciliation of {account.name} failed", exc_info=True)
                click.echo(f"❌ {account.name}: {e}", err=True)
                failed.append(account.name)
                continue

            results.append((account.name, result))
            click.echo(f"✅ {account.name}: {len(result.corrections)} corrections")

    if report_file:
        write_json(report_file, _build_report(results, dry_run))
        click.echo(f"Saved report to: {report_file}")

    if failed:
        raise click.ClickException(f"Reconciliation failed for: {', '.join(failed)}")


def _build_report(results: list[tuple[str, ReplayResult]], dry_run: bool) -> dict:
    return {
        "metadata": {
            "generated_at": datetime.now().isoformat(),
            "dry_run": dry_run,
        },
        "accounts": [
            {
                "name": name,
                "firefly_id": result.account_id,
                "final_balance_cents": result.final_balance,
                "months": [report.to_dict() for report in result.reports],
            }
            for name, result in results
        ],
    }
