#!/usr/bin/env python3
"""
Dry-Run Mutation Adapter

Stands in for the Firefly client's write side when changes should only be
previewed. Every request is echoed and recorded; nothing is sent.
"""

from dataclasses import dataclass, field
from typing import Any

import click

from ..core.currency import cents_to_dollars_str
from .models import TransactionCreate, TransactionUpdate


@dataclass
class DryRunMutations:
    """Records mutations instead of applying them."""

    requests: list[tuple[str, Any]] = field(default_factory=list)

    def create_transaction(self, request: TransactionCreate) -> None:
        click.echo(
            f"  [dry run] would create {request.transaction_type.value} "
            f"'{request.description}' of {cents_to_dollars_str(request.amount_cents)} "
            f"on {request.date.isoformat(timespec='milliseconds')}"
        )
        self.requests.append(("create", request))

    def update_transaction(self, transaction_id: int, request: TransactionUpdate) -> None:
        click.echo(
            f"  [dry run] would update transaction {transaction_id} "
            f"to {cents_to_dollars_str(request.amount_cents)}"
        )
        self.requests.append(("update", (transaction_id, request)))

    def delete_transaction(self, transaction_id: int) -> None:
        click.echo(f"  [dry run] would delete transaction {transaction_id}")
        self.requests.append(("delete", transaction_id))
