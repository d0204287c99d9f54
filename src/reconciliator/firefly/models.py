#!/usr/bin/env python3
"""
Firefly III Domain Models

Type-safe models for the parts of the Firefly III transaction API the
reconciliator reads and writes. Amounts arrive as decimal strings and are
kept as received; use ``amount_cents`` for any arithmetic.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from ..core.currency import cents_to_amount_str, float_to_cents

# Descriptions of correcting transactions start with this prefix.
RECONCILIATION_PREFIX = "Reconciliation"


class TransactionType(Enum):
    """Firefly transaction types."""

    WITHDRAWAL = "withdrawal"
    DEPOSIT = "deposit"
    TRANSFER = "transfer"
    RECONCILIATION = "reconciliation"
    OPENING_BALANCE = "opening balance"


def parse_datetime(value: str) -> datetime:
    """Parse a Firefly ISO-8601 timestamp, keeping its UTC offset."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class FireflyTransaction:
    """
    A transaction journal as returned by the Firefly transaction listing.

    Only the first split of a journal is represented.
    """

    id: int  # Transaction group id, used for update/delete
    journal_id: int  # Split journal id, required for amount updates
    transaction_type: TransactionType
    description: str
    date: datetime
    amount: float
    source_id: int | None = None
    destination_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FireflyTransaction":
        """
        Create FireflyTransaction from an entry of the API ``data`` array.

        Args:
            data: Dictionary with ``id`` and ``attributes.transactions``

        Returns:
            FireflyTransaction built from the first split

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field has an unexpected format
        """
        splits = data["attributes"]["transactions"]
        if not splits:
            raise ValueError(f"Transaction {data.get('id')} has no splits")
        split = splits[0]

        return cls(
            id=int(data["id"]),
            journal_id=int(split["transaction_journal_id"]),
            transaction_type=TransactionType(split["type"]),
            description=split.get("description") or "",
            date=parse_datetime(split["date"]),
            amount=float(split["amount"]),
            source_id=_optional_int(split.get("source_id")),
            destination_id=_optional_int(split.get("destination_id")),
        )

    @property
    def amount_cents(self) -> int:
        """Get the magnitude in cents."""
        return float_to_cents(self.amount)

    @property
    def is_reconciliation(self) -> bool:
        """Check if this transaction is a correction created by a previous run."""
        return self.description.startswith(RECONCILIATION_PREFIX)

    @property
    def correction_cents(self) -> int:
        """
        Get the value this transaction holds as a correction.

        Withdrawals store a positive magnitude for a negative effect.
        """
        if self.transaction_type == TransactionType.WITHDRAWAL:
            return -self.amount_cents
        return self.amount_cents


@dataclass(frozen=True)
class TransactionCreate:
    """Request to create a single-split transaction."""

    transaction_type: TransactionType
    description: str
    date: datetime
    amount_cents: int
    source_id: int | None = None
    destination_id: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body for ``POST /api/v1/transactions``."""
        split: dict[str, Any] = {
            "type": self.transaction_type.value,
            "description": self.description,
            "date": self.date.isoformat(timespec="milliseconds"),
            "amount": cents_to_amount_str(self.amount_cents),
        }
        if self.source_id is not None:
            split["source_id"] = str(self.source_id)
        if self.destination_id is not None:
            split["destination_id"] = str(self.destination_id)

        return {
            "error_if_duplicate_hash": False,
            "apply_rules": True,
            "transactions": [split],
        }


@dataclass(frozen=True)
class TransactionUpdate:
    """Request to change the amount of an existing transaction split."""

    transaction_type: TransactionType
    journal_id: int
    amount_cents: int

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body for ``PUT /api/v1/transactions/{id}``."""
        return {
            "error_if_duplicate_hash": False,
            "apply_rules": False,
            "transactions": [
                {
                    "type": self.transaction_type.value,
                    "transaction_journal_id": str(self.journal_id),
                    "amount": cents_to_amount_str(self.amount_cents),
                }
            ],
        }
