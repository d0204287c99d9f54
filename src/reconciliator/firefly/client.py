#!/usr/bin/env python3
"""
Firefly III API Client

Reads account transactions and writes correcting transactions through the
Firefly III REST API. The client owns one ``httpx.Client`` session for its
whole lifetime; construct it once and pass it to whatever needs it.

Failures are never retried here. Fetch problems raise ``FetchError`` and
rejected writes raise ``RemoteMutationError``.
"""

import logging
from typing import Any

import httpx

from ..core.config import FireflyConfig
from ..core.errors import FetchError, RemoteMutationError
from .models import FireflyTransaction, TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)


class FireflyClient:
    """REST client for a Firefly III instance."""

    def __init__(self, config: FireflyConfig, transport: httpx.BaseTransport | None = None):
        """
        Initialize the client.

        Args:
            config: Connection settings (base URL, token, timeout, page size)
            transport: Optional httpx transport, used to stub the API in tests
        """
        self.config = config
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"

        self._client = httpx.Client(
            base_url=config.base_url.rstrip("/"),
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self) -> "FireflyClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self._client.close()

    def fetch_transactions(self, account_id: int) -> list[FireflyTransaction]:
        """
        Request all transactions of an account, ordered by ascending date.

        Follows the listing's pagination until the last page. Each journal
        contributes its first split only.

        Args:
            account_id: Firefly account id

        Returns:
            Transactions sorted by date (stable for equal dates)

        Raises:
            FetchError: On transport, HTTP status or deserialization failure
        """
        transactions: list[FireflyTransaction] = []
        page = 1
        total_pages = 1

        while page <= total_pages:
            body = self._get_page(account_id, page)
            try:
                transactions.extend(FireflyTransaction.from_dict(entry) for entry in body["data"])
                pagination = body.get("meta", {}).get("pagination", {})
                total_pages = int(pagination.get("total_pages", 1))
            except (KeyError, TypeError, ValueError) as e:
                raise FetchError(f"Invalid transaction data for account {account_id}: {e}") from e
            page += 1

        logger.info(f"Fetched {len(transactions)} transactions for account {account_id}")

        transactions.sort(key=lambda tx: tx.date)
        return transactions

    def _get_page(self, account_id: int, page: int) -> dict[str, Any]:
        try:
            response = self._client.get(
                f"/api/v1/accounts/{account_id}/transactions",
                params={"limit": self.config.page_size, "page": page, "type": "all"},
            )
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to request transactions for account {account_id}: {e}") from e

        if not response.is_success:
            raise FetchError(
                f"Failed to request transactions for account {account_id}: "
                f"HTTP {response.status_code}: {response.text}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON for account {account_id}: {e}") from e

        if not isinstance(body, dict):
            raise FetchError(f"Unexpected response for account {account_id}: {body!r}")
        return body

    def create_transaction(self, request: TransactionCreate) -> None:
        """
        Create a new transaction.

        Raises:
            RemoteMutationError: If Firefly does not answer with a 2xx status
        """
        logger.debug(f"Creating transaction: {request}")
        self._send("create", "POST", "/api/v1/transactions", json=request.to_payload())

    def update_transaction(self, transaction_id: int, request: TransactionUpdate) -> None:
        """
        Update the amount of an existing transaction.

        Raises:
            RemoteMutationError: If Firefly does not answer with a 2xx status
        """
        logger.debug(f"Updating transaction {transaction_id}: {request}")
        self._send("update", "PUT", f"/api/v1/transactions/{transaction_id}", json=request.to_payload())

    def delete_transaction(self, transaction_id: int) -> None:
        """
        Delete a transaction.

        Raises:
            RemoteMutationError: If Firefly does not answer with a 2xx status
        """
        logger.debug(f"Deleting transaction {transaction_id}")
        self._send("delete", "DELETE", f"/api/v1/transactions/{transaction_id}")

    def _send(self, action: str, method: str, url: str, json: dict[str, Any] | None = None) -> None:
        try:
            response = self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise RemoteMutationError(action, None, str(e)) from e

        if not response.is_success:
            raise RemoteMutationError(action, response.status_code, response.text)
