#!/usr/bin/env python3
"""
Error Types

Exception hierarchy shared by the configuration, Firefly and ledger packages.
Each error is fatal for the account being processed; the CLI reports it and
moves on to the next account.
"""


class ReconciliatorError(Exception):
    """Base class for all reconciliator errors."""

    pass


class ConfigurationError(ReconciliatorError):
    """Raised when the configuration file is missing or invalid."""

    pass


class EmptyInputError(ReconciliatorError):
    """Raised when an account has no transactions to anchor a replay."""

    def __init__(self, account_id: int):
        super().__init__(f"No transactions found for account {account_id}")
        self.account_id = account_id


class FetchError(ReconciliatorError):
    """Raised when transactions cannot be fetched or deserialized."""

    pass


class RemoteMutationError(ReconciliatorError):
    """
    Raised when Firefly rejects a create, update or delete request.

    Carries the HTTP status code and the raw response body so the failing
    request can be diagnosed from the CLI output alone. The status code is
    None when the request never got a response.
    """

    def __init__(self, action: str, status_code: int | None, body: str):
        if status_code is None:
            message = f"Failed to {action} transaction: {body}"
        else:
            message = f"Failed to {action} transaction: HTTP {status_code}: {body}"
        super().__init__(message)
        self.action = action
        self.status_code = status_code
        self.body = body
