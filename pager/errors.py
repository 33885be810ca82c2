"""Failure kinds raised by the store and the query builder.

Each error carries a fixed public message so the HTTP layer can answer
without leaking engine internals. The engine error, when there is one,
is chained as ``__cause__``.
"""
from __future__ import annotations


class StoreError(Exception):
    message = "Store error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class OpenFailed(StoreError):
    message = "Could not open db file"


class CreateFailed(StoreError):
    message = "Could not create table"


class InsertFailed(StoreError):
    message = "Could not insert user"


class RetrieveFailed(StoreError):
    message = "Could not retrieve users"


class DecodeFailed(StoreError):
    message = "Could not decode user row"


class QueryValidationError(StoreError, ValueError):
    """Bad ordering input. Raised before any SQL is executed."""

    message = "Invalid query"


class InvalidOrderDirection(QueryValidationError):
    message = "Invalid order direction"


class InvalidOrderColumn(QueryValidationError):
    message = "Invalid order column"
