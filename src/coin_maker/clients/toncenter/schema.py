"""TON Center v2 response types (only the fields this service reads)."""

from __future__ import annotations

from typing import Any, TypedDict


class TransactionIdSchema(TypedDict, total=False):
    lt: str
    hash: str


class MessageSchema(TypedDict, total=False):
    """in_msg / in_message item. value is a nanoton amount as a string."""

    source: str
    source_address: str
    destination: str
    value: str
    hash: str
    message: str


class TransactionSchema(TypedDict, total=False):
    """getTransaction / getTransactions result item."""

    transaction_id: TransactionIdSchema
    utime: int
    fee: str
    in_msg: MessageSchema
    out_msgs: list[MessageSchema]


class ApiResponseSchema(TypedDict, total=False):
    """Envelope of every v2 response."""

    ok: bool
    result: Any
    error: str
    code: int
