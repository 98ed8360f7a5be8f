"""Response records returned by the Coincheck REST API.

Every field is optional: the server does not guarantee presence, so a field
stays ``None`` unless the response populated it. Numeric values that the
API sends as strings (balances, rates) are coerced to floats.
"""

from __future__ import annotations

from typing import TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CoinCheckResponseError


class CoinCheckRecord(BaseModel):
    """Base for all response records."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Ticker(CoinCheckRecord):
    """Latest trade summary for the default pair."""

    success: bool | None = None
    error: str | None = None
    last: float | None = Field(default=None, description="Last traded price")
    bid: float | None = Field(default=None, description="Highest buy order")
    ask: float | None = Field(default=None, description="Lowest sell order")
    high: float | None = Field(default=None, description="24h high")
    low: float | None = Field(default=None, description="24h low")
    volume: float | None = Field(default=None, description="24h volume")
    timestamp: int | None = Field(default=None, description="Server time")


class Rate(CoinCheckRecord):
    success: bool | None = None
    error: str | None = None
    rate: float | None = None


class Balance(CoinCheckRecord):
    """Account balances."""

    success: bool | None = None
    error: str | None = None
    jpy: float | None = None
    btc: float | None = None
    jpy_reserved: float | None = Field(
        default=None, description="JPY locked in open buy orders"
    )
    btc_reserved: float | None = Field(
        default=None, description="BTC locked in open sell orders"
    )
    jpy_lend_in_use: float | None = None
    btc_lend_in_use: float | None = None
    jpy_lent: float | None = None
    btc_lent: float | None = None
    jpy_debt: float | None = None
    btc_debt: float | None = None


class OrderResponse(CoinCheckRecord):
    """Result of a new order."""

    success: bool | None = None
    error: str | None = None
    id: int | None = Field(default=None, description="New order ID")
    rate: float | None = None
    amount: float | None = None
    order_type: str | None = Field(default=None, description='"buy" or "sell"')
    stop_loss_rate: float | None = None
    pair: str | None = Field(default=None, description='Trading pair, e.g. "btc_jpy"')
    created_at: str | None = None


class Funds(CoinCheckRecord):
    """Balance deltas caused by a single fill."""

    btc: float | None = None
    jpy: float | None = None


class Transaction(CoinCheckRecord):
    """A fill from the recent trade history."""

    id: int | None = None
    order_id: int | None = None
    created_at: str | None = None
    funds: Funds | None = None
    pair: str | None = None
    rate: float | None = None
    fee_currency: str | None = None
    fee: float | None = None
    liquidity: str | None = Field(default=None, description='"T" (taker) or "M" (maker)')
    side: str | None = Field(default=None, description='"buy" or "sell"')


class TransactionsResponse(CoinCheckRecord):
    success: bool | None = None
    error: str | None = None
    transactions: list[Transaction] | None = None


class BankAccount(CoinCheckRecord):
    """Bank account registered for JPY withdrawals."""

    # account numbers keep their leading zeros
    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: int | None = None
    bank_name: str | None = None
    branch_name: str | None = None
    bank_account_type: str | None = Field(
        default=None, description='"futsu" (ordinary) or "toza" (checking)'
    )
    number: str | None = None
    name: str | None = None


class BankAccountsResponse(CoinCheckRecord):
    success: bool | None = None
    error: str | None = None
    data: list[BankAccount] | None = None


RecordT = TypeVar("RecordT", bound=CoinCheckRecord)


def parse_response(response: httpx.Response, model: type[RecordT]) -> RecordT:
    """Decode a JSON response body into ``model``.

    Raises CoinCheckResponseError when the body is not JSON or does not
    match the record shape, or when it is an error envelope the
    record has no field to carry.
    """
    try:
        data = response.json()
    except ValueError as e:
        msg = f"Response body is not valid JSON (HTTP {response.status_code})"
        raise CoinCheckResponseError(msg, response) from e

    if (
        isinstance(data, dict)
        and data.get("success") is False
        and "error" not in model.model_fields
    ):
        msg = f"Coincheck error (HTTP {response.status_code}): {data.get('error')}"
        raise CoinCheckResponseError(msg, response)

    try:
        return model.model_validate(data)
    except ValidationError as e:
        msg = f"Unexpected {model.__name__} payload (HTTP {response.status_code}): {e}"
        raise CoinCheckResponseError(msg, response) from e
