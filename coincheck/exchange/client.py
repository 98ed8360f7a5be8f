"""Coincheck REST API client with signed private requests."""

from __future__ import annotations

import json
from typing import Any, Self, TYPE_CHECKING

import httpx
from loguru import logger

from .auth import (
    Anonymous,
    Authenticated,
    Credentials,
    NonceSource,
    auth_headers,
    time_nonce,
)
from .models import (
    Balance,
    BankAccount,
    BankAccountsResponse,
    OrderResponse,
    Rate,
    Ticker,
    Transaction,
    TransactionsResponse,
    parse_response,
)

if TYPE_CHECKING:
    from types import TracebackType

ORIGIN = "https://coincheck.com/api"


def serialize_payload(payload: Any) -> str | None:
    """Compact JSON text of the payload, or None when there is no payload.

    The same text is signed and sent, so it must not be re-serialized later.
    """
    if payload is None:
        return None
    return json.dumps(
        payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )


class CoinCheckClient:
    """Async client for the Coincheck REST API.

    Without credentials the client only talks to public endpoints; nothing
    stops it from calling a private path, the server will reject it.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        *,
        base_url: str = ORIGIN,
        nonce_source: NonceSource = time_nonce,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.credentials: Credentials = credentials or Anonymous()
        self.base_url = base_url.rstrip("/")
        self.nonce_source = nonce_source
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def is_authenticated(self) -> bool:
        """True when requests are signed with an API key pair."""
        return isinstance(self.credentials, Authenticated)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> Self:
        await self._get_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    def build_request(
        self, path: str, method: str = "GET", payload: Any = None
    ) -> httpx.Request:
        """Build the outbound request, signing it when credentials are set."""
        if not path.startswith("/"):
            msg = f"path must start with '/': {path!r}"
            raise ValueError(msg)

        # sign the percent-encoded URL that is actually sent
        url = httpx.URL(f"{self.base_url}{path}")
        resource = str(url)
        body = serialize_payload(payload)

        headers: dict[str, str] = {}
        if self.is_authenticated:
            nonce = self.nonce_source()
            headers.update(auth_headers(self.credentials, nonce, resource, body))
        if body is not None:
            headers["Content-Type"] = "application/json"

        return httpx.Request(
            method.upper(),
            url,
            headers=headers,
            content=body.encode("utf-8") if body is not None else None,
        )

    async def execute(
        self, path: str, method: str = "GET", payload: Any = None
    ) -> httpx.Response:
        """Send a request and return the raw response.

        The status code is not inspected and the body is not parsed.
        Transport errors propagate unchanged.
        """
        request = self.build_request(path, method, payload)
        client = await self._get_client()
        logger.debug(
            "{} {} (signed={})", request.method, request.url, self.is_authenticated
        )
        try:
            return await client.send(request)
        except httpx.HTTPError as e:
            logger.error("Coincheck request {} {} failed: {}", request.method, path, e)
            raise

    # --- Public endpoints ---

    async def ticker(self) -> Ticker:
        """Latest ticker."""
        return parse_response(await self.execute("/ticker"), Ticker)

    async def get_rate(self, pair: str = "btc_jpy") -> Rate:
        """Reference rate for a trading pair."""
        return parse_response(await self.execute(f"/rate/{pair}"), Rate)

    # --- Private endpoints ---

    async def get_balance(self) -> Balance:
        """Account balances."""
        return parse_response(await self.execute("/accounts/balance"), Balance)

    async def get_transactions(self) -> list[Transaction]:
        """Recent fills of the account's orders."""
        result = parse_response(
            await self.execute("/exchange/orders/transactions"),
            TransactionsResponse,
        )
        return result.transactions or []

    async def get_bank_accounts(self) -> list[BankAccount]:
        """Bank accounts registered for withdrawals."""
        result = parse_response(
            await self.execute("/bank_accounts"), BankAccountsResponse
        )
        return result.data or []

    async def create_order(
        self,
        pair: str,
        order_type: str,
        rate: float | None = None,
        amount: float | None = None,
        market_buy_amount: float | None = None,
        stop_loss_rate: float | None = None,
    ) -> OrderResponse:
        """Place a new order.

        Args:
            pair: Trading pair (e.g. btc_jpy)
            order_type: buy, sell, market_buy or market_sell
            rate: Limit price (limit orders only)
            amount: Base currency amount
            market_buy_amount: Quote currency amount (market_buy only)
            stop_loss_rate: Optional stop rate
        """
        payload: dict[str, Any] = {"pair": pair, "order_type": order_type}
        optional = {
            "rate": rate,
            "amount": amount,
            "market_buy_amount": market_buy_amount,
            "stop_loss_rate": stop_loss_rate,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})

        logger.info("Placing order: {}", payload)
        response = await self.execute("/exchange/orders", "POST", payload)
        result = parse_response(response, OrderResponse)
        logger.info("Order response: {}", result)
        return result

    async def buy_btc(
        self, rate: float, amount: float, pair: str = "btc_jpy"
    ) -> OrderResponse:
        """Limit buy of ``amount`` BTC at ``rate``."""
        return await self.create_order(pair, "buy", rate=rate, amount=amount)
