"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from coincheck.config import Config
from coincheck.exchange.auth import Authenticated
from coincheck.exchange.client import CoinCheckClient

FIXED_NONCE = 1700000000000


@pytest.fixture
def config() -> Config:
    """Config with test credentials."""
    return Config(
        coincheck_access_key="AK",
        coincheck_secret_key="SK",
        coincheck_base_url="https://coincheck.com/api",
        default_pair="btc_jpy",
    )


@pytest.fixture
def config_public() -> Config:
    """Config without credentials."""
    return Config(coincheck_access_key="", coincheck_secret_key="")


@pytest.fixture
def fixed_nonce() -> int:
    """Nonce used by clients that sign with a fixed value."""
    return FIXED_NONCE


@pytest.fixture
def credentials() -> Authenticated:
    return Authenticated(access_key="AK", secret_key="SK")


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests captured by the mock transport."""
    return []


@pytest.fixture
def make_http_client(
    sent_requests: list[httpx.Request],
) -> Callable[..., httpx.AsyncClient]:
    """Factory for an AsyncClient answering every request with a fixed response."""

    def _make(json_body: Any = None, status_code: int = 200, text: str | None = None):
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(
                status_code, json=json_body if json_body is not None else {}
            )

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def make_client(
    make_http_client: Callable[..., httpx.AsyncClient],
    credentials: Authenticated,
) -> Callable[..., CoinCheckClient]:
    """Factory for a signed CoinCheckClient with a fixed nonce and mock transport."""

    def _make(json_body: Any = None, status_code: int = 200, **kwargs: Any):
        kwargs.setdefault("credentials", credentials)
        kwargs.setdefault("nonce_source", lambda: FIXED_NONCE)
        return CoinCheckClient(
            http_client=make_http_client(json_body, status_code),
            **kwargs,
        )

    return _make
