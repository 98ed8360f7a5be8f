"""Errors raised by the Coincheck client."""

from __future__ import annotations

import httpx


class CoinCheckClientError(Exception):
    """Base error for the Coincheck client."""

    def __init__(self, message: str, response: httpx.Response | None = None):
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None


class CoinCheckResponseError(CoinCheckClientError):
    """Raised when a response body cannot be parsed into the expected record."""
