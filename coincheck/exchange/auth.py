"""Credentials, nonce sources and request signatures for private endpoints."""

from __future__ import annotations

import hashlib
import hmac
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

NonceSource = Callable[[], int]

ACCESS_KEY_HEADER = "ACCESS-KEY"
ACCESS_NONCE_HEADER = "ACCESS-NONCE"
ACCESS_SIGNATURE_HEADER = "ACCESS-SIGNATURE"


@dataclass(slots=True, frozen=True)
class Anonymous:
    """No credentials: only public endpoints will accept the request."""


@dataclass(slots=True, kw_only=True, frozen=True)
class Authenticated:
    """API key pair used to sign private requests."""

    access_key: str
    secret_key: str = field(repr=False)


Credentials = Anonymous | Authenticated


def credentials_from_keys(
    access_key: str | None = None, secret_key: str | None = None
) -> Credentials:
    """Authenticated only when both keys are present, otherwise Anonymous."""
    if access_key and secret_key:
        return Authenticated(access_key=access_key, secret_key=secret_key)
    return Anonymous()


def time_nonce() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


class MonotonicNonce:
    """Nonce source that never repeats or goes backwards within a process.

    Falls back to ``last + 1`` when the clock returns a value that is not
    greater than the previous nonce (same millisecond, clock adjustments).
    """

    def __init__(self, clock: NonceSource = time_nonce) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            self._last = max(self._clock(), self._last + 1)
            return self._last


def signing_string(nonce: int, resource: str, body: str | None = None) -> str:
    # the server rebuilds exactly this concatenation
    return f"{nonce}{resource}{body or ''}"


def sign(secret_key: str, nonce: int, resource: str, body: str | None = None) -> str:
    """Hex HMAC-SHA256 of the signing string keyed by the secret."""
    return hmac.new(
        secret_key.encode("utf-8"),
        signing_string(nonce, resource, body).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def auth_headers(
    credentials: Credentials,
    nonce: int,
    resource: str,
    body: str | None = None,
) -> dict[str, str]:
    """ACCESS-* headers for a signed call, empty for anonymous clients."""
    match credentials:
        case Authenticated(access_key=access_key, secret_key=secret_key):
            return {
                ACCESS_KEY_HEADER: access_key,
                ACCESS_NONCE_HEADER: str(nonce),
                ACCESS_SIGNATURE_HEADER: sign(secret_key, nonce, resource, body),
            }
        case _:
            return {}
