"""Exchange connectivity module."""

from .auth import Anonymous, Authenticated, Credentials, MonotonicNonce, credentials_from_keys
from .client import ORIGIN, CoinCheckClient
from .errors import CoinCheckClientError, CoinCheckResponseError

__all__ = [
    "ORIGIN",
    "Anonymous",
    "Authenticated",
    "CoinCheckClient",
    "CoinCheckClientError",
    "CoinCheckResponseError",
    "Credentials",
    "MonotonicNonce",
    "credentials_from_keys",
]
