"""Tests for Config."""

import pytest
from pydantic import ValidationError

from coincheck.config import Config
from coincheck.exchange.auth import Anonymous, Authenticated


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "COINCHECK_ACCESS_KEY",
        "COINCHECK_SECRET_KEY",
        "COINCHECK_BASE_URL",
        "REQUEST_TIMEOUT",
        "MONOTONIC_NONCE",
        "DEFAULT_PAIR",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Tests for Config."""

    def test_default_values(self) -> None:
        """Config has expected defaults."""
        config = Config(_env_file=None)
        assert config.coincheck_base_url == "https://coincheck.com/api"
        assert config.request_timeout == 10.0
        assert config.monotonic_nonce is False
        assert config.default_pair == "btc_jpy"

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COINCHECK_ACCESS_KEY", "env-key")
        monkeypatch.setenv("COINCHECK_SECRET_KEY", "env-secret")
        monkeypatch.setenv("MONOTONIC_NONCE", "true")
        config = Config(_env_file=None)
        assert config.coincheck_access_key == "env-key"
        assert config.monotonic_nonce is True

    def test_credentials_authenticated(self, config: Config) -> None:
        assert config.credentials() == Authenticated(access_key="AK", secret_key="SK")

    def test_credentials_anonymous_when_missing(self, config_public: Config) -> None:
        assert isinstance(config_public.credentials(), Anonymous)

    def test_validate_credentials_missing(self, config_public: Config) -> None:
        errors = config_public.validate_credentials()
        assert len(errors) == 2
        assert any("COINCHECK_ACCESS_KEY" in e for e in errors)
        assert any("COINCHECK_SECRET_KEY" in e for e in errors)

    def test_validate_credentials_ok(self, config: Config) -> None:
        assert config.validate_credentials() == []

    def test_timeout_can_be_disabled(self) -> None:
        assert Config(request_timeout=None).request_timeout is None

    @pytest.mark.parametrize("invalid_timeout", [0, -1])
    def test_timeout_must_be_positive(self, invalid_timeout: float) -> None:
        with pytest.raises(ValidationError):
            Config(request_timeout=invalid_timeout)
