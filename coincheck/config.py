"""Configuration for the Coincheck client and CLI."""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exchange.auth import Credentials, credentials_from_keys
from .exchange.client import ORIGIN


# Load .env from project root (when developing) or cwd (when installed)
def _load_env_files() -> None:
    cwd = Path.cwd()
    project_root = Path(__file__).resolve().parent.parent
    for base in (cwd, project_root):
        env_default = base / ".env.default"
        env_file = base / ".env"
        if env_default.exists():
            load_dotenv(env_default)
        if env_file.exists():
            load_dotenv(env_file)
            break


_load_env_files()


class Config(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_case=True,
    )

    # Exchange
    coincheck_access_key: str = Field(default="")
    coincheck_secret_key: str = Field(default="")
    coincheck_base_url: str = Field(default=ORIGIN)
    request_timeout: float | None = Field(default=10.0, gt=0)

    # Signing
    monotonic_nonce: bool = Field(default=False)

    # Trading
    default_pair: str = Field(default="btc_jpy")

    def credentials(self) -> Credentials:
        return credentials_from_keys(
            self.coincheck_access_key, self.coincheck_secret_key
        )

    def validate_credentials(self) -> list[str]:
        """Return error messages for missing API keys (empty when usable)."""
        errors = []
        if not self.coincheck_access_key:
            errors.append("COINCHECK_ACCESS_KEY is required for private endpoints")
        if not self.coincheck_secret_key:
            errors.append("COINCHECK_SECRET_KEY is required for private endpoints")
        return errors
