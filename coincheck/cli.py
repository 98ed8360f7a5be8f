"""Command-line interface for the Coincheck client."""

from collections.abc import Awaitable, Callable
from typing import Any

import asyncclick as click
import httpx
from loguru import logger
from pydantic import BaseModel

from .config import Config
from .exchange.auth import MonotonicNonce, time_nonce
from .exchange.client import CoinCheckClient
from .exchange.errors import CoinCheckClientError


def build_client(config: Config) -> CoinCheckClient:
    """Create a client from configuration."""
    return CoinCheckClient(
        config.credentials(),
        base_url=config.coincheck_base_url,
        nonce_source=MonotonicNonce() if config.monotonic_nonce else time_nonce,
        timeout=config.request_timeout,
    )


def _echo(result: BaseModel | list[BaseModel]) -> None:
    if isinstance(result, list):
        for item in result:
            click.echo(item.model_dump_json(exclude_none=True))
    else:
        click.echo(result.model_dump_json(exclude_none=True, indent=2))


async def run_call(
    config: Config,
    call: Callable[[CoinCheckClient], Awaitable[Any]],
    private: bool = False,
) -> int:
    """Run one client call and print its result. Returns 0 on success, 1 on error."""
    if private:
        errors = config.validate_credentials()
        if errors:
            for err in errors:
                logger.error("Config error: {}", err)
            logger.info(
                "Copy .env.example to .env and set COINCHECK_ACCESS_KEY, "
                "COINCHECK_SECRET_KEY."
            )
            return 1

    client = build_client(config)
    try:
        result = await call(client)
    except CoinCheckClientError as e:
        logger.error("Unexpected response (HTTP {}): {}", e.status_code, e)
        return 1
    except httpx.HTTPError as e:
        logger.error("Request to {} failed: {}", config.coincheck_base_url, e)
        return 1
    finally:
        await client.close()

    _echo(result)
    return 0


@click.group()
def cli() -> None:
    """Coincheck API client."""


@cli.command()
async def ticker() -> None:
    """Show the latest ticker."""
    config = Config()
    raise SystemExit(await run_call(config, lambda c: c.ticker()))


@cli.command()
@click.option("--pair", default=None, help="Trading pair (default from config)")
async def rate(pair: str | None) -> None:
    """Show the reference rate for a pair."""
    config = Config()
    pair = pair or config.default_pair
    raise SystemExit(await run_call(config, lambda c: c.get_rate(pair)))


@cli.command()
async def balance() -> None:
    """Show account balances."""
    config = Config()
    raise SystemExit(await run_call(config, lambda c: c.get_balance(), private=True))


@cli.command()
async def transactions() -> None:
    """Show recent fills."""
    config = Config()
    raise SystemExit(
        await run_call(config, lambda c: c.get_transactions(), private=True)
    )


@cli.command()
@click.option("--rate", "order_rate", type=float, required=True, help="Limit price")
@click.option("--amount", type=float, required=True, help="Amount of BTC to buy")
@click.option("--pair", default=None, help="Trading pair (default from config)")
@click.option("--yes", is_flag=True, help="Place the order (otherwise dry run)")
async def buy(order_rate: float, amount: float, pair: str | None, yes: bool) -> None:
    """Place a limit buy order."""
    config = Config()
    pair = pair or config.default_pair
    if not yes:
        logger.info(
            "[DRY RUN] Would place buy order: {} {} @ {}", pair, amount, order_rate
        )
        raise SystemExit(0)

    raise SystemExit(
        await run_call(
            config,
            lambda c: c.buy_btc(rate=order_rate, amount=amount, pair=pair),
            private=True,
        )
    )
