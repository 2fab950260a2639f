"""
examples/quickstart.py – End-to-end demo of the LBank SDK.

Walks through:
  1. Public market data on a blocking client (server time, orderbook)
  2. A signed request (account balances, decoded into a typed model)
  3. A test order (validated by the exchange, never placed)
  4. The same calls on an async client, run concurrently

HOW TO RUN
----------
    export LBANK_API_KEY="your_api_key"
    export LBANK_SECRET_KEY="..."     # hex HMAC secret or RSA private key
    python examples/quickstart.py

Without credentials only the public parts run.  Set LBANK_VERBOSE=1 to
log every request URL and body.
"""

from __future__ import annotations

import asyncio
import logging
import os

from lbank_sdk import (
    AccountInformation,
    Config,
    LBankAPIError,
    LBankClient,
    LBankError,
    TransportMode,
    parse_response,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s – %(message)s",
)
logger = logging.getLogger("quickstart")

# ---------------------------------------------------------------------------
# Config – read from environment variables
# ---------------------------------------------------------------------------

API_KEY    = os.environ.get("LBANK_API_KEY",    "")
SECRET_KEY = os.environ.get("LBANK_SECRET_KEY", "")
VERBOSE    = os.environ.get("LBANK_VERBOSE",    "") == "1"

CONFIG = Config(verbose=VERBOSE)
SYMBOL = "lbk_usdt"


# ---------------------------------------------------------------------------
# Part 1 – blocking
# ---------------------------------------------------------------------------

def blocking_demo() -> None:
    logger.info("=== Blocking demo ===")

    with LBankClient(api_key=API_KEY or None, secret_key=SECRET_KEY or None, config=CONFIG) as client:
        # 1. Public endpoints need no credentials
        server_ms = parse_response(client.common.time(), check=True)["data"]
        logger.info("Server time: %d", server_ms)

        book = parse_response(client.market.depth(SYMBOL, 5), check=True)["data"]
        if book["bids"] and book["asks"]:
            logger.info("Best bid %s / best ask %s", book["bids"][0][0], book["asks"][0][0])

        if client.credential is None:
            logger.info("No credentials set – skipping private endpoints")
            return
        logger.info("Signing with %s", client.credential.method.value)

        # 2. Signed request, decoded into a typed model
        try:
            info = parse_response(client.spot.account_info(), AccountInformation, check=True)
            logger.info("Free balances: %s", info.data.free if info.data else None)
        except LBankAPIError as exc:
            logger.error("Account query rejected: %s", exc)
            return

        # 3. Test order – validated by the exchange, never placed
        text = client.spot.create_order_test(SYMBOL, "buy", price="0.0001", amount="100")
        logger.info("Test order response: %s", text)


# ---------------------------------------------------------------------------
# Part 2 – async
# ---------------------------------------------------------------------------

async def async_demo() -> None:
    logger.info("=== Async demo ===")

    async with LBankClient(
        api_key=API_KEY or None,
        secret_key=SECRET_KEY or None,
        config=CONFIG,
        mode=TransportMode.ASYNC,
    ) as client:
        calls = [client.common.time(), client.market.ticker_24hr(SYMBOL)]
        if client.credential is not None:
            calls.append(client.account.trade_fee_rate(SYMBOL))

        for text in await asyncio.gather(*calls):
            logger.info("%s", text[:200])


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    try:
        blocking_demo()
        asyncio.run(async_demo())
    except LBankError as exc:
        logger.error("Demo failed: %s", exc)
        raise SystemExit(1)
