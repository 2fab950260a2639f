"""
client.py – Unified LBankClient façade.

Single entry point that owns one LBankRestClient and the endpoint groups
wired to it, so credentials and the network session are set up once.

Usage – blocking
----------------
    from lbank_sdk import LBankClient

    with LBankClient(api_key="...", secret_key="...") as client:
        print(client.market.depth("lbk_usdt", 5))
        print(client.account.api_restrictions())

Usage – async
-------------
    import asyncio
    from lbank_sdk import LBankClient, TransportMode

    async def main() -> None:
        async with LBankClient(api_key="...", secret_key="...", mode=TransportMode.ASYNC) as client:
            book, info = await asyncio.gather(
                client.market.depth("lbk_usdt", 5),
                client.spot.account_info(),
            )

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Any, Optional, Union

from .config import Config
from .endpoints import AccountAPI, CommonAPI, MarketAPI, SpotAPI, WalletAPI
from .rest import LBankRestClient
from .signing import credential_from_secret
from .types import Credential, TransportMode


class LBankClient:
    """
    Unified façade for the LBank SDK.

    Parameters
    ----------
    api_key    : LBank API key
    secret_key : Secret string; HMAC vs RSA is inferred from its shape.
                 Ignored when ``credential`` is given.
    config     : Config (host, verbose, timeout); defaults to mainnet
    mode       : TransportMode.BLOCKING (default) or TransportMode.ASYNC
    credential : Explicit HmacCredential / RsaCredential
    session    : Optional shared requests / aiohttp session

    Without a secret or credential only public endpoints can be used.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        config: Optional[Config] = None,
        *,
        mode: Union[TransportMode, str] = TransportMode.BLOCKING,
        credential: Optional[Credential] = None,
        session: Any = None,
    ) -> None:
        if credential is None and secret_key:
            credential = credential_from_secret(api_key or "", secret_key)

        self.rest    = LBankRestClient(credential, config, mode=mode, session=session)
        self.common  = CommonAPI(self.rest)
        self.market  = MarketAPI(self.rest)
        self.wallet  = WalletAPI(self.rest)
        self.spot    = SpotAPI(self.rest)
        self.account = AccountAPI(self.rest)

    @property
    def mode(self) -> TransportMode:
        return self.rest.mode

    @property
    def config(self) -> Config:
        return self.rest.config

    @property
    def credential(self) -> Optional[Credential]:
        return self.rest.credential

    # ------------------------------------------------------------------
    # Context managers
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.rest.close()

    async def aclose(self) -> None:
        await self.rest.aclose()

    def __enter__(self) -> "LBankClient":
        self.rest.__enter__()
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    async def __aenter__(self) -> "LBankClient":
        await self.rest.__aenter__()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()
