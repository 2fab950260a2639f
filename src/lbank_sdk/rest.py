"""
rest.py – Dual-mode REST transport for the LBank API.

One client class, two execution modes chosen at construction:

    TransportMode.BLOCKING – requests.Session; get()/post() return str
    TransportMode.ASYNC    – aiohttp.ClientSession; async_get()/async_post()
                             return awaitables of str

Signing and URL building are shared; only the network call differs.
Endpoint wrappers use call(), which dispatches to whichever mode the
handle was built in, so they are written once for both.

Calling an operation of the other mode raises TransportModeError at call
time.  It never silently blocks an event loop or hands back a coroutine
nobody awaits.

The layer does not interpret responses: whatever body the server sends
(including non-2xx bodies and LBank's ``result: false`` envelopes) is
returned as text.  parse_response() is an optional typed view on top.

Usage – blocking
----------------
    from lbank_sdk import LBankRestClient, HmacCredential, Market, Spot

    with LBankRestClient(HmacCredential(api_key="...", secret="...")) as rest:
        text = rest.get(Market.DEPTH, "size=5&symbol=lbk_usdt")
        body = rest.post(Spot.ACCOUNT_INFO, rest.sign({}))

Usage – async
-------------
    async with LBankRestClient(cred, mode=TransportMode.ASYNC) as rest:
        text = await rest.async_get(Market.DEPTH, "size=5&symbol=lbk_usdt")
"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from typing import Any, Awaitable, Mapping, Optional, TypeVar, Union

import requests
from pydantic import BaseModel, ValidationError

from .config import Config
from .errors import (
    LBankAPIError,
    MissingCredentialError,
    NetworkError,
    SerializationError,
    TransportModeError,
)
from .signing import sign_request
from .types import Credential, TransportMode

logger = logging.getLogger(__name__)

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}

# A request path: a plain string or one of the lbank_sdk.api enums
Path = Union[str, Enum]

# What call() hands back: the body (blocking) or an awaitable of it (async)
Response = Union[str, Awaitable[str]]

M = TypeVar("M", bound=BaseModel)


def _path_str(path: Path) -> str:
    return path.value if isinstance(path, Enum) else path


# ---------------------------------------------------------------------------
# Response decoding (optional, layered on top of the raw text)
# ---------------------------------------------------------------------------

def raise_for_result(payload: Any, body: str = "") -> None:
    """Raise LBankAPIError if a decoded envelope reports ``result: false``."""
    if isinstance(payload, dict) and str(payload.get("result", "true")).lower() == "false":
        raise LBankAPIError(payload.get("error_code"), payload.get("msg"), body)


def parse_response(text: str, model: Optional[type[M]] = None, *, check: bool = False) -> Any:
    """
    Decode a response body.

    Parameters
    ----------
    text  : Raw body returned by the client
    model : Pydantic model to validate into; None returns the decoded JSON
    check : If True, raise LBankAPIError for ``result: false`` envelopes
            before validating

    Raises SerializationError if the body is not JSON or does not match
    ``model``.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"response is not valid JSON: {exc}", body=text) from exc

    if check:
        raise_for_result(payload, text)
    if model is None:
        return payload

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise SerializationError(f"response does not match {model.__name__}: {exc}", body=text) from exc


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class LBankRestClient:
    """
    REST transport handle for LBank.

    Parameters
    ----------
    credential : HmacCredential / RsaCredential for private endpoints;
                 None for a public-only client
    config     : Immutable Config (host, verbose, timeout)
    mode       : TransportMode.BLOCKING (default) or TransportMode.ASYNC;
                 fixed for the lifetime of the handle
    session    : Optional pre-built requests.Session / aiohttp.ClientSession.
                 A session passed in is shared, not owned: close() leaves
                 it open.  The async session is otherwise created on first
                 use, inside the running event loop.
    """

    def __init__(
        self,
        credential: Optional[Credential] = None,
        config: Optional[Config] = None,
        *,
        mode: Union[TransportMode, str] = TransportMode.BLOCKING,
        session: Any = None,
    ) -> None:
        self._credential   = credential
        self._config       = config or Config()
        self._mode         = TransportMode(mode)
        self._owns_session = session is None

        if self._mode is TransportMode.BLOCKING and session is None:
            session = requests.Session()
        self._session: Any = session

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def mode(self) -> TransportMode:
        return self._mode

    @property
    def config(self) -> Config:
        return self._config

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def verbose(self) -> bool:
        return self._config.verbose

    def with_config(self, config: Config) -> "LBankRestClient":
        """
        Return a new handle with ``config`` that shares this handle's
        credential, mode and network session.
        """
        return LBankRestClient(self._credential, config, mode=self._mode, session=self._session)

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign(self, parameters: Optional[Mapping[str, object]] = None) -> str:
        """Sign ``parameters`` with this handle's credential; see signing.sign_request."""
        if self._credential is None:
            raise MissingCredentialError(
                "this endpoint requires credentials; build the client with an api_key and secret"
            )
        return sign_request(parameters or {}, self._credential)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require(self, mode: TransportMode, operation: str) -> None:
        if self._mode is not mode:
            raise TransportModeError(
                f"{operation}() needs a {mode.value} client, "
                f"but this client was built in {self._mode.value} mode"
            )

    def _url(self, path: Path, query: Optional[str] = None) -> str:
        url = self._config.host + _path_str(path)
        if query:
            url = f"{url}?{query}"
        return url

    def _log_request(self, method: str, url: str, body: Optional[str]) -> None:
        level = logging.INFO if self._config.verbose else logging.DEBUG
        logger.log(level, "Request URL: %s %s", method, url)
        if body is not None:
            logger.log(level, "Request Body: %s", body)

    # ------------------------------------------------------------------
    # Blocking mode
    # ------------------------------------------------------------------

    def get(self, path: Path, query: Optional[str] = None) -> str:
        """GET ``host + path[?query]`` and return the body text."""
        self._require(TransportMode.BLOCKING, "get")
        return self._send("GET", self._url(path, query))

    def post(self, path: Path, body: Optional[str] = None) -> str:
        """POST a form-encoded ``body`` to ``host + path`` and return the body text."""
        self._require(TransportMode.BLOCKING, "post")
        return self._send("POST", self._url(path), body)

    def _send(self, method: str, url: str, body: Optional[str] = None) -> str:
        self._log_request(method, url, body)
        headers = _FORM_HEADERS if body is not None else None
        try:
            resp = self._session.request(
                method, url,
                data=body,
                headers=headers,
                timeout=self._config.timeout,
            )
            text = resp.text
        except requests.RequestException as exc:
            raise NetworkError(method, url, str(exc)) from exc

        logger.debug("%s %s -> %d", method, url, resp.status_code)
        return text

    def close(self) -> None:
        """Close the requests.Session if this handle created it."""
        self._require(TransportMode.BLOCKING, "close")
        if self._owns_session and self._session is not None:
            self._session.close()

    def __enter__(self) -> "LBankRestClient":
        self._require(TransportMode.BLOCKING, "__enter__")
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Async mode
    # ------------------------------------------------------------------

    def async_get(self, path: Path, query: Optional[str] = None) -> Awaitable[str]:
        """Async version of get().  The mode check runs before anything is awaited."""
        self._require(TransportMode.ASYNC, "async_get")
        return self._async_send("GET", self._url(path, query))

    def async_post(self, path: Path, body: Optional[str] = None) -> Awaitable[str]:
        """Async version of post().  The mode check runs before anything is awaited."""
        self._require(TransportMode.ASYNC, "async_post")
        return self._async_send("POST", self._url(path), body)

    def _async_session(self) -> Any:
        import aiohttp  # lazy import – only needed for async usage

        if self._session is None or self._session.closed:
            self._session      = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def _async_send(self, method: str, url: str, body: Optional[str] = None) -> str:
        import aiohttp

        self._log_request(method, url, body)
        session = self._async_session()
        headers = _FORM_HEADERS if body is not None else None
        try:
            async with session.request(
                method, url,
                data=body,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self._config.timeout),
            ) as resp:
                status = resp.status
                text   = await resp.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NetworkError(method, url, str(exc) or type(exc).__name__) from exc

        logger.debug("%s %s -> %d", method, url, status)
        return text

    async def aclose(self) -> None:
        """Close the aiohttp session if this handle created it."""
        self._require(TransportMode.ASYNC, "aclose")
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    async def __aenter__(self) -> "LBankRestClient":
        self._require(TransportMode.ASYNC, "__aenter__")
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Mode-independent dispatch
    # ------------------------------------------------------------------

    def call(self, method: str, path: Path, payload: Optional[str] = None) -> Response:
        """
        Send a GET (``payload`` is the query) or POST (``payload`` is the body)
        in this handle's mode.

        Returns the body text for a blocking handle and an awaitable of it
        for an async handle.
        """
        verb = method.upper()
        if verb not in ("GET", "POST"):
            raise ValueError(f"unsupported HTTP method {method!r}")

        if self._mode is TransportMode.BLOCKING:
            return self.get(path, payload) if verb == "GET" else self.post(path, payload)
        return self.async_get(path, payload) if verb == "GET" else self.async_post(path, payload)
