"""
tests/conftest.py – Shared fixtures and the --integration flag.

RSA keys are generated once per session; every encoding the SDK accepts
(PEM PKCS#8, PEM PKCS#1, base64 DER in both) is derived from the same key.
"""

from __future__ import annotations

import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


# ---------------------------------------------------------------------------
# --integration flag + skip logic
# ---------------------------------------------------------------------------

def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests against the live LBank API",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--integration"):
        return
    skip_integration = pytest.mark.skip(reason="pass --integration to run against LBank")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# ---------------------------------------------------------------------------
# Key material
# ---------------------------------------------------------------------------

HMAC_SECRET = "00112233445566778899aabbccddeeff"


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def _encode(key: rsa.RSAPrivateKey, encoding: serialization.Encoding, fmt: serialization.PrivateFormat) -> bytes:
    return key.private_bytes(encoding, fmt, serialization.NoEncryption())


@pytest.fixture(scope="session")
def pem_pkcs8(rsa_key: rsa.RSAPrivateKey) -> str:
    return _encode(rsa_key, serialization.Encoding.PEM, serialization.PrivateFormat.PKCS8).decode()


@pytest.fixture(scope="session")
def pem_pkcs1(rsa_key: rsa.RSAPrivateKey) -> str:
    return _encode(rsa_key, serialization.Encoding.PEM, serialization.PrivateFormat.TraditionalOpenSSL).decode()


@pytest.fixture(scope="session")
def der_pkcs8_b64(rsa_key: rsa.RSAPrivateKey) -> str:
    der = _encode(rsa_key, serialization.Encoding.DER, serialization.PrivateFormat.PKCS8)
    return base64.b64encode(der).decode()


@pytest.fixture(scope="session")
def der_pkcs1_b64(rsa_key: rsa.RSAPrivateKey) -> str:
    der = _encode(rsa_key, serialization.Encoding.DER, serialization.PrivateFormat.TraditionalOpenSSL)
    return base64.b64encode(der).decode()


# ---------------------------------------------------------------------------
# Dummy HTTP sessions
# ---------------------------------------------------------------------------

class DummyResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text        = text
        self.status_code = status_code


class DummySession:
    """Stands in for requests.Session; records every request."""

    def __init__(self, text: str = '{"result":"true"}', status_code: int = 200, exc: Exception | None = None) -> None:
        self._text   = text
        self._status = status_code
        self._exc    = exc
        self.calls: list[dict] = []
        self.closed  = False

    def request(self, method: str, url: str, **kwargs: object) -> DummyResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self._exc is not None:
            raise self._exc
        return DummyResponse(self._text, self._status)

    def close(self) -> None:
        self.closed = True


class _DummyAsyncResponse:
    """Body may be bytes; text() then decodes like aiohttp (strict by default)."""

    def __init__(self, body: str | bytes, status: int) -> None:
        self._body  = body
        self.status = status

    async def text(self, encoding: str | None = None, errors: str = "strict") -> str:
        if isinstance(self._body, bytes):
            return self._body.decode(encoding or "utf-8", errors)
        return self._body

    async def __aenter__(self) -> "_DummyAsyncResponse":
        return self

    async def __aexit__(self, *_: object) -> None:
        return None


class DummyAsyncSession:
    """Stands in for aiohttp.ClientSession; records every request."""

    def __init__(self, text: str | bytes = '{"result":"true"}', status: int = 200, exc: Exception | None = None) -> None:
        self._text   = text
        self._status = status
        self._exc    = exc
        self.calls: list[dict] = []
        self.closed  = False

    def request(self, method: str, url: str, **kwargs: object) -> _DummyAsyncResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self._exc is not None:
            raise self._exc
        return _DummyAsyncResponse(self._text, self._status)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def dummy_session() -> DummySession:
    return DummySession()


@pytest.fixture
def dummy_async_session() -> DummyAsyncSession:
    return DummyAsyncSession()
