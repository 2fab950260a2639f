"""
errors.py – Exception hierarchy for the LBank SDK.

Everything the SDK raises on purpose derives from LBankError, grouped by
the stage that failed:

    LBankError
    ├── SigningError              (canonicalisation / signing)
    │   ├── KeyParseError
    │   ├── UnsupportedAlgorithmError
    │   └── MissingCredentialError
    ├── NetworkError              (transport)
    ├── SerializationError        (typed decoding of a response body)
    └── LBankAPIError             (body reports result=false)

TransportModeError is deliberately *not* an LBankError: calling a
blocking operation on an async handle (or vice versa) is a bug in the
calling code, and ``except LBankError`` blocks must not hide it.
"""

from __future__ import annotations

from typing import Optional


class LBankError(Exception):
    """Base class for all errors raised by the SDK."""


# ---------------------------------------------------------------------------
# Signing
# ---------------------------------------------------------------------------

class SigningError(LBankError):
    """A signed request could not be produced."""


class KeyParseError(SigningError):
    """Key material could not be decoded as an RSA private key."""

    def __init__(self, key_format: str, reason: str = "") -> None:
        self.key_format = key_format
        self.reason     = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"could not parse secret as {key_format} RSA private key{detail}")


class UnsupportedAlgorithmError(SigningError):
    """A signature_method tag names an algorithm the SDK does not implement."""

    def __init__(self, method: object) -> None:
        self.method = method
        super().__init__(f"unsupported signature_method {method!r}")


class MissingCredentialError(SigningError):
    """A private endpoint was called on a client built without credentials."""


# ---------------------------------------------------------------------------
# Transport / decoding
# ---------------------------------------------------------------------------

class NetworkError(LBankError):
    """The HTTP request failed before a response body was read."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        self.method = method.upper()
        self.url    = url
        self.reason = reason
        super().__init__(f"{self.method} {url} failed: {reason}")


class SerializationError(LBankError):
    """A response body did not decode into the expected structure."""

    def __init__(self, message: str, body: str = "") -> None:
        self.body = body
        super().__init__(message)


class LBankAPIError(LBankError):
    """Raised when a decoded response envelope reports ``result: false``."""

    def __init__(self, error_code: Optional[int], msg: Optional[str], body: str = "") -> None:
        self.error_code = error_code
        self.msg        = msg
        self.body       = body
        super().__init__(f"LBank API error [{error_code}]: {msg or body}")


class TransportModeError(RuntimeError):
    """An operation was invoked on a client built for the other execution mode."""
