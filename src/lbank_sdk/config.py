"""
config.py – Immutable client configuration for the LBank SDK.

A Config is fixed for the lifetime of the client it is passed to.  To
change a setting (e.g. turn on verbose request logging) derive a new
Config and build a new handle from it:

    from lbank_sdk import Config, LBankRestClient

    quiet  = LBankRestClient(credential, Config())
    chatty = quiet.with_config(quiet.config.replace(verbose=True))
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

# ---------------------------------------------------------------------------
# Base URLs
# ---------------------------------------------------------------------------

SPOT_MAINNET = "https://www.lbkex.net"

# Default HTTP timeout in seconds (None disables it)
DEFAULT_TIMEOUT_S = 10.0


@dataclass(frozen=True)
class Config:
    """
    Parameters
    ----------
    rest_api_endpoint : Base URL every request path is appended to
    verbose           : Log request URLs / bodies at INFO instead of DEBUG
    timeout           : Total per-request timeout in seconds, passed to the
                        HTTP library; None means no timeout
    """

    rest_api_endpoint: str             = SPOT_MAINNET
    verbose:           bool            = False
    timeout:           Optional[float] = DEFAULT_TIMEOUT_S

    def __post_init__(self) -> None:
        if not self.rest_api_endpoint:
            raise ValueError("rest_api_endpoint must be a non-empty URL")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive or None, got {self.timeout}")

    @property
    def host(self) -> str:
        """Base URL without a trailing slash."""
        return self.rest_api_endpoint.rstrip("/")

    def replace(self, **changes: Any) -> "Config":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)
