"""
LBank SDK – Python SDK for the LBank exchange REST API.

Provides:
  - Unified façade                     (client.py    → LBankClient)
  - Request signing, HMAC + RSA        (signing.py   → sign_request)
  - Dual-mode REST transport           (rest.py      → LBankRestClient)
  - Endpoint groups                    (endpoints.py → MarketAPI, SpotAPI, …)
  - Endpoint path tables               (api.py)
  - Credentials and Pydantic v2 models (types.py)
  - Immutable configuration            (config.py    → Config)
  - Exception hierarchy                (errors.py)

Quickstart
----------
    from lbank_sdk import LBankClient

    with LBankClient(api_key="...", secret_key="...") as client:
        print(client.market.depth("lbk_usdt", 5))
        print(client.spot.account_info())
"""

from .types import (
    # Enums
    SignatureMethod,
    TransportMode,
    # Credentials
    Credential,
    HmacCredential,
    RsaCredential,
    # Response models
    AccountData,
    AccountInformation,
    Balance,
    Order,
    Transaction,
    TransactionData,
    OrderCanceled,
    OrderCanceledData,
    TradeHistory,
)
from .errors import (
    LBankError,
    SigningError,
    KeyParseError,
    UnsupportedAlgorithmError,
    MissingCredentialError,
    NetworkError,
    SerializationError,
    LBankAPIError,
    TransportModeError,
)
from .config import Config, SPOT_MAINNET
from .signing import (
    canonicalize,
    prehash,
    build_query_string,
    detect_signature_method,
    credential_from_secret,
    build_signed_parameters,
    sign_request,
    sign_and_serialize,
    verify_signature,
    TimestampProvider,
    EchostrProvider,
)
from .api import General, Market, Wallet, Spot, Account
from .rest import LBankRestClient, parse_response
from .endpoints import CommonAPI, MarketAPI, WalletAPI, SpotAPI, AccountAPI
from .client import LBankClient

__all__ = [
    # Enums
    "SignatureMethod",
    "TransportMode",
    # Credentials
    "Credential",
    "HmacCredential",
    "RsaCredential",
    # Response models
    "AccountData",
    "AccountInformation",
    "Balance",
    "Order",
    "Transaction",
    "TransactionData",
    "OrderCanceled",
    "OrderCanceledData",
    "TradeHistory",
    # Errors
    "LBankError",
    "SigningError",
    "KeyParseError",
    "UnsupportedAlgorithmError",
    "MissingCredentialError",
    "NetworkError",
    "SerializationError",
    "LBankAPIError",
    "TransportModeError",
    # Config
    "Config",
    "SPOT_MAINNET",
    # Signing
    "canonicalize",
    "prehash",
    "build_query_string",
    "detect_signature_method",
    "credential_from_secret",
    "build_signed_parameters",
    "sign_request",
    "sign_and_serialize",
    "verify_signature",
    "TimestampProvider",
    "EchostrProvider",
    # Endpoint paths
    "General",
    "Market",
    "Wallet",
    "Spot",
    "Account",
    # REST
    "LBankRestClient",
    "parse_response",
    # Endpoint groups
    "CommonAPI",
    "MarketAPI",
    "WalletAPI",
    "SpotAPI",
    "AccountAPI",
    # Unified façade
    "LBankClient",
]

__version__ = "0.1.0"
