"""
types.py – Pydantic v2 models and enums for the LBank SDK.

Credentials
-----------
A credential is an API key plus a secret.  LBank accepts two kinds of
secret, and the SDK models them as distinct types so the signing
algorithm is stated by the caller instead of guessed:

    HmacCredential(api_key="...", secret="00112233...")      # HmacSHA256
    RsaCredential(api_key="...",  secret="-----BEGIN ...")   # RSA

Callers holding only a bare secret string can use
``lbank_sdk.signing.credential_from_secret`` which infers the variant
from the secret's shape.

Responses
---------
The REST layer returns raw text.  The response models below are an
optional typed view over the JSON bodies of the most common endpoints:

    info = parse_response(text, AccountInformation)

Numeric values are kept as strings (LBank is inconsistent about sending
numbers vs strings); convert with Decimal for arithmetic.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

@unique
class SignatureMethod(str, Enum):
    """Value sent in the ``signature_method`` request field."""
    RSA         = "RSA"
    HMAC_SHA256 = "HmacSHA256"


@unique
class TransportMode(str, Enum):
    """Execution mode a REST client handle is built for."""
    BLOCKING = "blocking"
    ASYNC    = "async"


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

class Credential(BaseModel):
    """
    API key + secret pair.  Use one of the concrete subclasses.

    The secret is kept out of repr() so credentials can be logged safely.
    """
    api_key: str
    secret:  str = Field(repr=False)

    method: ClassVar[SignatureMethod]

    model_config = {"frozen": True}

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("secret must be a non-empty string")
        return v

    @model_validator(mode="before")
    @classmethod
    def require_variant(cls, data: Any) -> Any:
        if getattr(cls, "method", None) is None:
            raise ValueError(
                f"{cls.__name__} has no signature method; use HmacCredential or RsaCredential"
            )
        return data


class HmacCredential(Credential):
    """Symmetric secret (hex-digit ASCII), signed with HMAC-SHA256."""
    method: ClassVar[SignatureMethod] = SignatureMethod.HMAC_SHA256


class RsaCredential(Credential):
    """
    Asymmetric secret: an RSA private key as PEM text (PKCS#8 or PKCS#1)
    or as base64-encoded DER.  The key is parsed lazily at signing time.
    """
    method: ClassVar[SignatureMethod] = SignatureMethod.RSA


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class _Response(BaseModel):
    model_config = {"coerce_numbers_to_str": True, "populate_by_name": True}


class AccountData(_Response):
    """Free-form balance buckets; their shape varies between endpoints."""
    info:   Optional[Any] = None
    freeze: Optional[Any] = None
    asset:  Optional[Any] = None
    free:   Optional[Any] = None


class AccountInformation(_Response):
    result:     str
    msg:        Optional[str]         = None
    error_code: int                   = 0
    data:       Optional[AccountData] = None   # absent on error responses
    ts:         Optional[int]         = None


class Balance(_Response):
    asset:  str
    free:   str
    locked: str


class Order(_Response):
    """A spot order as returned by the order query endpoints."""
    symbol:          str
    order_id:        str           = Field(alias="orderId")
    client_order_id: Optional[str] = Field(default=None, alias="clientOrderId")
    price:           str
    orig_qty:        str           = Field(alias="origQty")
    executed_qty:    str           = Field(alias="executedQty")
    status:          str
    time_in_force:   Optional[str] = Field(default=None, alias="timeInForce")
    order_type:      str           = Field(alias="type")
    side:            str
    time:            int


class TransactionData(_Response):
    order_id:   str
    symbol:     str
    price:      str
    amount:     str
    order_type: str = Field(alias="type")


class Transaction(_Response):
    """Envelope returned after placing an order."""
    result:     str
    msg:        Optional[str] = None
    error_code: int           = 0
    data:       TransactionData


class OrderCanceledData(_Response):
    order_id: str
    symbol:   str


class OrderCanceled(_Response):
    result:     str
    msg:        Optional[str] = None
    error_code: int           = 0
    data:       OrderCanceledData


class TradeHistory(_Response):
    id:               int
    symbol:           str
    price:            str
    qty:              str
    commission:       Optional[str] = None
    commission_asset: Optional[str] = None
    time:             int
    is_buyer:         bool          = Field(alias="isBuyer")
    is_maker:         bool          = Field(alias="isMaker")
