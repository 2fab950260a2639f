"""
signing.py – Request signing for the LBank REST API.

Every private endpoint takes a form-encoded parameter set that carries
its own signature.  Building one is a fixed pipeline:

1. Add the bookkeeping fields: ``timestamp`` (ms since epoch, kept if the
   caller supplied one), ``api_key``, ``signature_method`` and
   ``echostr`` (a random nonce, kept if supplied).
2. Canonicalise: sort by key, render as ``k1=v1&k2=v2``, skipping
   ``sign``.  Values are NOT url-encoded; LBank signs the raw text.
3. Pre-hash: uppercase hex MD5 of the canonical string.
4. Sign the pre-hash:
     HmacSHA256 – HMAC-SHA256 keyed by the secret, lowercase hex
     RSA        – PKCS#1 v1.5 over SHA-256, standard base64
5. Add ``sign`` and serialise the whole set in the same sorted order.

Usage
-----
    from lbank_sdk import HmacCredential, sign_request

    cred  = HmacCredential(api_key="k1", secret="00112233445566778899aabbccddeeff")
    query = sign_request({"symbol": "lbk_usdt"}, cred)
    # api_key=k1&echostr=...&sign=...&signature_method=HmacSHA256&symbol=lbk_usdt&timestamp=...

Callers that only hold a bare secret string can use sign_and_serialize(),
which picks the algorithm from the secret's shape (see
credential_from_secret).

Providers
---------
Timestamps and nonces come from zero-argument callables so tests and
callers with their own clock can pin them::

    sign_request(params, cred, timestamp_provider=lambda: 1700000000000,
                 echostr_provider=lambda: "a" * 32)
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
import string
import time
import uuid
from functools import lru_cache
from typing import Callable, Iterable, Mapping, Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .errors import KeyParseError, MissingCredentialError, UnsupportedAlgorithmError
from .types import Credential, HmacCredential, RsaCredential, SignatureMethod

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Wire field names
# ---------------------------------------------------------------------------

TIMESTAMP_FIELD        = "timestamp"
API_KEY_FIELD          = "api_key"
SIGNATURE_METHOD_FIELD = "signature_method"
ECHOSTR_FIELD          = "echostr"
SIGN_FIELD             = "sign"

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

# Callable with no args returning epoch milliseconds
TimestampProvider = Callable[[], int]

# Callable with no args returning a fresh echostr nonce
EchostrProvider = Callable[[], str]

ParameterSet = Mapping[str, object]

# Secrets at least this long, or containing non-hex characters, are RSA keys
_HMAC_MAX_SECRET_LEN = 100
_HEX_DIGITS = frozenset(string.hexdigits)


# ---------------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------------

def get_timestamp() -> int:
    """Current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def is_start_time_valid(start_time: int) -> bool:
    """True if ``start_time`` (epoch ms) lies in the past."""
    return start_time < get_timestamp()


def new_echostr() -> str:
    """32 lowercase hex characters from a random UUID."""
    return uuid.uuid4().hex


def _render(items: Iterable[tuple[str, object]]) -> str:
    return "&".join(f"{key}={value}" for key, value in items)


def parse_query(query: str) -> dict[str, str]:
    """Split a ``k=v&k=v`` string back into a dict (no url-decoding)."""
    params: dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        params[key] = value
    return params


# ---------------------------------------------------------------------------
# Canonicalisation and pre-hash
# ---------------------------------------------------------------------------

def canonicalize(parameters: ParameterSet) -> str:
    """
    Render ``parameters`` as the string LBank signs.

    Keys are sorted ascending and ``sign`` is always left out, so a
    parameter set that has already been signed canonicalises to the
    same string it was signed over.
    """
    return _render(sorted(item for item in parameters.items() if item[0] != SIGN_FIELD))


def build_query_string(parameters: ParameterSet) -> str:
    """Serialise every field, ``sign`` included, in canonical order."""
    return _render(sorted(parameters.items()))


def prehash(canonical: str) -> str:
    """Uppercase hex MD5 of the canonical string; the input to both signers."""
    return hashlib.md5(canonical.encode("utf-8")).hexdigest().upper()


# ---------------------------------------------------------------------------
# Credential selection
# ---------------------------------------------------------------------------

def detect_signature_method(secret: str) -> SignatureMethod:
    """
    Guess the signing algorithm from the shape of ``secret``.

    LBank HMAC secrets are short hex strings; anything else is treated as
    RSA key material.  A hex HMAC secret of 100+ characters would be
    misclassified, so prefer building an explicit credential.
    """
    if len(secret) < _HMAC_MAX_SECRET_LEN and all(c in _HEX_DIGITS for c in secret):
        return SignatureMethod.HMAC_SHA256
    return SignatureMethod.RSA


def credential_from_secret(api_key: str, secret: str) -> Credential:
    """Build an HmacCredential or RsaCredential by inspecting ``secret``."""
    if not secret:
        raise MissingCredentialError("secret is empty")
    if detect_signature_method(secret) is SignatureMethod.HMAC_SHA256:
        return HmacCredential(api_key=api_key, secret=secret)
    return RsaCredential(api_key=api_key, secret=secret)


@lru_cache(maxsize=16)
def load_rsa_private_key(secret: str) -> rsa.RSAPrivateKey:
    """
    Parse an RSA private key from PEM text or base64 DER.

    Secrets containing a ``BEGIN`` marker are read as PEM, anything else is
    base64-decoded and read as DER.  Both PKCS#8 and PKCS#1 encodings are
    accepted in either form.  Literal ``\\n`` sequences, as left behind by
    single-line environment variables, are turned back into newlines.

    Raises KeyParseError naming the format that was attempted.
    """
    if "BEGIN" in secret:
        key_format = "PEM"
        pem = secret.replace("\\n", "\n").strip().encode("utf-8")
        try:
            key = serialization.load_pem_private_key(pem, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyParseError(key_format, str(exc)) from exc
    else:
        key_format = "base64 DER"
        try:
            der = base64.b64decode("".join(secret.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise KeyParseError(key_format, f"invalid base64: {exc}") from exc
        try:
            key = serialization.load_der_private_key(der, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyParseError(key_format, str(exc)) from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyParseError(key_format, f"expected an RSA key, got {type(key).__name__}")
    return key


# ---------------------------------------------------------------------------
# Signers
# ---------------------------------------------------------------------------

def sign_hmac(digest: str, secret: str) -> str:
    """HMAC-SHA256 of the pre-hash keyed by the raw secret, lowercase hex."""
    return hmac.new(secret.encode("utf-8"), digest.encode("utf-8"), hashlib.sha256).hexdigest()


def sign_rsa(digest: str, secret: str) -> str:
    """RSA PKCS#1 v1.5 / SHA-256 signature of the pre-hash, base64-encoded."""
    key = load_rsa_private_key(secret)
    raw = key.sign(digest.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
    return base64.b64encode(raw).decode("ascii")


_SIGNERS: dict[SignatureMethod, Callable[[str, str], str]] = {
    SignatureMethod.HMAC_SHA256: sign_hmac,
    SignatureMethod.RSA:         sign_rsa,
}


def signature_method_of(parameters: ParameterSet) -> SignatureMethod:
    """Read the ``signature_method`` tag of a built parameter set."""
    tag = parameters.get(SIGNATURE_METHOD_FIELD)
    try:
        return SignatureMethod(tag)
    except ValueError:
        raise UnsupportedAlgorithmError(tag) from None


def sign_digest(digest: str, method: SignatureMethod, secret: str) -> str:
    """Sign a pre-hash with the algorithm named by ``method``."""
    signer = _SIGNERS.get(method)
    if signer is None:
        raise UnsupportedAlgorithmError(method)
    return signer(digest, secret)


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------

def _warn_on_unescaped(parameters: Mapping[str, str]) -> None:
    for key, value in parameters.items():
        if key == SIGN_FIELD:
            continue
        if "&" in value or "=" in value:
            logger.warning(
                "Parameter %r contains '&' or '='; it is sent unescaped and "
                "will not survive canonicalisation intact", key,
            )


def build_signed_parameters(
    parameters: ParameterSet,
    credential: Credential,
    *,
    timestamp_provider: Optional[TimestampProvider] = None,
    echostr_provider: Optional[EchostrProvider] = None,
) -> dict[str, str]:
    """
    Return a new dict holding ``parameters`` plus the auth fields and ``sign``.

    ``parameters`` itself is never modified.  A caller-supplied
    ``timestamp`` or ``echostr`` is kept as-is; ``api_key`` and
    ``signature_method`` are always overwritten from ``credential``; a
    stale ``sign`` is replaced.

    Raises KeyParseError if an RSA secret cannot be parsed.
    """
    signed = {key: str(value) for key, value in parameters.items()}
    _warn_on_unescaped(signed)

    if TIMESTAMP_FIELD not in signed:
        signed[TIMESTAMP_FIELD] = str((timestamp_provider or get_timestamp)())
    signed[API_KEY_FIELD]          = credential.api_key
    signed[SIGNATURE_METHOD_FIELD] = credential.method.value
    if ECHOSTR_FIELD not in signed:
        signed[ECHOSTR_FIELD] = (echostr_provider or new_echostr)()

    method = signature_method_of(signed)
    digest = prehash(canonicalize(signed))
    logger.debug("Signing %d parameters with %s", len(signed), method.value)

    signed[SIGN_FIELD] = sign_digest(digest, method, credential.secret)
    return signed


def sign_request(
    parameters: ParameterSet,
    credential: Credential,
    *,
    timestamp_provider: Optional[TimestampProvider] = None,
    echostr_provider: Optional[EchostrProvider] = None,
) -> str:
    """Sign ``parameters`` and return the query string / form body to send."""
    signed = build_signed_parameters(
        parameters,
        credential,
        timestamp_provider=timestamp_provider,
        echostr_provider=echostr_provider,
    )
    return build_query_string(signed)


def sign_and_serialize(parameters: ParameterSet, api_key: str, secret: str) -> str:
    """
    Sign with a bare secret string, inferring HMAC vs RSA from its shape.

    Equivalent to ``sign_request(parameters, credential_from_secret(api_key, secret))``.
    """
    return sign_request(parameters, credential_from_secret(api_key, secret))


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

def verify_signature(signed: Union[str, ParameterSet], credential: Credential) -> bool:
    """
    Check the ``sign`` field of a signed query string or parameter set.

    Useful for testing without contacting the exchange.  Returns False for
    a missing or wrong signature, or one made with the other algorithm.

    Raises UnsupportedAlgorithmError if ``signature_method`` is unknown.
    """
    params   = parse_query(signed) if isinstance(signed, str) else {k: str(v) for k, v in signed.items()}
    received = params.get(SIGN_FIELD)
    if not received:
        return False

    method = signature_method_of(params)
    if method is not credential.method:
        return False

    digest = prehash(canonicalize(params))
    if method is SignatureMethod.HMAC_SHA256:
        return hmac.compare_digest(sign_hmac(digest, credential.secret), received)

    public_key = load_rsa_private_key(credential.secret).public_key()
    try:
        public_key.verify(
            base64.b64decode(received, validate=True),
            digest.encode("utf-8"),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
    except (InvalidSignature, binascii.Error, ValueError):
        return False
    return True
