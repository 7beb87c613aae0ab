"""Request-signing digests used by exchange APIs."""

from __future__ import annotations

import base64
import hashlib
import hmac


def _hmac_digest(secret: str, params: str, digestmod) -> bytes:
    return hmac.new(secret.encode(), params.encode(), digestmod).digest()


def md5_sign(secret: str, params: str) -> str:
    """Hex MD5 of params; the secret is not used."""
    return hashlib.md5(params.encode()).hexdigest()


def hmac_sha256_sign(secret: str, params: str) -> str:
    """Hex HMAC-SHA256 of params keyed with secret."""
    return _hmac_digest(secret, params, hashlib.sha256).hex()


def hmac_sha512_sign(secret: str, params: str) -> str:
    """Hex HMAC-SHA512 of params keyed with secret."""
    return _hmac_digest(secret, params, hashlib.sha512).hex()


def hmac_sha1_sign(secret: str, params: str) -> str:
    """Hex HMAC-SHA1 of params keyed with secret."""
    return _hmac_digest(secret, params, hashlib.sha1).hex()


def hmac_md5_sign(secret: str, params: str) -> str:
    """Hex HMAC-MD5 of params keyed with secret."""
    return _hmac_digest(secret, params, hashlib.md5).hex()


def hmac_sha384_sign(secret: str, params: str) -> str:
    """Hex HMAC-SHA384 of params keyed with secret."""
    return _hmac_digest(secret, params, hashlib.sha384).hex()


def hmac_sha256_base64_sign(secret: str, params: str) -> str:
    """Base64 of the raw HMAC-SHA256 digest."""
    return base64.b64encode(_hmac_digest(secret, params, hashlib.sha256)).decode()


def hmac_sha512_base64_sign(secret: str, params: str) -> str:
    """Base64 of the hex text of the HMAC-SHA512 digest."""
    hex_text = _hmac_digest(secret, params, hashlib.sha512).hex()
    return base64.b64encode(hex_text.encode()).decode()