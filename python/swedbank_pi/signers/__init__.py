"""
Location: python/swedbank_pi/signers/__init__.py

Summary:
    Signers package for swedbank-pi-sdk. Provides the detached RS512 JWS
    signer and the tagged payload variants it accepts.

Usage:
    from swedbank_pi.signers import JwsSigner, EmptyPayload, JsonPayload
"""

from .jws import (
    EmptyPayload,
    JsonPayload,
    JwsSigner,
    Payload,
    base64url_decode,
    base64url_encode,
    decode_header,
    sign_detached,
    verify_detached,
)

__all__ = [
    "EmptyPayload",
    "JsonPayload",
    "JwsSigner",
    "Payload",
    "base64url_decode",
    "base64url_encode",
    "decode_header",
    "sign_detached",
    "verify_detached",
]
