"""
Location: python/swedbank_pi/signers/jws.py

Summary:
    Detached RS512 JSON Web Signature used to authenticate every request to
    the Swedbank Payment Initiation API.

    The token has the form ``<base64url(header)>..<base64url(signature)>``.
    The header declares ``b64: false``, so the signing input is the encoded
    header, a dot, and the payload JSON exactly as it travels in the HTTP
    body (not base64url-encoded).

Usage:
    Used by client.py once per outgoing request. Callers pick the payload
    variant explicitly: EmptyPayload for GET requests, JsonPayload for
    requests carrying a body.

Example:
    from swedbank_pi.signers import JwsSigner, JsonPayload

    signer = JwsSigner()
    token = signer.sign(
        JsonPayload({"creditor": {"bic": "HABALT22"}}),
        url="https://pi.swedbank.com/public/api/v3/transactions/providers/HABALT22",
        client_id="my-client",
        private_key=pem_string,
    )
"""

import base64
import binascii
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..errors import InvalidKeyError, SigningError
from ..types import JWSHeader


@dataclass(frozen=True)
class EmptyPayload:
    """No request body. Contributes an empty string to the signing input."""

    def serialize(self) -> str:
        return ""


@dataclass(frozen=True)
class JsonPayload:
    """
    A JSON request body.

    The serialized form is compact (no whitespace) and is used both for
    the signing input and as the HTTP body, so the bytes Swedbank verifies
    are the bytes it receives.
    """
    value: Any

    def serialize(self) -> str:
        return json.dumps(self.value, separators=(",", ":"))


Payload = Union[EmptyPayload, JsonPayload]


def base64url_encode(data: bytes) -> str:
    """Base64url (RFC 4648 section 5) without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(data: str) -> bytes:
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def _load_private_key(private_key: str) -> rsa.RSAPrivateKey:
    try:
        key = serialization.load_pem_private_key(
            private_key.strip().encode(), password=None
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError("Invalid private key provided") from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise InvalidKeyError("Invalid private key provided: not an RSA key")
    return key


def decode_header(token: str) -> dict:
    """
    Decode the protected header of a detached JWS.

    Args:
        token: Detached JWS string

    Returns:
        The header as a dict

    Raises:
        ValueError: If the token is not a detached JWS
    """
    header_encoded, sep, _ = token.partition("..")
    if not sep or not header_encoded:
        raise ValueError("Not a detached JWS token")
    try:
        return json.loads(base64url_decode(header_encoded))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Detached JWS header is not valid base64url JSON") from exc


class JwsSigner:
    """
    Produces detached RS512 signatures.

    The signer holds no per-request state; one instance can be shared
    across threads and tasks. The clock is injectable so tests can pin
    the ``iat`` header field.

    Attributes:
        clock: Callable returning the current Unix time
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock

    def build_header(self, url: str, client_id: str) -> JWSHeader:
        return JWSHeader.for_request(url, client_id, iat=int(self.clock()))

    def sign(
        self,
        payload: Payload,
        url: str,
        client_id: str,
        private_key: str,
    ) -> str:
        """
        Sign a request and return the detached JWS.

        Args:
            payload: EmptyPayload or JsonPayload for the request body
            url: Full request URL, embedded in the header
            client_id: Client ID, embedded as ``kid`` = "LT:<client_id>"
            private_key: PEM-encoded RSA private key

        Returns:
            ``<header>..<signature>`` with both segments base64url-encoded

        Raises:
            InvalidKeyError: If the private key cannot be parsed as RSA
            SigningError: If the signing operation fails
        """
        header = self.build_header(url, client_id)
        header_encoded = base64url_encode(header.model_dump_json().encode())

        key = _load_private_key(private_key)
        signing_input = f"{header_encoded}.{payload.serialize()}".encode()

        try:
            signature = key.sign(signing_input, padding.PKCS1v15(), hashes.SHA512())
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise SigningError("Failed to sign JWS") from exc

        return f"{header_encoded}..{base64url_encode(signature)}"

    @staticmethod
    def verify(token: str, payload: Payload, public_key: str) -> bool:
        """
        Verify a detached JWS against its payload.

        Args:
            token: Detached JWS as produced by :meth:`sign`
            payload: The payload that travelled alongside the token
            public_key: PEM-encoded RSA public key

        Returns:
            True if the signature is valid, False otherwise
        """
        header_encoded, sep, signature_encoded = token.partition("..")
        if not sep or not header_encoded or not signature_encoded:
            return False

        try:
            key = serialization.load_pem_public_key(public_key.strip().encode())
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise InvalidKeyError("Invalid public key provided") from exc
        if not isinstance(key, rsa.RSAPublicKey):
            raise InvalidKeyError("Invalid public key provided: not an RSA key")

        try:
            signature = base64url_decode(signature_encoded)
        except (binascii.Error, UnicodeEncodeError):
            return False

        signing_input = f"{header_encoded}.{payload.serialize()}".encode()
        try:
            key.verify(signature, signing_input, padding.PKCS1v15(), hashes.SHA512())
        except InvalidSignature:
            return False
        return True


_default_signer = JwsSigner()


def sign_detached(payload: Payload, url: str, client_id: str, private_key: str) -> str:
    """Sign with the default wall-clock signer."""
    return _default_signer.sign(payload, url, client_id, private_key)


def verify_detached(token: str, payload: Payload, public_key: str) -> bool:
    return JwsSigner.verify(token, payload, public_key)
