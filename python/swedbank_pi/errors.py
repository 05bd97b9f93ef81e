"""
Location: python/swedbank_pi/errors.py

Summary:
    Exception hierarchy for swedbank-pi-sdk. Every public operation either
    returns its result or raises one of these.
"""

from typing import Optional


class SwedbankError(Exception):
    """Base class for all SDK errors."""


class ConfigError(SwedbankError):
    """Raised when the supplied configuration is invalid or incomplete."""


class InvalidKeyError(SwedbankError):
    """Raised when the private key cannot be loaded as an RSA private key."""


class SigningError(SwedbankError):
    """Raised when the RS512 signing operation itself fails."""


class TransportError(SwedbankError):
    """
    Raised when no HTTP response was obtained.

    Covers connection failures and timeouts. The underlying httpx
    exception is chained as ``__cause__``.

    Attributes:
        url: The URL that was being requested
    """

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class GatewayError(SwedbankError):
    """
    Raised when Swedbank answered with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the response
        body: Raw response body text
        url: The URL that was requested
    """

    def __init__(self, message: str, status_code: int, body: str, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.url = url


class MalformedResponseError(SwedbankError):
    """
    Raised when a successful response body could not be interpreted.

    Attributes:
        body: Raw response body text
    """

    def __init__(self, message: str, body: str):
        super().__init__(message)
        self.body = body
