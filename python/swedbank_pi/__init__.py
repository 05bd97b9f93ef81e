"""
Location: python/swedbank_pi/__init__.py

Summary:
    Main package initialization for swedbank-pi-sdk. Exports all public
    classes and functions for convenient importing.

Usage:
    from swedbank_pi import SwedbankClient, load_config

    # Or import specific modules
    from swedbank_pi.signers import JwsSigner, JsonPayload
    from swedbank_pi.transport import parse_providers

Version: 0.1.0 (Payment Initiation API V3)
"""

from .client import AsyncSwedbankClient, SwedbankClient
from .config import (
    CredentialConfig,
    EndpointConfig,
    LoggingConfig,
    PaymentDefaults,
    SwedbankConfig,
    load_config,
)
from .errors import (
    ConfigError,
    GatewayError,
    InvalidKeyError,
    MalformedResponseError,
    SigningError,
    SwedbankError,
    TransportError,
)
from .signers import EmptyPayload, JsonPayload, JwsSigner, sign_detached, verify_detached
from .types import Credentials, Environment, JWSHeader, PaymentInitiationResult, Provider

__version__ = "0.1.0"

__all__ = [
    # Clients
    "SwedbankClient",
    "AsyncSwedbankClient",
    # Configuration
    "SwedbankConfig",
    "EndpointConfig",
    "CredentialConfig",
    "LoggingConfig",
    "PaymentDefaults",
    "load_config",
    # Types
    "Environment",
    "Credentials",
    "JWSHeader",
    "Provider",
    "PaymentInitiationResult",
    # Signing
    "JwsSigner",
    "EmptyPayload",
    "JsonPayload",
    "sign_detached",
    "verify_detached",
    # Exceptions
    "SwedbankError",
    "ConfigError",
    "InvalidKeyError",
    "SigningError",
    "TransportError",
    "GatewayError",
    "MalformedResponseError",
]
