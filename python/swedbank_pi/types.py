"""
Location: python/swedbank_pi/types.py

Summary:
    Pydantic models for swedbank-pi-sdk. Defines the data structures used
    throughout the SDK: the active Environment, per-call Credentials, the
    JWSHeader carried by every signed request, and the Provider and
    PaymentInitiationResult shapes returned by the client.

Usage:
    These models are imported by config.py, signers/jws.py, transport.py
    and client.py. Remote responses that the SDK passes through unchanged
    (payment status, initiation forms) are plain dicts, not models.

Example:
    from swedbank_pi.types import Credentials, Environment

    creds = Credentials(client_id="my-client", private_key=pem_string)
    env = Environment("sandbox")
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Environment(str, Enum):
    """
    Target Swedbank environment.

    Determines the base URL and which credential block in the
    configuration applies. Fixed for the lifetime of a client.
    """
    SANDBOX = "sandbox"
    PRODUCTION = "production"


class Credentials(BaseModel):
    """
    Client identity used to sign a single request.

    Attributes:
        client_id: Client ID issued by Swedbank
        private_key: PEM-encoded RSA private key
    """
    client_id: str = Field(alias="clientId")
    private_key: str = Field(alias="privateKey", repr=False)

    model_config = {"populate_by_name": True, "frozen": True}


class JWSHeader(BaseModel):
    """
    Protected header of the detached JWS sent in ``x-jws-signature``.

    Only ``iat`` and ``url`` vary between requests; the remaining fields
    are fixed by the Swedbank wire contract. Field order is the order
    in which the header is serialized and signed.

    Attributes:
        b64: Always False (unencoded payload, RFC 7797)
        crit: Always ["b64"]
        iat: Unix timestamp at signing time
        alg: Always "RS512"
        url: Full request URL
        kid: "LT:" followed by the client ID
    """
    b64: Literal[False] = False
    crit: list[str] = Field(default_factory=lambda: ["b64"])
    iat: int
    alg: Literal["RS512"] = "RS512"
    url: str
    kid: str

    model_config = {"frozen": True}

    @classmethod
    def for_request(cls, url: str, client_id: str, iat: int) -> "JWSHeader":
        return cls(iat=iat, url=url, kid=f"LT:{client_id}")


class Provider(BaseModel):
    """
    A payment provider (bank) available under the merchant agreement.

    Attributes:
        id: Key of the provider in the agreement response
        name: Localized short name, "" when none is available
        country: Country code of the provider
        bic: Bank Identifier Code
        logo: URL of the provider logo
        url: Provider payment URL
    """
    id: str
    name: str = ""
    country: str = ""
    bic: str = ""
    logo: str = ""
    url: str = ""


class PaymentInitiationResult(BaseModel):
    """
    Outcome of a payment initiation.

    ``authorization_url`` is the SCA redirect the payer must follow. It is
    an empty string when the bank response carried no redirect link.
    """
    authorization_url: str = Field("", alias="authorizationUrl")
    raw: dict = Field(default_factory=dict)

    model_config = {"populate_by_name": True}
