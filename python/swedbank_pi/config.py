"""
Location: python/swedbank_pi/config.py

Summary:
    Typed configuration for swedbank-pi-sdk. The configuration is populated
    once at startup, validated eagerly, and handed to the client. A missing
    base URL fails here instead of surfacing later as a broken request URL.

Usage:
    Either build SwedbankConfig directly or read SWEDBANK_* variables from
    the process environment (or any mapping) with load_config().

Example:
    from swedbank_pi.config import load_config

    config = load_config({"SWEDBANK_ENVIRONMENT": "sandbox"})
    config.base_url_for(config.environment)
    # 'https://api-sandbox.swedbank.com/pi'
"""

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .types import Credentials, Environment

DEFAULT_BASE_URLS = {
    Environment.SANDBOX: "https://api-sandbox.swedbank.com/pi",
    Environment.PRODUCTION: "https://pi.swedbank.com/public/api",
}

LOG_LEVELS = ("debug", "info", "notice", "warning", "error", "critical", "alert", "emergency")


class EndpointConfig(BaseModel):
    """Base URL of one environment's Payment Initiation API."""
    base_url: str = Field(alias="baseUrl")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("base_url")
    @classmethod
    def _require_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value


class CredentialConfig(BaseModel):
    """
    Credential block for one environment.

    Only used by callers that look credentials up from configuration; the
    client operations take credentials as explicit arguments.
    """
    enabled: bool = True
    client_id: Optional[str] = Field(None, alias="clientId")
    private_key: Optional[str] = Field(None, alias="privateKey", repr=False)

    model_config = {"populate_by_name": True, "frozen": True}


class LoggingConfig(BaseModel):
    """
    Attributes:
        enabled: Whether the SDK logs anything at all
        level: Minimum level for the channel logger
        channel: Name of the logger the SDK writes to
    """
    enabled: bool = True
    level: str = "info"
    channel: str = "swedbank"

    model_config = {"frozen": True}

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'")
        return value


class PaymentDefaults(BaseModel):
    """
    Merchant payment defaults.

    ``default_country`` is the country logged by provider lookups when the
    caller passes none. The currency fields are for callers assembling
    payment data; the SDK does not rewrite payment bodies.
    """
    default_currency: str = "EUR"
    supported_currencies: list[str] = Field(
        default_factory=lambda: ["EUR", "SEK", "DKK", "NOK"]
    )
    default_country: str = "LT"
    supported_countries: list[str] = Field(
        default_factory=lambda: ["LT", "LV", "EE", "SE", "DK", "NO"]
    )

    model_config = {"frozen": True}


def _default_endpoints() -> dict[Environment, EndpointConfig]:
    return {env: EndpointConfig(base_url=url) for env, url in DEFAULT_BASE_URLS.items()}


class SwedbankConfig(BaseModel):
    """
    Complete SDK configuration.

    Attributes:
        environment: Active environment, fixed for a client's lifetime
        endpoints: Base URL per environment; every environment must have one
        sandbox: Sandbox credential block
        production: Production credential block
        logging: Logging settings
        payment: Default currency and country settings
        timeout: HTTP timeout in seconds
    """
    environment: Environment = Environment.PRODUCTION
    endpoints: dict[Environment, EndpointConfig] = Field(default_factory=_default_endpoints)
    sandbox: CredentialConfig = Field(default_factory=lambda: CredentialConfig(enabled=False))
    production: CredentialConfig = Field(default_factory=CredentialConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    payment: PaymentDefaults = Field(default_factory=PaymentDefaults)
    timeout: float = Field(30.0, gt=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _require_all_endpoints(self) -> "SwedbankConfig":
        missing = [env.value for env in Environment if env not in self.endpoints]
        if missing:
            raise ValueError(f"Missing base URL for: {', '.join(missing)}")
        return self

    @property
    def is_sandbox(self) -> bool:
        return self.environment is Environment.SANDBOX

    def base_url_for(self, environment: Environment) -> str:
        """Base URL for ``environment`` with trailing slashes removed."""
        return self.endpoints[environment].base_url.rstrip("/")

    def credentials_for(self, environment: Environment) -> Credentials:
        """
        Look up the configured credentials for an environment.

        Args:
            environment: Environment whose credential block to read

        Returns:
            Credentials built from the block

        Raises:
            ConfigError: If the block is disabled or incomplete
        """
        block = self.sandbox if environment is Environment.SANDBOX else self.production
        if not block.enabled:
            raise ConfigError(f"{environment.value} credentials are disabled")
        if not block.client_id or not block.private_key:
            raise ConfigError(
                f"{environment.value} credentials require both client_id and private_key"
            )
        return Credentials(client_id=block.client_id, private_key=block.private_key)


def _set(target: dict, path: tuple[str, ...], value: Optional[str]) -> None:
    if value is None or value.strip() == "":
        return
    node = target
    for key in path[:-1]:
        node = node.setdefault(key, {})
    node[path[-1]] = value


_ENV_KEYS: dict[str, tuple[str, ...]] = {
    "SWEDBANK_ENVIRONMENT": ("environment",),
    "SWEDBANK_SANDBOX_ENABLED": ("sandbox", "enabled"),
    "SWEDBANK_SANDBOX_CLIENT_ID": ("sandbox", "client_id"),
    "SWEDBANK_SANDBOX_PRIVATE_KEY": ("sandbox", "private_key"),
    "SWEDBANK_PRODUCTION_ENABLED": ("production", "enabled"),
    "SWEDBANK_PRODUCTION_CLIENT_ID": ("production", "client_id"),
    "SWEDBANK_PRODUCTION_PRIVATE_KEY": ("production", "private_key"),
    "SWEDBANK_LOGGING_ENABLED": ("logging", "enabled"),
    "SWEDBANK_LOG_LEVEL": ("logging", "level"),
    "SWEDBANK_LOG_CHANNEL": ("logging", "channel"),
    "SWEDBANK_TIMEOUT": ("timeout",),
    "SWEDBANK_DEFAULT_CURRENCY": ("payment", "default_currency"),
    "SWEDBANK_DEFAULT_COUNTRY": ("payment", "default_country"),
}

_BASE_URL_KEYS = {
    Environment.SANDBOX: "SWEDBANK_SANDBOX_BASE_URL",
    Environment.PRODUCTION: "SWEDBANK_PRODUCTION_BASE_URL",
}


def load_config(values: Optional[Mapping[str, str]] = None) -> SwedbankConfig:
    """
    Build a SwedbankConfig from SWEDBANK_* keys.

    Unset or blank keys fall back to the defaults. The sandbox credential
    block is disabled unless SWEDBANK_SANDBOX_ENABLED says otherwise.

    Args:
        values: Source mapping, defaults to ``os.environ``

    Returns:
        Validated configuration

    Raises:
        ConfigError: If any value is invalid
    """
    source = os.environ if values is None else values
    data: dict[str, Any] = {"sandbox": {"enabled": False}}

    for env_key, path in _ENV_KEYS.items():
        _set(data, path, source.get(env_key))

    endpoints = {}
    for env, env_key in _BASE_URL_KEYS.items():
        # An explicitly blank base URL is an error, not a fallback to the default
        raw = source.get(env_key)
        endpoints[env] = {"base_url": DEFAULT_BASE_URLS[env] if raw is None else raw}
    data["endpoints"] = endpoints

    try:
        return SwedbankConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid Swedbank configuration: {exc}") from exc
