"""
Tests for swedbank_pi.types module.

Tests Pydantic models for Environment, Credentials, JWSHeader, Provider
and PaymentInitiationResult. Verifies alias handling, fixed header fields
and immutability.
"""

import pytest
from pydantic import ValidationError

from swedbank_pi.types import (
    Credentials,
    Environment,
    JWSHeader,
    PaymentInitiationResult,
    Provider,
)


class TestEnvironment:
    """Tests for Environment enum."""

    def test_values(self):
        assert Environment("sandbox") is Environment.SANDBOX
        assert Environment("production") is Environment.PRODUCTION

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            Environment("staging")


class TestCredentials:
    """Tests for Credentials model."""

    def test_camel_case_alias(self):
        """Test that camelCase keys populate the model."""
        creds = Credentials.model_validate({"clientId": "abc", "privateKey": "pem"})
        assert creds.client_id == "abc"
        assert creds.private_key == "pem"

    def test_private_key_not_in_repr(self):
        creds = Credentials(client_id="abc", private_key="secret-pem")
        assert "secret-pem" not in repr(creds)

    def test_frozen(self):
        creds = Credentials(client_id="abc", private_key="pem")
        with pytest.raises(ValidationError):
            creds.client_id = "other"


class TestJWSHeader:
    """Tests for JWSHeader model."""

    def test_for_request(self):
        """Test fixed fields and kid prefix."""
        header = JWSHeader.for_request("https://x/y", "client-9", iat=42)
        assert header.b64 is False
        assert header.crit == ["b64"]
        assert header.alg == "RS512"
        assert header.iat == 42
        assert header.url == "https://x/y"
        assert header.kid == "LT:client-9"

    def test_compact_json(self):
        """Test serialization is compact and in wire order."""
        header = JWSHeader.for_request("https://x/y", "c", iat=1)
        assert header.model_dump_json() == (
            '{"b64":false,"crit":["b64"],"iat":1,"alg":"RS512","url":"https://x/y","kid":"LT:c"}'
        )

    def test_alg_is_fixed(self):
        with pytest.raises(ValidationError):
            JWSHeader(iat=1, url="u", kid="LT:c", alg="RS256")

    def test_b64_is_fixed(self):
        with pytest.raises(ValidationError):
            JWSHeader(iat=1, url="u", kid="LT:c", b64=True)


class TestProvider:
    """Tests for Provider model."""

    def test_defaults(self):
        provider = Provider(id="ABC")
        assert provider.name == ""
        assert provider.country == ""
        assert provider.bic == ""
        assert provider.logo == ""
        assert provider.url == ""


class TestPaymentInitiationResult:
    """Tests for PaymentInitiationResult model."""

    def test_alias(self):
        result = PaymentInitiationResult.model_validate({"authorizationUrl": "https://bank/sca"})
        assert result.authorization_url == "https://bank/sca"
        assert result.raw == {}

    def test_default_empty(self):
        assert PaymentInitiationResult().authorization_url == ""
