"""
Location: python/swedbank_pi/client.py

Summary:
    Swedbank Payment Initiation API clients. SwedbankClient performs blocking
    calls over httpx.Client; AsyncSwedbankClient exposes the same operations
    as coroutines over httpx.AsyncClient.

Usage:
    Build a client once from a SwedbankConfig and share it. The environment
    is fixed at construction. Credentials are passed to every call and never
    stored, so one instance can serve many merchants and threads.

    Each operation follows the same shape:
    1. Build the request URL
    2. Sign the payload once with a detached RS512 JWS
    3. Send the request (no automatic retries)
    4. Map the response to a result, or log and raise

Example:
    from swedbank_pi import SwedbankClient, load_config

    with SwedbankClient(load_config()) as client:
        redirect = client.create_payment_initiation(
            payment_data, client_id="my-client", private_key=pem_string
        )
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from .config import SwedbankConfig
from .errors import GatewayError, TransportError
from .log import get_channel_logger, log_error, log_info
from .signers import EmptyPayload, JsonPayload, JwsSigner, Payload
from .transport import (
    build_headers,
    extract_sca_redirect,
    generate_request_id,
    parse_json,
    parse_providers,
    providers_url,
    transaction_url,
)
from .types import Environment, PaymentInitiationResult, Provider


@dataclass
class _PreparedRequest:
    """A signed request ready to send, plus what to log if it fails."""
    method: str
    url: str
    headers: dict[str, str]
    content: Optional[str]
    log_message: str
    error_prefix: str
    context: dict[str, Any] = field(default_factory=dict)


def _creditor_bic(payment_data: dict) -> str:
    creditor = payment_data.get("creditor")
    bic = creditor.get("bic") if isinstance(creditor, dict) else None
    if not bic:
        raise ValueError("payment_data must contain creditor.bic")
    return str(bic)


class _BaseSwedbankClient:
    """
    Request preparation and response handling shared by both clients.

    Attributes:
        config: Validated SDK configuration
        environment: Active environment, fixed for the client's lifetime
        base_url: Base URL of the active environment, no trailing slash
        signer: JWS signer used for every request
    """

    def __init__(
        self,
        config: SwedbankConfig,
        *,
        environment: Optional[Environment] = None,
        signer: Optional[JwsSigner] = None,
    ):
        self.config = config
        self.environment = environment or config.environment
        self.base_url = config.base_url_for(self.environment)
        self.signer = signer or JwsSigner()
        self.timeout = config.timeout
        if config.logging.enabled:
            get_channel_logger(config.logging)

    @property
    def is_sandbox(self) -> bool:
        return self.environment is Environment.SANDBOX

    def _prepare(
        self,
        method: str,
        url: str,
        payload: Payload,
        client_id: str,
        private_key: str,
        *,
        with_request_id: bool,
        log_message: str,
        error_prefix: str,
        context: dict[str, Any],
    ) -> _PreparedRequest:
        jws = self.signer.sign(payload, url, client_id, private_key)
        with_body = isinstance(payload, JsonPayload)
        headers = build_headers(
            jws,
            with_body=with_body,
            request_id=generate_request_id() if with_request_id else None,
        )
        return _PreparedRequest(
            method=method,
            url=url,
            headers=headers,
            content=payload.serialize() if with_body else None,
            log_message=log_message,
            error_prefix=error_prefix,
            context=context,
        )

    def _prepare_initiation(
        self, payment_data: dict, client_id: str, private_key: str
    ) -> _PreparedRequest:
        url = transaction_url(self.base_url, _creditor_bic(payment_data))
        return self._prepare(
            "POST",
            url,
            JsonPayload(payment_data),
            client_id,
            private_key,
            with_request_id=True,
            log_message="Swedbank payment initiation failed",
            error_prefix="Failed to create payment initiation",
            context={"payment_data": payment_data, "url": url},
        )

    def _prepare_status(
        self, status_url: str, client_id: str, private_key: str
    ) -> _PreparedRequest:
        return self._prepare(
            "GET",
            status_url,
            EmptyPayload(),
            client_id,
            private_key,
            with_request_id=True,
            log_message="Swedbank payment status request failed",
            error_prefix="Failed to get payment status",
            context={"url": status_url},
        )

    def _prepare_providers(
        self, country: Optional[str], client_id: str, private_key: str
    ) -> _PreparedRequest:
        url = providers_url(self.base_url)
        country = country or self.config.payment.default_country
        # country is caller-side metadata: logged, never sent
        return self._prepare(
            "GET",
            url,
            EmptyPayload(),
            client_id,
            private_key,
            with_request_id=False,
            log_message="Swedbank providers request failed",
            error_prefix="Failed to get payment providers",
            context={"country": country, "url": url},
        )

    def _prepare_form(
        self, bic: str, payment_data: dict, client_id: str, private_key: str
    ) -> _PreparedRequest:
        url = transaction_url(self.base_url, bic)
        return self._prepare(
            "POST",
            url,
            JsonPayload(payment_data),
            client_id,
            private_key,
            with_request_id=True,
            log_message="Swedbank payment initiation form failed",
            error_prefix="Failed to get payment initiation form",
            context={"bic": bic},
        )

    def _transport_failed(self, prepared: _PreparedRequest, exc: Exception) -> TransportError:
        log_error(
            self.config.logging,
            prepared.log_message,
            {**prepared.context, "error": str(exc)},
        )
        return TransportError(f"{prepared.error_prefix}: {exc}", url=prepared.url)

    def _handle_response(self, prepared: _PreparedRequest, response: httpx.Response) -> Any:
        """
        Turn a received response into parsed JSON.

        Raises:
            GatewayError: On any non-2xx status, after logging once
            MalformedResponseError: If a 2xx body is not JSON
        """
        if not response.is_success:
            body = response.text
            log_error(
                self.config.logging,
                prepared.log_message,
                {"response": body, "status": response.status_code, **prepared.context},
            )
            raise GatewayError(
                f"{prepared.error_prefix}: {body}",
                status_code=response.status_code,
                body=body,
                url=prepared.url,
            )

        data = parse_json(response, prepared.url)
        log_info(
            self.config.logging,
            "Swedbank request succeeded",
            {"method": prepared.method, "url": prepared.url, "status": response.status_code},
        )
        return data


class SwedbankClient(_BaseSwedbankClient):
    """
    Blocking Swedbank Payment Initiation API client.

    Attributes:
        config: Validated SDK configuration
        environment: Active environment
        base_url: Base URL of the active environment
        timeout: HTTP timeout in seconds (from config)
    """

    def __init__(
        self,
        config: SwedbankConfig,
        *,
        environment: Optional[Environment] = None,
        signer: Optional[JwsSigner] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Validated SDK configuration
            environment: Override for config.environment
            signer: Optional JwsSigner (e.g. with a pinned clock)
            http_client: Optional httpx.Client; the caller keeps ownership
        """
        super().__init__(config, environment=environment, signer=signer)
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=self.timeout)

    @classmethod
    def from_config(cls, config: SwedbankConfig, **kwargs: Any) -> "SwedbankClient":
        return cls(config, **kwargs)

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "SwedbankClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _send(self, prepared: _PreparedRequest) -> Any:
        try:
            response = self._http.request(
                prepared.method,
                prepared.url,
                headers=prepared.headers,
                content=prepared.content,
            )
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            raise self._transport_failed(prepared, exc) from exc
        return self._handle_response(prepared, response)

    def initiate_payment(
        self, payment_data: dict, client_id: str, private_key: str
    ) -> PaymentInitiationResult:
        """
        Create a payment initiation and keep the full response.

        The raw response carries the links (e.g. the status link) that
        later calls need.

        Args:
            payment_data: Payment data per the Swedbank V3 API; must contain creditor.bic
            client_id: Client ID
            private_key: PEM private key for signing

        Returns:
            PaymentInitiationResult with the SCA redirect URL and raw body

        Raises:
            ValueError: If payment_data has no creditor.bic
            InvalidKeyError, SigningError: If signing fails
            TransportError: If no response was received
            GatewayError: If Swedbank returned a non-2xx status
            MalformedResponseError: If the body is not JSON
        """
        prepared = self._prepare_initiation(payment_data, client_id, private_key)
        data = self._send(prepared)
        return PaymentInitiationResult(
            authorization_url=extract_sca_redirect(data),
            raw=data if isinstance(data, dict) else {},
        )

    def create_payment_initiation(
        self, payment_data: dict, client_id: str, private_key: str
    ) -> str:
        """
        Create a payment initiation and return the SCA redirect URL.

        Returns an empty string when the response has no
        ``_links.scaRedirect.href``.
        """
        return self.initiate_payment(payment_data, client_id, private_key).authorization_url

    def get_payment_status(self, status_url: str, client_id: str, private_key: str) -> Any:
        """
        Fetch the status of a payment.

        Args:
            status_url: Status URL previously returned by Swedbank, used verbatim
            client_id: Client ID
            private_key: PEM private key for signing

        Returns:
            Parsed status response, unchanged
        """
        return self._send(self._prepare_status(status_url, client_id, private_key))

    def get_payment_providers(
        self, country: Optional[str], client_id: str, private_key: str
    ) -> list[Provider]:
        """
        List the payment providers available under the agreement.

        Args:
            country: Country code (e.g. 'LT', 'LV', 'EE'); only logged. None
                     falls back to config.payment.default_country
            client_id: Client ID
            private_key: PEM private key for signing

        Returns:
            Providers in response order
        """
        data = self._send(self._prepare_providers(country, client_id, private_key))
        return parse_providers(data)

    def get_payment_initiation_form(
        self, bic: str, payment_data: dict, client_id: str, private_key: str
    ) -> Any:
        """Fetch the payment initiation form for the provider ``bic``."""
        return self._send(self._prepare_form(bic, payment_data, client_id, private_key))


class AsyncSwedbankClient(_BaseSwedbankClient):
    """
    Async variant of SwedbankClient.

    Cancelling an awaiting operation cancels the in-flight HTTP call; the
    request has already been signed by then and is never resent.
    """

    def __init__(
        self,
        config: SwedbankConfig,
        *,
        environment: Optional[Environment] = None,
        signer: Optional[JwsSigner] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(config, environment=environment, signer=signer)
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self.timeout)

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "AsyncSwedbankClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def _send(self, prepared: _PreparedRequest) -> Any:
        try:
            response = await self._http.request(
                prepared.method,
                prepared.url,
                headers=prepared.headers,
                content=prepared.content,
            )
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            raise self._transport_failed(prepared, exc) from exc
        return self._handle_response(prepared, response)

    async def initiate_payment(
        self, payment_data: dict, client_id: str, private_key: str
    ) -> PaymentInitiationResult:
        prepared = self._prepare_initiation(payment_data, client_id, private_key)
        data = await self._send(prepared)
        return PaymentInitiationResult(
            authorization_url=extract_sca_redirect(data),
            raw=data if isinstance(data, dict) else {},
        )

    async def create_payment_initiation(
        self, payment_data: dict, client_id: str, private_key: str
    ) -> str:
        result = await self.initiate_payment(payment_data, client_id, private_key)
        return result.authorization_url

    async def get_payment_status(self, status_url: str, client_id: str, private_key: str) -> Any:
        return await self._send(self._prepare_status(status_url, client_id, private_key))

    async def get_payment_providers(
        self, country: Optional[str], client_id: str, private_key: str
    ) -> list[Provider]:
        data = await self._send(self._prepare_providers(country, client_id, private_key))
        return parse_providers(data)

    async def get_payment_initiation_form(
        self, bic: str, payment_data: dict, client_id: str, private_key: str
    ) -> Any:
        return await self._send(self._prepare_form(bic, payment_data, client_id, private_key))


__all__ = ["SwedbankClient", "AsyncSwedbankClient"]
