"""
Location: python/swedbank_pi/transport.py

Summary:
    Swedbank wire format layer. Holds the endpoint paths and header names of
    the Payment Initiation API, composes request headers, and interprets
    response bodies into SDK results.

Usage:
    Used by client.py. Everything here is free of I/O so the sync and
    async clients share it.

Example:
    from swedbank_pi.transport import build_headers, parse_providers

    headers = build_headers(jws, with_body=True, request_id=generate_request_id())
    providers = parse_providers(response.json())
"""

import json
import secrets
import time
from typing import Any, Optional

import httpx

from .errors import MalformedResponseError
from .types import Provider


SWEDBANK_HEADERS = {
    "SIGNATURE": "x-jws-signature",
    "REQUEST_ID": "X-Request-ID",
    "CONTENT_TYPE": "Content-Type",
    "ACCEPT": "Accept",
}

JSON_MEDIA_TYPE = "application/json"

TRANSACTIONS_PATH = "/v3/transactions/providers/"
PROVIDERS_PATH = "/v3/agreement/providers"

# Preferred language for provider short names, then the fallback
PROVIDER_NAME_LANGUAGES = ("lt", "en")


def transaction_url(base_url: str, bic: str) -> str:
    return f"{base_url.rstrip('/')}{TRANSACTIONS_PATH}{bic}"


def providers_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}{PROVIDERS_PATH}"


def generate_request_id() -> str:
    """
    Generate a correlation ID for the X-Request-ID header.

    Microsecond timestamp plus a random suffix; practically unique, not
    guaranteed unique across processes.
    """
    return f"req_{time.time_ns() // 1000:x}.{secrets.token_hex(4)}"


def build_headers(
    jws: str,
    *,
    with_body: bool = False,
    request_id: Optional[str] = None,
) -> dict[str, str]:
    """
    Compose the headers for a signed request.

    Args:
        jws: Detached JWS for the x-jws-signature header
        with_body: Add Content-Type for requests carrying a JSON body
        request_id: Value for X-Request-ID; the header is omitted when None

    Returns:
        Header dict
    """
    headers = {SWEDBANK_HEADERS["SIGNATURE"]: jws}
    if with_body:
        headers[SWEDBANK_HEADERS["CONTENT_TYPE"]] = JSON_MEDIA_TYPE
    headers[SWEDBANK_HEADERS["ACCEPT"]] = JSON_MEDIA_TYPE
    if request_id is not None:
        headers[SWEDBANK_HEADERS["REQUEST_ID"]] = request_id
    return headers


def parse_json(response: httpx.Response, url: str) -> Any:
    """
    Parse a successful response body as JSON.

    Raises:
        MalformedResponseError: If the body is not valid JSON
    """
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedResponseError(
            f"Swedbank returned a non-JSON body from {url}",
            body=response.text,
        ) from exc


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def extract_sca_redirect(data: Any) -> str:
    """
    Pull ``_links.scaRedirect.href`` from a payment initiation response.

    Returns an empty string when the link is absent.
    """
    return _text(_dig(data, "_links", "scaRedirect", "href"))


def _provider_name(detail: Any) -> str:
    for language in PROVIDER_NAME_LANGUAGES:
        name = _dig(detail, "names", "shortNames", language)
        if name is not None:
            return _text(name)
    return ""


def parse_provider(key: str, detail: Any) -> Provider:
    return Provider(
        id=key,
        name=_provider_name(detail),
        country=_text(_dig(detail, "country")),
        bic=_text(_dig(detail, "bic")),
        logo=_text(_dig(detail, "urls", "logo")),
        url=_text(_dig(detail, "urls", "payment")),
    )


def parse_providers(data: Any) -> list[Provider]:
    """
    Flatten the agreement providers map into a list.

    Order follows the key order of the response. A JSON array is accepted
    as well; its entries are keyed by position.

    Args:
        data: Parsed JSON body, a mapping of provider key to details

    Returns:
        List of Provider records

    Raises:
        MalformedResponseError: If the body is neither an object nor an array
    """
    if data is None:
        return []
    if isinstance(data, list):
        return [parse_provider(str(index), detail) for index, detail in enumerate(data)]
    if not isinstance(data, dict):
        raise MalformedResponseError(
            "Expected a provider map in the agreement providers response",
            body=json.dumps(data),
        )
    return [parse_provider(str(key), detail) for key, detail in data.items()]
