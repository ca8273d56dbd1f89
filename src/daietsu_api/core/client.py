"""
HTTP client helpers for the Daietsu API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from .config import ClientConfig, ConfigError
from .payloads import (
    PreparedCall,
    Scopes,
    build_authorization_url,
    prepare_create_payment,
    prepare_exchange_authorization_code,
    prepare_get_authorized_establishment,
    prepare_get_payment,
)
from .result import REQUEST_ISSUE, Result
from .webhooks import verify_webhook

__all__ = [
    "DaietsuClient",
    "app_get",
    "app_post",
]


def _headers(config: ClientConfig, token: Optional[str]) -> Dict[str, str]:
    headers = {"X-API-Authentication": config.authentication_header}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _read_response(payload: Any) -> Result:
    if not isinstance(payload, Mapping):
        return Result.failure([REQUEST_ISSUE])

    errors = payload.get("errors")
    error = payload.get("error")
    if errors:
        return Result.failure(errors if isinstance(errors, list) else [errors])
    if error:
        return Result.failure([error])
    return Result.success(payload.get("result"))


def _send(
    session: requests.Session,
    url: str,
    headers: Dict[str, str],
    timeout: float,
    body: Optional[Dict[str, Any]] = None,
) -> Result:
    kwargs: Dict[str, Any] = {"headers": headers, "timeout": timeout}
    if body:
        kwargs["json"] = body
    try:
        response = session.post(url, **kwargs)
    except requests.RequestException as exc:
        logging.warning("Request to %s failed: %s", url, exc)
        return Result.failure([REQUEST_ISSUE])

    try:
        payload = response.json()
    except ValueError:
        logging.warning(
            "Daietsu API at %s responded with %s and a non-JSON body",
            url,
            response.status_code,
        )
        return Result.failure([REQUEST_ISSUE])

    result = _read_response(payload)
    if not result.ok:
        logging.info("Daietsu API at %s reported errors: %s", url, list(result.errors))
    return result


def app_post(
    session: requests.Session,
    config: ClientConfig,
    endpoint: str,
    body: Optional[Dict[str, Any]] = None,
    token: Optional[str] = None,
) -> Result:
    """
    Send an authenticated JSON request to ``endpoint``.

    The bearer header is only attached when ``token`` is given.
    """
    url = config.api_host + endpoint
    headers = _headers(config, token)
    headers["Content-Type"] = "application/json"
    logging.info("Submitting request to %s", url)
    return _send(session, url, headers, config.timeout_seconds, body)


def app_get(
    session: requests.Session,
    config: ClientConfig,
    endpoint: str,
    token: Optional[str] = None,
) -> Result:
    """
    Fetch ``endpoint`` with the same authentication as :func:`app_post`.

    The Daietsu API reads resources through POST requests without a body, so
    this is not an idempotent GET.
    """
    url = config.api_host + endpoint
    logging.info("Fetching %s", url)
    return _send(session, url, _headers(config, token), config.timeout_seconds)


class DaietsuClient:
    """
    Thin facade over the Daietsu API endpoints.

    Every operation validates its arguments first and returns a failed
    :class:`Result` listing all problems without touching the network.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _post(self, prepared: Result) -> Result:
        if not prepared.ok:
            return prepared
        call: PreparedCall = prepared.value
        return app_post(self.session, self.config, call.endpoint, call.body, call.token)

    def _get(self, prepared: Result) -> Result:
        if not prepared.ok:
            return prepared
        call: PreparedCall = prepared.value
        return app_get(self.session, self.config, call.endpoint, call.token)

    def create_authorization_url(
        self,
        redirect_uri: Optional[str],
        scopes: Scopes = None,
        mode: str = "establishment",
        service_type: Optional[str] = None,
    ) -> Result:
        return build_authorization_url(
            self.config, redirect_uri, scopes, mode=mode, service_type=service_type
        )

    def exchange_authorization_code(
        self,
        authorization_code: Optional[str],
        scopes: Scopes = None,
    ) -> Result:
        """Exchange an authorization code for an access token."""
        return self._post(prepare_exchange_authorization_code(authorization_code, scopes))

    def get_authorized_establishment(self, token: Optional[str]) -> Result:
        """Return the establishment the access token was issued for."""
        return self._get(prepare_get_authorized_establishment(token))

    def create_payment(
        self,
        token: Optional[str],
        amount: Any,
        currency: Optional[str],
        description: Optional[str],
        meta: Any = None,
        return_url: Optional[str] = None,
        webhook: Optional[str] = None,
    ) -> Result:
        return self._post(
            prepare_create_payment(
                token,
                amount,
                currency,
                description,
                meta=meta,
                return_url=return_url,
                webhook=webhook,
            )
        )

    def get_payment(self, token: Optional[str], payment_id: Optional[str]) -> Result:
        return self._get(prepare_get_payment(token, payment_id))

    def verify_webhook(
        self,
        header: Any,
        content: Any,
        secret: Optional[str] = None,
    ) -> bool:
        """
        Check a webhook signature, defaulting to the configured webhook secret.
        """
        webhook_secret = secret if secret is not None else self.config.webhook_secret
        if not webhook_secret:
            raise ConfigError("A webhook secret is required to verify webhooks")
        return verify_webhook(header, content, webhook_secret)
