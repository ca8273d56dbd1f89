"""
Validation and request shaping for the Daietsu API operations.

Each ``prepare_*`` helper checks its arguments, collects every failure in
check order and returns a :class:`~daietsu_api.core.result.Result`. On success
the value is a :class:`PreparedCall` describing the single request to send.
Nothing here touches the network.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import quote

from .config import AUTHORIZE_URL, ClientConfig
from .result import (
    INVALID_MODE,
    INVALID_PAYMENT_ID,
    INVALID_SCOPES_FORMAT,
    INVALID_TOKEN,
    MINIMUM_AMOUNT_ISSUE,
    MISSING_AMOUNT,
    MISSING_AUTHORIZATION_CODE,
    MISSING_CURRENCY,
    MISSING_DESCRIPTION,
    MISSING_REDIRECT_URI,
    MISSING_SERVICE_TYPE,
    MISSING_TOKEN,
    Result,
)

__all__ = [
    "AUTHORIZATION_MODES",
    "MINIMUM_AMOUNT",
    "SERVICE_TYPES",
    "PreparedCall",
    "build_authorization_url",
    "normalize_scopes",
    "parse_amount",
    "prepare_create_payment",
    "prepare_exchange_authorization_code",
    "prepare_get_authorized_establishment",
    "prepare_get_payment",
]

AUTHORIZATION_MODES = ("establishment", "area", "organisation", "service")
SERVICE_TYPES = ("PAYMENTS", "CAPTIVE_PORTAL")
MINIMUM_AMOUNT = Decimal("0.5")
_MAX_SAFE_INTEGER = 2 ** 53

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"

Scopes = Union[str, Sequence[str], None]


@dataclass(frozen=True)
class PreparedCall:
    endpoint: str
    body: Optional[Dict[str, Any]] = None
    token: Optional[str] = None


def normalize_scopes(scopes: Any) -> Optional[List[str]]:
    """
    Turn ``scopes`` into a list, or return ``None`` if it cannot be one.

    A string is split on commas, so ``"a,b"`` and ``["a", "b"]`` are the same
    request. ``None`` means no scopes.
    """
    if scopes is None:
        return []
    if isinstance(scopes, str):
        return scopes.split(",")
    if isinstance(scopes, (list, tuple)):
        if not all(isinstance(scope, str) for scope in scopes):
            return None
        return list(scopes)
    return None


def parse_amount(amount: Any) -> Optional[Decimal]:
    """
    Parse ``amount`` as a number a JSON double can carry, or return ``None``.

    Digit grouping with underscores is not accepted.
    """
    if amount is None or isinstance(amount, bool):
        return None
    text = amount.strip() if isinstance(amount, str) else str(amount)
    if "_" in text:
        return None
    try:
        value = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or not math.isfinite(float(value)):
        return None
    return value


def _json_number(value: Decimal) -> Union[int, float]:
    number = float(value)
    if number.is_integer() and abs(number) < _MAX_SAFE_INTEGER:
        return int(number)
    return number


def build_authorization_url(
    config: ClientConfig,
    redirect_uri: Optional[str],
    scopes: Scopes = None,
    mode: str = "establishment",
    service_type: Optional[str] = None,
) -> Result:
    """
    Build the management-console URL that asks a user to authorize this client.

    ``service_type`` is only used, and then required, when ``mode`` is
    ``"service"``.
    """
    errors: List[str] = []
    if mode not in AUTHORIZATION_MODES:
        errors.append(INVALID_MODE)
    elif mode == "service" and service_type not in SERVICE_TYPES:
        errors.append(MISSING_SERVICE_TYPE)
    if not redirect_uri:
        errors.append(MISSING_REDIRECT_URI)
    scope_list = normalize_scopes(scopes)
    if scope_list is None:
        errors.append(INVALID_SCOPES_FORMAT)
    if errors:
        return Result.failure(errors)

    url = (
        f"{AUTHORIZE_URL}?a={config.client_id}&m={mode}"
        f"&s={','.join(scope_list)}"
        f"&r={quote(str(redirect_uri), safe=_URI_COMPONENT_SAFE)}"
    )
    if mode == "service":
        url += f"&t={service_type}"
    return Result.success(url)


def prepare_exchange_authorization_code(
    authorization_code: Optional[str],
    scopes: Scopes = None,
) -> Result:
    errors: List[str] = []
    if not authorization_code:
        errors.append(MISSING_AUTHORIZATION_CODE)
    scope_list = normalize_scopes(scopes)
    if scope_list is None:
        errors.append(INVALID_SCOPES_FORMAT)
    if errors:
        return Result.failure(errors)

    return Result.success(
        PreparedCall(
            endpoint="/auth/exchange",
            body={"code": authorization_code, "scopes": ",".join(scope_list)},
        )
    )


def prepare_get_authorized_establishment(token: Optional[str]) -> Result:
    if not token:
        return Result.failure([MISSING_TOKEN])
    return Result.success(PreparedCall(endpoint="/establishments/@current", token=token))


def prepare_create_payment(
    token: Optional[str],
    amount: Any,
    currency: Optional[str],
    description: Optional[str],
    meta: Any = None,
    return_url: Optional[str] = None,
    webhook: Optional[str] = None,
) -> Result:
    """
    Validate a payment creation request.

    ``amount`` may be a string or a number; zero and unparseable values count
    as missing, anything under :data:`MINIMUM_AMOUNT` is rejected.
    """
    errors: List[str] = []
    if not token:
        errors.append(MISSING_TOKEN)
    parsed_amount = parse_amount(amount)
    if not parsed_amount:
        errors.append(MISSING_AMOUNT)
    elif parsed_amount < MINIMUM_AMOUNT:
        errors.append(MINIMUM_AMOUNT_ISSUE)
    if not currency:
        errors.append(MISSING_CURRENCY)
    if not description:
        errors.append(MISSING_DESCRIPTION)
    if errors:
        return Result.failure(errors)

    body: Dict[str, Any] = {
        "amount": _json_number(parsed_amount),
        "currency": currency,
        "description": description,
    }
    if meta:
        body["meta"] = meta
    if return_url:
        body["return_url"] = return_url
    if webhook:
        body["webhook"] = webhook
    return Result.success(PreparedCall(endpoint="/payments", body=body, token=token))


def prepare_get_payment(token: Optional[str], payment_id: Optional[str]) -> Result:
    errors: List[str] = []
    if not token:
        errors.append(INVALID_TOKEN)
    if not payment_id:
        errors.append(INVALID_PAYMENT_ID)
    if errors:
        return Result.failure(errors)

    return Result.success(
        PreparedCall(endpoint=f"/payments/{quote(str(payment_id), safe='')}", token=token)
    )
