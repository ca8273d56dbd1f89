"""
Core primitives behind the Daietsu API client.
"""

from .client import DaietsuClient, app_get, app_post
from .config import (
    API_HOST,
    AUTHORIZE_URL,
    SANDBOX_API_HOST,
    ClientConfig,
    ClientParameters,
    ConfigError,
    load_client_config,
)
from .environment import ClientEnvironment, build_environment, load_env_file
from .payloads import (
    PreparedCall,
    build_authorization_url,
    normalize_scopes,
    parse_amount,
    prepare_create_payment,
    prepare_exchange_authorization_code,
    prepare_get_authorized_establishment,
    prepare_get_payment,
)
from .result import REQUEST_ISSUE, APIError, Result
from .webhooks import (
    WEBHOOK_SIGNATURE_HEADER,
    canonicalize_content,
    compute_signature,
    verify_webhook,
)

__all__ = [
    "API_HOST",
    "AUTHORIZE_URL",
    "APIError",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "DaietsuClient",
    "PreparedCall",
    "REQUEST_ISSUE",
    "Result",
    "SANDBOX_API_HOST",
    "WEBHOOK_SIGNATURE_HEADER",
    "app_get",
    "app_post",
    "build_authorization_url",
    "build_environment",
    "canonicalize_content",
    "compute_signature",
    "load_client_config",
    "load_env_file",
    "normalize_scopes",
    "parse_amount",
    "prepare_create_payment",
    "prepare_exchange_authorization_code",
    "prepare_get_authorized_establishment",
    "prepare_get_payment",
    "verify_webhook",
]
