"""
Python client for the Daietsu payments and identity API.

The module re-exports the pieces integrators need so they can
``from daietsu_api import ...`` without navigating the package.
"""

__version__ = "0.1.0"

from .api import create_client
from .core import (
    APIError,
    ClientConfig,
    ClientEnvironment,
    ClientParameters,
    ConfigError,
    DaietsuClient,
    REQUEST_ISSUE,
    Result,
    WEBHOOK_SIGNATURE_HEADER,
    build_environment,
    canonicalize_content,
    compute_signature,
    load_client_config,
    load_env_file,
    verify_webhook,
)

__all__ = (
    "APIError",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "DaietsuClient",
    "REQUEST_ISSUE",
    "Result",
    "WEBHOOK_SIGNATURE_HEADER",
    "build_environment",
    "canonicalize_content",
    "compute_signature",
    "create_client",
    "load_client_config",
    "load_env_file",
    "verify_webhook",
)
