"""
Configuration objects and helpers for the Daietsu API client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment

__all__ = [
    "API_HOST",
    "AUTHORIZE_URL",
    "SANDBOX_API_HOST",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "load_client_config",
]

SANDBOX_API_HOST = "https://sandbox-api.daietsu.app/v1"
API_HOST = "https://api.daietsu.app/v1"
AUTHORIZE_URL = "https://manage.daietsu.app/authorize"

DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "client_id": "DAIETSU_CLIENT_ID",
    "client_secret": "DAIETSU_CLIENT_SECRET",
    "sandbox": "DAIETSU_SANDBOX",
    "timeout_seconds": "DAIETSU_TIMEOUT_SECONDS",
    "webhook_secret": "DAIETSU_WEBHOOK_SECRET",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_client_config`.
    """

    client_id: Optional[str] = None
    client_secret: Optional[str] = field(default=None, repr=False)
    sandbox: Optional[bool | str] = None
    timeout_seconds: Optional[float | int | str] = None
    webhook_secret: Optional[str] = field(default=None, repr=False)

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _require(values: Mapping[str, str], key: str) -> str:
    raw = values.get(key)
    if raw is None:
        raise ConfigError(f"{key} must be provided")
    value = raw.strip()
    if not value:
        raise ConfigError(f"{key} must not be empty")
    return value


def _parse_bool(raw: str, key: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be a boolean flag, got '{raw}'")


def _parse_timeout(raw: str, key: str) -> float:
    try:
        timeout = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ConfigError(f"{key} must be a number of seconds, got '{raw}'") from exc
    if not timeout.is_finite() or timeout <= 0:
        raise ConfigError(f"{key} must be greater than zero")
    return float(timeout)


@dataclass(frozen=True)
class ClientConfig:
    """
    Credentials and host selection for one client instance.

    Instances are immutable; build a new one to talk to a different
    environment or with different credentials.
    """

    client_id: str
    client_secret: str = field(repr=False)
    sandbox: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    webhook_secret: Optional[str] = field(default=None, repr=False)

    @property
    def api_host(self) -> str:
        return SANDBOX_API_HOST if self.sandbox else API_HOST

    @property
    def authentication_header(self) -> str:
        """Value of the ``X-API-Authentication`` header sent on every call."""
        return f"{self.client_id}:{self.client_secret}"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        client_id = _require(values, "DAIETSU_CLIENT_ID")
        client_secret = _require(values, "DAIETSU_CLIENT_SECRET")
        sandbox = _parse_bool(values.get("DAIETSU_SANDBOX", "false"), "DAIETSU_SANDBOX")
        timeout_seconds = _parse_timeout(
            values.get("DAIETSU_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
            "DAIETSU_TIMEOUT_SECONDS",
        )
        webhook_secret = values.get("DAIETSU_WEBHOOK_SECRET") or None

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            sandbox=sandbox,
            timeout_seconds=timeout_seconds,
            webhook_secret=webhook_secret,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        sandbox: Optional[bool | str] = None,
        timeout_seconds: Optional[float | int | str] = None,
        webhook_secret: Optional[str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "sandbox": sandbox,
                "timeout_seconds": timeout_seconds,
                "webhook_secret": webhook_secret,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    sandbox: Optional[bool | str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    webhook_secret: Optional[str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can be provided through environment variables, a
    ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        client_id=client_id,
        client_secret=client_secret,
        sandbox=sandbox,
        timeout_seconds=timeout_seconds,
        webhook_secret=webhook_secret,
    )
