"""
Command-line interface for exercising the Daietsu API.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Sequence, Tuple

import requests

from .api import create_client
from .core.client import DaietsuClient
from .core.config import ConfigError, load_client_config
from .core.environment import build_environment
from .core.result import Result
from .core.webhooks import verify_webhook


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _json_argument(value: str) -> Any:
    try:
        return json.loads(value)
    except ValueError:
        return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daietsu-api",
        description="Call the Daietsu API and check webhook signatures",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing DAIETSU_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    authorize = commands.add_parser("authorize-url", help="Print an authorization URL")
    authorize.add_argument("--redirect-uri", required=True)
    authorize.add_argument("--scopes", default=None, help="Comma separated scopes")
    authorize.add_argument("--mode", default="establishment")
    authorize.add_argument("--service-type", default=None)

    exchange = commands.add_parser(
        "exchange-code", help="Exchange an authorization code for a token"
    )
    exchange.add_argument("code")
    exchange.add_argument("--scopes", default=None, help="Comma separated scopes")

    establishment = commands.add_parser(
        "establishment", help="Show the establishment bound to a token"
    )
    establishment.add_argument("--token", required=True)

    payment = commands.add_parser("create-payment", help="Create a payment")
    payment.add_argument("--token", required=True)
    payment.add_argument("--amount", required=True)
    payment.add_argument("--currency", required=True)
    payment.add_argument("--description", required=True)
    payment.add_argument(
        "--meta",
        type=_json_argument,
        default=None,
        help="Payment meta, parsed as JSON when possible",
    )
    payment.add_argument("--return-url", default=None)
    payment.add_argument("--webhook", default=None)

    get_payment = commands.add_parser("get-payment", help="Show a payment")
    get_payment.add_argument("payment_id")
    get_payment.add_argument("--token", required=True)

    webhook = commands.add_parser(
        "verify-webhook", help="Check the signature of a received webhook body"
    )
    webhook.add_argument("--signature", required=True, help="X-Daietsu-Webhook header value")
    webhook.add_argument(
        "--body-file",
        type=Path,
        default=None,
        help="File holding the raw webhook body (default: stdin)",
    )
    webhook.add_argument(
        "--secret",
        default=None,
        help="Webhook secret (default: DAIETSU_WEBHOOK_SECRET)",
    )
    return parser


def _report(result: Result) -> int:
    if not result.ok:
        logging.error("Request failed: %s", ", ".join(str(e) for e in result.errors))
        return 1
    if isinstance(result.value, str):
        print(result.value)
    else:
        print(json.dumps(result.value, indent=2, ensure_ascii=False))
    return 0


def _run_command(client: DaietsuClient, args: argparse.Namespace) -> Result:
    if args.command == "authorize-url":
        return client.create_authorization_url(
            args.redirect_uri,
            args.scopes,
            mode=args.mode,
            service_type=args.service_type,
        )
    if args.command == "exchange-code":
        return client.exchange_authorization_code(args.code, args.scopes)
    if args.command == "establishment":
        return client.get_authorized_establishment(args.token)
    if args.command == "create-payment":
        return client.create_payment(
            args.token,
            args.amount,
            args.currency,
            args.description,
            meta=args.meta,
            return_url=args.return_url,
            webhook=args.webhook,
        )
    return client.get_payment(args.token, args.payment_id)


def _verify_webhook(args: argparse.Namespace, overrides: dict[str, str]) -> int:
    secret = args.secret
    if secret is None:
        environment = build_environment(env_file=args.env_file, overrides=overrides)
        secret = environment.get("DAIETSU_WEBHOOK_SECRET")
    if not secret:
        logging.error("No webhook secret given and DAIETSU_WEBHOOK_SECRET is not set")
        return 1

    # Raw bytes, so line endings reach the hash untouched.
    if args.body_file is None:
        body = sys.stdin.buffer.read()
    else:
        try:
            body = args.body_file.read_bytes()
        except OSError as exc:
            logging.error("Cannot read webhook body: %s", exc)
            return 1
    if verify_webhook(args.signature, body, secret):
        logging.info("Webhook signature is valid")
        return 0
    logging.error("Webhook signature does not match the body")
    return 1


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    if args.command == "verify-webhook":
        return _verify_webhook(args, overrides)

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config, session=requests.Session())
    logging.info("Using Daietsu API at %s", config.api_host)
    return _report(_run_command(client, args))


def main() -> None:
    sys.exit(run_cli())
