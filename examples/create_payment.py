"""
Minimal script that uses the public API to create and then fetch a payment.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, Tuple

from daietsu_api import ConfigError, create_client, load_client_config


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Daietsu payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing DAIETSU_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        help="Talk to the sandbox API instead of production",
    )
    parser.add_argument("--token", required=True, help="Establishment access token")
    parser.add_argument("--amount", default="1.00", help="Amount to charge (default: 1.00)")
    parser.add_argument("--currency", default="EUR", help="Payment currency (default: EUR)")
    parser.add_argument(
        "--description",
        default="Example payment",
        help="Description shown to the payer",
    )
    parser.add_argument("--return-url", help="Where to send the payer after paying")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    overrides = _build_overrides(args.set or ())

    try:
        config = load_client_config(
            env_file=args.env_file,
            overrides=overrides,
            sandbox=True if args.sandbox else None,
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config)
    logging.info("Creating payment on %s", config.api_host)

    created = client.create_payment(
        args.token,
        args.amount,
        args.currency,
        args.description,
        return_url=args.return_url,
    )
    if not created.ok:
        logging.error("Payment creation failed: %s", ", ".join(map(str, created.errors)))
        return 1

    print(json.dumps(created.value, indent=2))

    payment_id = created.value.get("id") if isinstance(created.value, dict) else None
    if not payment_id:
        logging.info("Response carried no payment id; skipping lookup.")
        return 0

    fetched = client.get_payment(args.token, payment_id)
    if not fetched.ok:
        logging.error("Payment lookup failed: %s", ", ".join(map(str, fetched.errors)))
        return 1

    print(json.dumps(fetched.value, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
