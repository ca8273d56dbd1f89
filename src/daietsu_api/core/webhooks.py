"""
Signature checks for webhooks delivered by Daietsu.

Daietsu signs each webhook with ``base64(sha512(secret + ":" + body))`` and
sends the digest in the ``X-Daietsu-Webhook`` header. This is not HMAC; the
construction has to match the sender exactly or every signature is rejected.

Usage::

    from daietsu_api import WEBHOOK_SIGNATURE_HEADER, verify_webhook

    if not verify_webhook(
        request.headers[WEBHOOK_SIGNATURE_HEADER],
        request.get_data(as_text=True),
        webhook_secret,
    ):
        abort(401)

Pass the body exactly as received whenever possible. Parsed JSON is
re-serialised compactly with keys in their original order, which matches the
sender only as long as the parse kept every value's textual form.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from typing import Any

__all__ = [
    "WEBHOOK_SIGNATURE_HEADER",
    "canonicalize_content",
    "compute_signature",
    "verify_webhook",
]

WEBHOOK_SIGNATURE_HEADER = "X-Daietsu-Webhook"


def canonicalize_content(content: Any) -> str:
    """
    Return the text that was signed for ``content``.

    Strings are used verbatim and bytes are decoded as UTF-8, with invalid
    sequences shown as U+FFFD. Anything else is serialised to compact JSON;
    values ``json`` cannot serialise raise ``TypeError``.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, (bytes, bytearray)):
        return bytes(content).decode("utf-8", "replace")
    return json.dumps(content, separators=(",", ":"), ensure_ascii=False)


def _utf8(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates become U+FFFD, as Node's Buffer.from does.
        return (
            text.encode("utf-16-le", "surrogatepass")
            .decode("utf-16-le", "replace")
            .encode("utf-8")
        )


def _signing_input(content: Any, secret: str) -> bytes:
    # Raw bodies are hashed as received, never re-encoded.
    if isinstance(content, (bytes, bytearray)):
        return _utf8(secret) + b":" + bytes(content)
    return _utf8(f"{secret}:{canonicalize_content(content)}")


def compute_signature(content: Any, secret: str) -> str:
    digest = hashlib.sha512(_signing_input(content, secret)).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_webhook(header: Any, content: Any, secret: str) -> bool:
    """
    Return ``True`` if ``header`` is the signature of ``content`` under ``secret``.

    The comparison is an exact match done in constant time. Signatures are
    plain base64, so a header that is not ASCII never matches.
    """
    if not isinstance(header, str) or not header.isascii():
        return False
    expected = compute_signature(content, secret)
    return hmac.compare_digest(expected, header)
