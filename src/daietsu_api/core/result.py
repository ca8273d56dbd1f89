"""
Outcome type shared by every client operation, plus the error codes the
client produces locally.

Operations never raise for validation, remote or transport failures; they
return a :class:`Result` whose ``errors`` list every problem found, in the
order the checks ran. Remote error codes are passed through unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Tuple

__all__ = [
    "APIError",
    "INVALID_MODE",
    "INVALID_PAYMENT_ID",
    "INVALID_SCOPES_FORMAT",
    "INVALID_TOKEN",
    "MINIMUM_AMOUNT_ISSUE",
    "MISSING_AMOUNT",
    "MISSING_AUTHORIZATION_CODE",
    "MISSING_CURRENCY",
    "MISSING_DESCRIPTION",
    "MISSING_REDIRECT_URI",
    "MISSING_SERVICE_TYPE",
    "MISSING_TOKEN",
    "REQUEST_ISSUE",
    "Result",
]

INVALID_MODE = "INVALID_MODE"
MISSING_SERVICE_TYPE = "MISSING_SERVICE_TYPE"
MISSING_REDIRECT_URI = "MISSING_REDIRECT_URI"
INVALID_SCOPES_FORMAT = "INVALID_SCOPES_FORMAT"
MISSING_AUTHORIZATION_CODE = "MISSING_AUTHORIZATION_CODE"
MISSING_TOKEN = "MISSING_TOKEN"
MISSING_AMOUNT = "MISSING_AMOUNT"
MINIMUM_AMOUNT_ISSUE = "MINIMUM_AMOUNT_ISSUE"
MISSING_CURRENCY = "MISSING_CURRENCY"
MISSING_DESCRIPTION = "MISSING_DESCRIPTION"
INVALID_TOKEN = "INVALID_TOKEN"
INVALID_PAYMENT_ID = "INVALID_PAYMENT_ID"

# Transport failure: network error, timeout or an unreadable response body.
REQUEST_ISSUE = "REQUEST_ISSUE"


class APIError(Exception):
    """Raised by :meth:`Result.unwrap` when the result carries errors."""

    def __init__(self, errors: Iterable[Any]):
        self.errors = tuple(errors)
        super().__init__(", ".join(str(error) for error in self.errors))


@dataclass(frozen=True)
class Result:
    value: Any = None
    errors: Tuple[Any, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, errors: Iterable[Any]) -> "Result":
        codes = tuple(errors)
        if not codes:
            raise ValueError("A failed result needs at least one error")
        return cls(errors=codes)

    def unwrap(self) -> Any:
        """Return the value, raising :class:`APIError` if the call failed."""
        if self.errors:
            raise APIError(self.errors)
        return self.value
