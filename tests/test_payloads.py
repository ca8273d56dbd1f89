from decimal import Decimal

import pytest

from daietsu_api.core.payloads import (
    PreparedCall,
    build_authorization_url,
    normalize_scopes,
    parse_amount,
    prepare_create_payment,
    prepare_exchange_authorization_code,
    prepare_get_authorized_establishment,
    prepare_get_payment,
)


@pytest.mark.parametrize(
    "scopes, expected",
    [
        ("a,b,c", ["a", "b", "c"]),
        (["a", "b", "c"], ["a", "b", "c"]),
        (("a", "b"), ["a", "b"]),
        ("payments", ["payments"]),
        (None, []),
    ],
)
def test_normalize_scopes(scopes, expected):
    assert normalize_scopes(scopes) == expected


@pytest.mark.parametrize(
    "scopes", [42, {"a": 1}, object(), [1, 2], ["a", None], ("a", b"b")]
)
def test_normalize_scopes_rejects_other_types(scopes):
    assert normalize_scopes(scopes) is None


@pytest.mark.parametrize(
    "amount, expected",
    [
        ("0.5", Decimal("0.5")),
        (" 12.30 ", Decimal("12.30")),
        (3, Decimal("3")),
        (2.25, Decimal("2.25")),
        ("abc", None),
        ("", None),
        (None, None),
        (True, None),
        ("NaN", None),
        ("Infinity", None),
        ("1e2000000", None),
        ("1_000", None),
    ],
)
def test_parse_amount(amount, expected):
    assert parse_amount(amount) == expected


def test_authorization_url(config):
    result = build_authorization_url(
        config, "https://shop.example/callback?x=1&y=2", "payments,profile"
    )
    assert result.ok
    assert result.value == (
        "https://manage.daietsu.app/authorize?a=client-123&m=establishment"
        "&s=payments,profile"
        "&r=https%3A%2F%2Fshop.example%2Fcallback%3Fx%3D1%26y%3D2"
    )


def test_authorization_url_service_mode_appends_type(config):
    result = build_authorization_url(
        config, "https://x.example/cb", ["payments"], mode="service", service_type="PAYMENTS"
    )
    assert result.ok
    assert result.value.endswith("&m=service&s=payments&r=https%3A%2F%2Fx.example%2Fcb&t=PAYMENTS")


def test_authorization_url_string_and_list_scopes_match(config):
    as_string = build_authorization_url(config, "https://x.example", "a,b,c")
    as_list = build_authorization_url(config, "https://x.example", ["a", "b", "c"])
    assert as_string == as_list


def test_authorization_url_collects_errors(config):
    result = build_authorization_url(config, None, 7, mode="galaxy")
    assert not result.ok
    assert result.errors == ("INVALID_MODE", "MISSING_REDIRECT_URI", "INVALID_SCOPES_FORMAT")


def test_authorization_url_service_mode_needs_type(config):
    result = build_authorization_url(config, "https://x.example", mode="service")
    assert result.errors == ("MISSING_SERVICE_TYPE",)


def test_exchange_request_body():
    result = prepare_exchange_authorization_code("code-1", ["a", "b"])
    assert result.value == PreparedCall(
        endpoint="/auth/exchange", body={"code": "code-1", "scopes": "a,b"}
    )


def test_exchange_string_and_list_scopes_match():
    assert prepare_exchange_authorization_code("c", "a,b,c") == (
        prepare_exchange_authorization_code("c", ["a", "b", "c"])
    )


def test_exchange_collects_errors():
    result = prepare_exchange_authorization_code("", 1.5)
    assert result.errors == ("MISSING_AUTHORIZATION_CODE", "INVALID_SCOPES_FORMAT")


def test_establishment_needs_token():
    assert prepare_get_authorized_establishment("").errors == ("MISSING_TOKEN",)
    call = prepare_get_authorized_establishment("tok").value
    assert call == PreparedCall(endpoint="/establishments/@current", token="tok")


def test_create_payment_minimum_amount():
    result = prepare_create_payment("tok", "0.49", "EUR", "Coffee")
    assert result.errors == ("MINIMUM_AMOUNT_ISSUE",)

    result = prepare_create_payment("tok", "0.5", "EUR", "Coffee")
    assert result.ok
    assert result.value.body["amount"] == 0.5


@pytest.mark.parametrize("amount", [None, "", "zero", 0, "0"])
def test_create_payment_missing_amount(amount):
    result = prepare_create_payment("tok", amount, "EUR", "Coffee")
    assert result.errors == ("MISSING_AMOUNT",)


def test_create_payment_negative_amount_is_below_minimum():
    result = prepare_create_payment("tok", "-3", "EUR", "Coffee")
    assert result.errors == ("MINIMUM_AMOUNT_ISSUE",)


def test_create_payment_reports_every_missing_field():
    result = prepare_create_payment("tok", "10", None, "")
    assert result.errors == ("MISSING_CURRENCY", "MISSING_DESCRIPTION")

    result = prepare_create_payment(None, None, None, None)
    assert result.errors == (
        "MISSING_TOKEN",
        "MISSING_AMOUNT",
        "MISSING_CURRENCY",
        "MISSING_DESCRIPTION",
    )


def test_create_payment_body():
    result = prepare_create_payment(
        "tok",
        "12",
        "EUR",
        "Lunch",
        meta={"order": 7},
        return_url="https://shop.example/done",
        webhook="https://shop.example/hook",
    )
    assert result.value == PreparedCall(
        endpoint="/payments",
        token="tok",
        body={
            "amount": 12,
            "currency": "EUR",
            "description": "Lunch",
            "meta": {"order": 7},
            "return_url": "https://shop.example/done",
            "webhook": "https://shop.example/hook",
        },
    )


def test_create_payment_omits_empty_optionals():
    body = prepare_create_payment("tok", 7.5, "EUR", "Lunch").value.body
    assert body == {"amount": 7.5, "currency": "EUR", "description": "Lunch"}


def test_get_payment_reports_both_errors_in_order():
    result = prepare_get_payment("", "")
    assert result.errors == ("INVALID_TOKEN", "INVALID_PAYMENT_ID")


def test_get_payment_quotes_identifier():
    call = prepare_get_payment("tok", "pay/1").value
    assert call.endpoint == "/payments/pay%2F1"
    assert call.token == "tok"
    assert call.body is None


def test_non_string_scope_items_are_reported(config):
    assert build_authorization_url(config, "https://x.example", [1, 2]).errors == (
        "INVALID_SCOPES_FORMAT",
    )
    assert prepare_exchange_authorization_code("c", ["a", None]).errors == (
        "INVALID_SCOPES_FORMAT",
    )


@pytest.mark.parametrize("amount", ["1e2000000", "-1e400", "1_000"])
def test_create_payment_rejects_unrepresentable_amounts(amount):
    result = prepare_create_payment("tok", amount, "EUR", "Coffee")
    assert result.errors == ("MISSING_AMOUNT",)


def test_create_payment_large_amount_is_sent_as_float():
    body = prepare_create_payment("tok", "1e300", "EUR", "Coffee").value.body
    assert body["amount"] == 1e300
    assert isinstance(body["amount"], float)
