"""Unit tests for the payment request validator."""

from datetime import date

import pytest

from payment_gateway.exceptions import PaymentValidationError
from payment_gateway.models import PaymentRequest
from payment_gateway.validation import validate_payment


def _reason(request, today):
    with pytest.raises(PaymentValidationError) as exc_info:
        validate_payment(request, today)
    return exc_info.value.reason


def test_valid_request_passes(valid_request, today):
    validate_payment(valid_request, today)


def test_missing_request(today):
    assert _reason(None, today) == "Request cannot be null"


def test_missing_card_number(valid_payload, today):
    del valid_payload["card_number"]
    assert _reason(PaymentRequest(**valid_payload), today) == "Card number is missing from the request"


@pytest.mark.parametrize("card_number", [
    "4532015112830",          # 13 digits
    "45320151128303691234",   # 20 digits
    "4532 0151 1283 0369",
    "4532-0151-1283-0369",
    "453201511283036a",
    "٤٥٣٢٠١٥١١٢٨٣٠٣٦٩",       # non-ASCII digits
    "",
])
def test_malformed_card_number(valid_payload, today, card_number):
    valid_payload["card_number"] = card_number
    assert _reason(PaymentRequest(**valid_payload), today) == \
        "Card number must be numeric and between 14 and 19 digits long"


@pytest.mark.parametrize("card_number", ["45320151128303", "4532015112830369123", "0000000000000000"])
def test_card_number_length_bounds_accepted(valid_payload, today, card_number):
    valid_payload["card_number"] = card_number
    validate_payment(PaymentRequest(**valid_payload), today)


@pytest.mark.parametrize("month", [0, 13, -1, None])
def test_expiry_month_out_of_range(valid_payload, today, month):
    valid_payload["expiry_month"] = month
    assert _reason(PaymentRequest(**valid_payload), today) == "Expiry month must be between 1 and 12"


@pytest.mark.parametrize("month, year", [(6, 2025), (5, 2025), (12, 2024), (12, 2020)])
def test_expired_card(valid_payload, today, month, year):
    """The current month already counts as expired."""
    valid_payload["expiry_month"] = month
    valid_payload["expiry_year"] = year
    assert _reason(PaymentRequest(**valid_payload), today) == "Card has expired"


def test_missing_expiry_year_is_expired(valid_payload, today):
    del valid_payload["expiry_year"]
    assert _reason(PaymentRequest(**valid_payload), today) == "Card has expired"


def test_next_month_is_valid(valid_payload, today):
    valid_payload["expiry_month"] = 7
    valid_payload["expiry_year"] = 2025
    validate_payment(PaymentRequest(**valid_payload), today)


def test_expiry_across_year_boundary(valid_payload):
    december = lambda: date(2025, 12, 31)

    valid_payload["expiry_month"] = 12
    valid_payload["expiry_year"] = 2025
    assert _reason(PaymentRequest(**valid_payload), december) == "Card has expired"

    valid_payload["expiry_month"] = 1
    valid_payload["expiry_year"] = 2026
    validate_payment(PaymentRequest(**valid_payload), december)


def test_missing_currency(valid_payload, today):
    del valid_payload["currency"]
    assert _reason(PaymentRequest(**valid_payload), today) == "Currency is missing from the request"


@pytest.mark.parametrize("currency", ["usd", "UsD", "USD", "eur", "Gbp"])
def test_currency_is_case_insensitive(valid_payload, today, currency):
    valid_payload["currency"] = currency
    validate_payment(PaymentRequest(**valid_payload), today)


@pytest.mark.parametrize("currency", ["USDA", "US", "HUF", ""])
def test_unsupported_currency(valid_payload, today, currency):
    valid_payload["currency"] = currency
    assert _reason(PaymentRequest(**valid_payload), today) == "Unsupported currency"


@pytest.mark.parametrize("amount", [0, -1, None])
def test_amount_must_be_positive(valid_payload, today, amount):
    valid_payload["amount"] = amount
    assert _reason(PaymentRequest(**valid_payload), today) == "Amount must be greater than zero"


def test_missing_cvv(valid_payload, today):
    del valid_payload["cvv"]
    assert _reason(PaymentRequest(**valid_payload), today) == "CVV is missing from the request"


@pytest.mark.parametrize("cvv", ["12", "12345", "12a", "1 3"])
def test_malformed_cvv(valid_payload, today, cvv):
    valid_payload["cvv"] = cvv
    assert _reason(PaymentRequest(**valid_payload), today) == "CVV must be 3-4 digits and numeric"


def test_four_digit_cvv_accepted(valid_payload, today):
    valid_payload["cvv"] = "0123"
    validate_payment(PaymentRequest(**valid_payload), today)


class TestRuleOrder:
    """When several fields are invalid, the earliest rule decides the reason."""

    def test_missing_card_number_before_everything(self, today):
        request = PaymentRequest(expiry_month=13, expiry_year=2020, currency="HUF", amount=0, cvv="x")
        assert _reason(request, today) == "Card number is missing from the request"

    def test_expiry_month_before_expired_year(self, valid_payload, today):
        valid_payload.update(expiry_month=0, expiry_year=2020, currency="HUF")
        assert _reason(PaymentRequest(**valid_payload), today) == "Expiry month must be between 1 and 12"

    def test_missing_currency_before_amount(self, valid_payload, today):
        valid_payload.update(currency=None, amount=0, cvv="1")
        assert _reason(PaymentRequest(**valid_payload), today) == "Currency is missing from the request"

    def test_card_number_before_everything(self, today):
        request = PaymentRequest(card_number="12", expiry_month=13, currency="HUF", amount=0, cvv="x")
        assert _reason(request, today) == "Card number must be numeric and between 14 and 19 digits long"

    def test_expiry_before_currency(self, valid_payload, today):
        valid_payload.update(expiry_year=2020, currency="HUF", amount=0)
        assert _reason(PaymentRequest(**valid_payload), today) == "Card has expired"

    def test_currency_before_amount(self, valid_payload, today):
        valid_payload.update(currency="HUF", amount=0, cvv="1")
        assert _reason(PaymentRequest(**valid_payload), today) == "Unsupported currency"

    def test_amount_before_cvv(self, valid_payload, today):
        valid_payload.update(amount=-10, cvv=None)
        assert _reason(PaymentRequest(**valid_payload), today) == "Amount must be greater than zero"
