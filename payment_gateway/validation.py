"""
validation.py — Business Rule Validation for Payment Requests

Validation is pure and synchronous: it never contacts external services and never
allocates identifiers. Rules are evaluated in a fixed order and the first failing rule
wins, so structural problems (card number, expiry) are reported before semantic ones
(currency, amount, CVV).
"""

import re
from datetime import date
from typing import Callable, Optional

from .exceptions import PaymentValidationError
from .models import PaymentRequest, SupportedCurrency

CARD_NUMBER_PATTERN = re.compile(r"[0-9]{14,19}")
CVV_PATTERN = re.compile(r"[0-9]{3,4}")


def validate_payment(
        request: Optional[PaymentRequest],
        today: Callable[[], date] = date.today
) -> None:
    """
    Validates a payment request against the gateway's business rules.

    Rules, in evaluation order:
        1. The request is present
        2. Card number is present
        3. Card number is numeric and 14-19 digits long
        4. Expiry month is between 1 and 12
        5. Expiry (year, month) is strictly after the current year-month
        6. Currency is present
        7. Currency is supported (EUR, USD, GBP; case-insensitive)
        8. Amount is greater than zero
        9. CVV is present
        10. CVV is numeric and 3-4 digits long

    Args:
        request (PaymentRequest | None): The request to validate.
        today (Callable[[], date]): Clock returning the current local date.

    Raises:
        PaymentValidationError: With the reason of the first failing rule.
    """
    if request is None:
        raise PaymentValidationError("Request cannot be null")

    if request.card_number is None:
        raise PaymentValidationError("Card number is missing from the request")

    if not CARD_NUMBER_PATTERN.fullmatch(request.card_number):
        raise PaymentValidationError("Card number must be numeric and between 14 and 19 digits long")

    if request.expiry_month is None or not 1 <= request.expiry_month <= 12:
        raise PaymentValidationError("Expiry month must be between 1 and 12")

    if not _expires_after(request.expiry_year, request.expiry_month, today()):
        raise PaymentValidationError("Card has expired")

    if request.currency is None:
        raise PaymentValidationError("Currency is missing from the request")

    if not SupportedCurrency.is_supported(request.currency):
        raise PaymentValidationError("Unsupported currency")

    if request.amount is None or request.amount <= 0:
        raise PaymentValidationError("Amount must be greater than zero")

    if request.cvv is None:
        raise PaymentValidationError("CVV is missing from the request")

    if not CVV_PATTERN.fullmatch(request.cvv):
        raise PaymentValidationError("CVV must be 3-4 digits and numeric")


def _expires_after(expiry_year: Optional[int], expiry_month: int, now: date) -> bool:
    # A card expiring in the current month counts as expired
    if expiry_year is None:
        return False
    return (expiry_year, expiry_month) > (now.year, now.month)
