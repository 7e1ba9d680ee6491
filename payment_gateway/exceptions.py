"""
exceptions.py — Error taxonomy of the payment pipeline.

    • PaymentValidationError: the request broke a business rule (always recovered by the processor)
    • BankProcessingError: the acquiring bank call failed (always recovered by the processor)
    • PaymentNotFoundError: lookup of an unknown payment id (surfaced as HTTP 404)
"""

from enum import Enum


class BankFailureReason(str, Enum):
    """Closed set of reasons for a failed acquiring bank call."""
    INVALID_REQUEST = "Invalid payment request"
    BANK_UNAVAILABLE = "Acquiring Bank unavailable"
    REQUEST_FAILED = "Bank request failed"


class PaymentValidationError(Exception):
    """Raised when a payment request fails validation. Carries a human-readable reason."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class BankProcessingError(Exception):
    """Raised when the acquiring bank could not process the payment."""

    def __init__(self, reason: BankFailureReason):
        super().__init__(reason.value)
        self.reason = reason


class PaymentNotFoundError(Exception):
    """Raised when no payment is stored under the requested id."""

    def __init__(self, payment_id):
        super().__init__(f"Payment {payment_id} not found")
        self.payment_id = payment_id
