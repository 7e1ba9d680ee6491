"""
models.py — Data Models for Payment Processing

This module defines the data structures exchanged with merchants and with the acquiring bank.
It uses Pydantic models for parsing and serialization. Business rules are NOT enforced here:
every field of the incoming request is optional so that incomplete requests still reach the
validator and end up as a persisted "Rejected" payment instead of a transport error.

Models:
    - PaymentStatus: Terminal status of a processed payment.
    - SupportedCurrency: Currencies accepted by the gateway.
    - PaymentRequest: Payment payload received from the merchant (and forwarded to the bank).
    - PaymentOutcome: Persisted, masked record of a processed payment (also the response body).
    - BankAuthorizationResponse: Verdict returned by the acquiring bank.
    - ErrorResponse: Body of error responses.
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PaymentStatus(str, Enum):
    """
    Terminal status of a payment.

    Authorized - the payment was authorized by the acquiring bank
    Declined   - the payment was declined by the acquiring bank
    Rejected   - invalid information was supplied, so the bank was never called,
                 or the call to the bank failed
    """
    AUTHORIZED = "Authorized"
    DECLINED = "Declined"
    REJECTED = "Rejected"


class SupportedCurrency(str, Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"

    @classmethod
    def is_supported(cls, currency: str) -> bool:
        """Case-insensitive membership test ("usd", "UsD" and "USD" are all supported)."""
        return currency.upper() in cls.__members__


class PaymentRequest(BaseModel):
    """
    Represents a payment request submitted by a merchant.

    Attributes:
        card_number (str): Card number, 14-19 digits. Kept as a string to preserve leading zeros.
        expiry_month (int): Expiry month, 1-12.
        expiry_year (int): Four-digit expiry year.
        currency (str): ISO 4217 currency code (e.g. 'GBP').
        amount (int): Amount in the minor currency unit (e.g. pence).
        cvv (str): Card verification value, 3-4 digits.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    card_number: Optional[str] = None
    expiry_month: Optional[int] = None
    expiry_year: Optional[int] = None
    currency: Optional[str] = None
    amount: Optional[int] = None
    cvv: Optional[str] = None


class PaymentOutcome(BaseModel):
    """
    Masked record of a processed payment. Stored once and returned on every lookup.

    The full card number and the CVV are never part of this model; only the last four
    characters of the card number survive.

    Attributes:
        id (UUID): Server-generated payment identifier.
        status (PaymentStatus): Terminal status.
        card_number_last_four (str): Last four characters of the card number, e.g. "0369".
        expiry_month (int), expiry_year (int), currency (str), amount (int):
            Copied verbatim from the request. None when absent from a rejected request.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    status: PaymentStatus
    card_number_last_four: Optional[str] = None
    expiry_month: Optional[int] = None
    expiry_year: Optional[int] = None
    currency: Optional[str] = None
    amount: Optional[int] = None

    @classmethod
    def from_request(
            cls,
            payment_id: UUID,
            status: PaymentStatus,
            request: Optional[PaymentRequest]
    ) -> "PaymentOutcome":
        if request is None:
            return cls(id=payment_id, status=status)

        last_four = request.card_number[-4:] if request.card_number is not None else None
        return cls(
            id=payment_id,
            status=status,
            card_number_last_four=last_four,
            expiry_month=request.expiry_month,
            expiry_year=request.expiry_year,
            currency=request.currency,
            amount=request.amount,
        )


class BankAuthorizationResponse(BaseModel):
    """
    Response of the acquiring bank's POST /payments endpoint.

    Attributes:
        authorized (bool): Whether the bank approved the charge.
        authorization_code (str): Opaque code issued by the bank. Not persisted by the gateway.
    """
    authorized: bool
    authorization_code: Optional[str] = None


class ErrorResponse(BaseModel):
    message: str
