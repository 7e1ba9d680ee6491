"""
workflow.py — Core Orchestration Logic for Payment Processing

This module contains the payment pipeline. It coordinates the validator, the acquiring bank
client and the payment repository, and decides the terminal status of every payment.

Workflow Overview:
1. Assign a fresh payment id
2. Validate the request (failure → Rejected, bank is not called)
3. Submit the payment to the acquiring bank (failure → Rejected)
4. Map the bank verdict to Authorized / Declined
5. Persist exactly one masked outcome and return it
"""

import asyncio
import logging
import uuid
from datetime import date
from typing import Callable, Optional, Union
from uuid import UUID

from .clients import AcquiringBankClient
from .exceptions import BankProcessingError, PaymentNotFoundError, PaymentValidationError
from .models import PaymentOutcome, PaymentRequest, PaymentStatus
from .repository import PaymentRepository
from .validation import validate_payment

log = logging.getLogger(__name__)


class PaymentGatewayService:
    """
    Processes payments and serves lookups of processed payments.

    Args:
        repository (PaymentRepository): Store of processed payments.
        bank_client (AcquiringBankClient): Client for the acquiring bank.
        today (Callable[[], date]): Clock used for the card expiry check.
        id_factory (Callable[[], UUID]): Source of payment ids (random 128-bit UUIDs).
    """

    def __init__(
            self,
            repository: PaymentRepository,
            bank_client: AcquiringBankClient,
            today: Callable[[], date] = date.today,
            id_factory: Callable[[], UUID] = uuid.uuid4
    ):
        self.repository = repository
        self.bank_client = bank_client
        self.today = today
        self.id_factory = id_factory

    async def process_payment(
            self,
            request: Optional[PaymentRequest],
            cancelled: Optional[asyncio.Event] = None
    ) -> PaymentOutcome:
        """
        Executes the payment pipeline for a single request.

        Every path persists exactly one outcome before returning it. Validation and bank
        failures are recovered here and turned into a Rejected outcome; their reason is
        only logged, never returned.

        Args:
            request (PaymentRequest | None): The merchant's request, None if no body was sent.
            cancelled (asyncio.Event): Cancellation signal of the inbound HTTP request.

        Returns:
            PaymentOutcome: The persisted, masked outcome.
        """
        payment_id = self.id_factory()
        log_prefix = f"[Payment: {payment_id}]"
        log.info(f"{log_prefix} Processing payment.")

        try:
            validate_payment(request, self.today)
        except PaymentValidationError as e:
            log.warning(f"{log_prefix} Payment validation failed: {e.reason}")
            return self._persist(payment_id, PaymentStatus.REJECTED, request)

        try:
            verdict = await self.bank_client.authorize(request, cancelled)
        except BankProcessingError as e:
            log.warning(f"{log_prefix} Acquiring bank processing failed: {e.reason.value}")
            return self._persist(payment_id, PaymentStatus.REJECTED, request)

        status = PaymentStatus.AUTHORIZED if verdict.authorized else PaymentStatus.DECLINED
        return self._persist(payment_id, status, request)

    def get_payment(self, payment_id: Union[UUID, str]) -> PaymentOutcome:
        """
        Retrieves a processed payment by its id.

        Args:
            payment_id (UUID | str): The payment id. Strings that are not UUIDs cannot name a payment.

        Returns:
            PaymentOutcome: The stored outcome.

        Raises:
            PaymentNotFoundError: If no payment is stored under the id.
        """
        log.debug(f"Requesting access to payment with ID {payment_id}")
        if not isinstance(payment_id, UUID):
            try:
                parsed = UUID(payment_id)
            except ValueError as e:
                raise PaymentNotFoundError(payment_id) from e
            # Only the canonical dashed form names a payment
            if str(parsed) != payment_id.lower():
                raise PaymentNotFoundError(payment_id)
            payment_id = parsed

        outcome = self.repository.get(payment_id)
        if outcome is None:
            raise PaymentNotFoundError(payment_id)
        return outcome

    def _persist(
            self,
            payment_id: UUID,
            status: PaymentStatus,
            request: Optional[PaymentRequest]
    ) -> PaymentOutcome:
        outcome = PaymentOutcome.from_request(payment_id, status, request)
        self.repository.put(outcome)
        log.info(f"[Payment: {payment_id}] Persisted with status {status.value}.")
        return outcome
