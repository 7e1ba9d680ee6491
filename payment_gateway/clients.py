"""
This module provides the communication client for the external Acquiring Bank (REST API).
The client encapsulates the protocol logic, maps transport outcomes to a bank verdict or a
typed BankProcessingError, and owns the pooled HTTP connection shared by all request handlers.
"""

import asyncio
import logging
from typing import Optional

import httpx

from .exceptions import BankFailureReason, BankProcessingError
from .models import BankAuthorizationResponse, PaymentRequest
from .settings import ACQUIRING_BANK_URL, BANK_CONNECT_TIMEOUT_SECONDS, BANK_READ_TIMEOUT_SECONDS

PAYMENTS_API_PATH = "/payments"

log = logging.getLogger(__name__)


class AcquiringBankClient:
    """
    Client for the Acquiring Bank (REST API).
    Submits validated payments and returns the bank's authorization verdict.
    """
    def __init__(
            self,
            base_url: str = ACQUIRING_BANK_URL,
            timeout: Optional[httpx.Timeout] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initializes the pooled HTTP client with a bounded timeout.
        Args:
            base_url (str): Base URL of the acquiring bank.
            timeout (httpx.Timeout): Overrides the configured connect/read timeouts.
            transport (httpx.AsyncBaseTransport): Custom transport, e.g. httpx.MockTransport in tests.
        """
        timeout_config = timeout or httpx.Timeout(BANK_CONNECT_TIMEOUT_SECONDS, read=BANK_READ_TIMEOUT_SECONDS)
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout_config, transport=transport)

    async def aclose(self):
        """Closes the HTTP connection pool."""
        await self.client.aclose()

    async def authorize(
            self,
            request: PaymentRequest,
            cancelled: Optional[asyncio.Event] = None
    ) -> BankAuthorizationResponse:
        """
        Submits a payment to the acquiring bank. Exactly one attempt is made per call.

        Retries with exponential backoff and a circuit breaker for transient failures
        (5xx responses and network issues) belong here, wrapped around `_post_payment`.

        Args:
            request (PaymentRequest): A request that already passed validation.
            cancelled (asyncio.Event): Set when the inbound request was abandoned by the caller.
                The outbound call is aborted as soon as the event fires.
        Returns:
            BankAuthorizationResponse: The bank's verdict.
        Raises:
            BankProcessingError: If the bank rejected the request, was unavailable,
                the call failed, or it was aborted.
        """
        if cancelled is None:
            return await self._post_payment(request)

        call = asyncio.ensure_future(self._post_payment(request))
        watcher = asyncio.ensure_future(cancelled.wait())
        try:
            done, _ = await asyncio.wait({call, watcher}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            watcher.cancel()
            if not call.done():
                call.cancel()

        if call in done:
            return call.result()

        log.error("Acquiring Bank call aborted: inbound request was cancelled.")
        raise BankProcessingError(BankFailureReason.REQUEST_FAILED)

    async def _post_payment(self, request: PaymentRequest) -> BankAuthorizationResponse:
        log.debug("Processing payment through Acquiring Bank.")
        try:
            response = await self.client.post(PAYMENTS_API_PATH, json=request.model_dump())
            response.raise_for_status()
            result = BankAuthorizationResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 400:
                log.error(f"Bad request sent to Acquiring Bank: {e.response.text}")
                raise BankProcessingError(BankFailureReason.INVALID_REQUEST) from e
            if status_code == 503:
                log.error(f"Acquiring Bank service is unavailable: {e.response.text}")
                raise BankProcessingError(BankFailureReason.BANK_UNAVAILABLE) from e
            log.error(f"HTTP error from Acquiring Bank (HTTP {status_code}).")
            raise BankProcessingError(BankFailureReason.REQUEST_FAILED) from e
        except httpx.HTTPError as e:
            # Timeouts, DNS and connection errors
            log.error(f"Error processing payment with Acquiring Bank: {e!r}")
            raise BankProcessingError(BankFailureReason.REQUEST_FAILED) from e
        except ValueError as e:
            # Body is not JSON or does not match the expected shape
            log.error(f"Malformed response from Acquiring Bank: {e}")
            raise BankProcessingError(BankFailureReason.REQUEST_FAILED) from e

        log.debug("Payment processed by Acquiring Bank.")
        return result
