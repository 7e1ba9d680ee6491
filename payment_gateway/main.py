"""
main.py — FastAPI Entry Point for the Payment Gateway

This module provides the REST API interface through which merchants submit card payments
and retrieve the outcome of previously processed payments.

Responsibilities:
    • Accept payments via HTTP API and run them through the processing pipeline
    • Return masked payment details by id
    • Manage the lifecycle of the pooled Acquiring Bank client
    • Propagate client disconnects to the outbound bank call
    • Provide system health information
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .clients import AcquiringBankClient
from .exceptions import PaymentNotFoundError
from .logging_config import setup_logging, get_logger
from .models import ErrorResponse, PaymentOutcome, PaymentRequest
from .repository import InMemoryPaymentRepository
from .settings import ACQUIRING_BANK_URL
from .workflow import PaymentGatewayService

# Initialization
setup_logging()
log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Wires the payment pipeline at startup and releases the bank connection pool at shutdown.

    The bank client is shared by all request handlers so outbound connections are reused.
    """
    log.info(f"Payment Gateway starting (Acquiring Bank: {ACQUIRING_BANK_URL}).")
    bank_client = AcquiringBankClient()
    app.state.gateway = PaymentGatewayService(InMemoryPaymentRepository(), bank_client)
    yield
    await bank_client.aclose()
    log.info("Payment Gateway stopped.")


app = FastAPI(title="Payment Gateway", lifespan=lifespan)


def get_gateway(request: Request) -> PaymentGatewayService:
    return request.app.state.gateway


async def _listen_for_disconnect(request: Request, cancelled: asyncio.Event):
    # The body has already been consumed, so the next ASGI message is the disconnect
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            cancelled.set()
            return


@app.exception_handler(PaymentNotFoundError)
async def payment_not_found_handler(request: Request, exc: PaymentNotFoundError):
    log.warning(f"Payment lookup failed: {exc}")
    return JSONResponse(status_code=404, content={"message": "Page not found"})


# API Endpoint: Merchant → Payment Gateway
@app.post("/payment", response_model=PaymentOutcome, status_code=200)
async def process_payment(
        request: Request,
        payment: Optional[PaymentRequest] = Body(None),
        gateway: PaymentGatewayService = Depends(get_gateway)
):
    """
    Processes a payment and returns its masked outcome.

    Every processed payment is answered with HTTP 200 and a status of Authorized, Declined
    or Rejected, and can be retrieved afterwards via GET /payment/{id}. The reason of a
    rejection is logged, not returned.

    If the merchant disconnects while the acquiring bank is being called, the bank call is
    aborted and the payment is stored as Rejected.

    Args:
        payment (PaymentRequest): The payment payload. May be absent.
        gateway (PaymentGatewayService): The payment pipeline.

    Returns:
        PaymentOutcome: id, status, card_number_last_four, expiry_month, expiry_year,
            currency and amount.
    """
    cancelled = asyncio.Event()
    watcher = asyncio.create_task(_listen_for_disconnect(request, cancelled))
    try:
        return await gateway.process_payment(payment, cancelled)
    finally:
        watcher.cancel()


@app.get(
    "/payment/{payment_id}",
    response_model=PaymentOutcome,
    responses={404: {"model": ErrorResponse}}
)
def get_payment(payment_id: str, gateway: PaymentGatewayService = Depends(get_gateway)):
    """
    Retrieves the masked details of a processed payment.

    Raises:
        PaymentNotFoundError: Answered with HTTP 404 and {"message": "Page not found"}.
    """
    return gateway.get_payment(payment_id)


# Health Check Endpoint
@app.get("/health")
def health_check():
    """
    Simple health check endpoint for monitoring systems and container orchestrators.

    Returns:
        dict: A basic JSON object indicating service availability.
    """
    return {"status": "ok"}
