"""
mock_acquiring_bank.py — Mock Implementation of the Acquiring Bank (REST API)

This module provides a simulated Acquiring Bank for local development and integration tests
of the payment gateway. It exposes a small FastAPI application whose verdict depends only on
the last digit of the card number, so every outcome can be triggered on purpose.

Simulation Scenarios:
    • Card number ending in an odd digit  → authorized
    • Card number ending in 2, 4, 6 or 8  → declined
    • Card number ending in 0             → bank unavailable (HTTP 503)
    • Required field missing              → bad request (HTTP 400)

Endpoints:
    POST /payments — Authorizes a card payment.

Port:
    Default: 8080 (HTTP)
"""

import logging
import uuid
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

app = FastAPI(title="Mock Acquiring Bank")
log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("card_number", "expiry_month", "expiry_year", "currency", "amount", "cvv")


class BankPaymentRequest(BaseModel):
    """
    Payment payload forwarded by the gateway. Fields are optional here so that the
    simulator can answer incomplete payloads with its own 400 body.
    """
    card_number: Optional[str] = None
    expiry_month: Optional[int] = None
    expiry_year: Optional[int] = None
    currency: Optional[str] = None
    amount: Optional[int] = None
    cvv: Optional[str] = None


@app.post("/payments")
def authorize_payment(request: BankPaymentRequest):
    """
    Authorizes or declines a payment.

    Returns:
        dict: {"authorized": bool, "authorization_code": str}. The code is empty on decline.
        JSONResponse(400): If a required field is missing.
        JSONResponse(503): If the card number ends in 0.
    """
    if any(getattr(request, field) in (None, "") for field in REQUIRED_FIELDS):
        log.warning("[Bank] Rejected payment with missing fields.")
        return JSONResponse(
            status_code=400,
            content={"errorMessage": "Not all required properties were sent in the request"}
        )

    last_digit = request.card_number[-1]
    if last_digit == "0":
        log.warning("[Bank] Simulating outage.")
        return JSONResponse(status_code=503, content={})

    if last_digit in "13579":
        log.info(f"[Bank] Payment for card ending {request.card_number[-4:]} authorized.")
        return {"authorized": True, "authorization_code": str(uuid.uuid4())}

    log.info(f"[Bank] Payment for card ending {request.card_number[-4:]} declined.")
    return {"authorized": False, "authorization_code": ""}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8080)
