"""Shared fixtures for the payment gateway test suite."""

import os
from datetime import date

# Keep test runs from writing a log file into the working directory
os.environ.setdefault("LOG_FILE", "")

import pytest
from fastapi.testclient import TestClient

from payment_gateway.main import app, get_gateway
from payment_gateway.models import BankAuthorizationResponse, PaymentRequest
from payment_gateway.repository import InMemoryPaymentRepository
from payment_gateway.workflow import PaymentGatewayService

TODAY = date(2025, 6, 15)


class FakeBankClient:
    """Stands in for AcquiringBankClient and records every submitted request."""

    def __init__(self, authorized=True, error=None):
        self.authorized = authorized
        self.error = error
        self.calls = []

    async def authorize(self, request, cancelled=None):
        self.calls.append((request, cancelled))
        if self.error is not None:
            raise self.error
        return BankAuthorizationResponse(
            authorized=self.authorized,
            authorization_code="auth-123" if self.authorized else ""
        )


@pytest.fixture
def today():
    return lambda: TODAY


@pytest.fixture
def valid_payload():
    return {
        "card_number": "4532015112830369",
        "expiry_month": 12,
        "expiry_year": 2026,
        "cvv": "123",
        "amount": 100,
        "currency": "GBP",
    }


@pytest.fixture
def valid_request(valid_payload):
    return PaymentRequest(**valid_payload)


@pytest.fixture
def bank():
    return FakeBankClient()


@pytest.fixture
def repository():
    return InMemoryPaymentRepository()


@pytest.fixture
def gateway(repository, bank, today):
    return PaymentGatewayService(repository, bank, today=today)


@pytest.fixture
def client(gateway):
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()
