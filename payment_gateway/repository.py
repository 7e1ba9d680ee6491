"""
repository.py — Storage of processed payments

The gateway only needs two capabilities from its store: put an outcome once, and get it back
by id. Any backend offering them can replace the in-memory implementation used here.
"""

import threading
from typing import Dict, Optional, Protocol
from uuid import UUID

from .models import PaymentOutcome


class PaymentRepository(Protocol):
    def put(self, outcome: PaymentOutcome) -> None: ...

    def get(self, payment_id: UUID) -> Optional[PaymentOutcome]: ...


class InMemoryPaymentRepository:
    """
    Process-local payment store.

    Safe for concurrent use from multiple request handlers. Outcomes are immutable
    (frozen models), so returning the stored instance never exposes mutable state.
    """

    def __init__(self):
        self._payments: Dict[UUID, PaymentOutcome] = {}
        self._lock = threading.Lock()

    def put(self, outcome: PaymentOutcome) -> None:
        """Stores an outcome. Ids are unique by construction, so nothing is ever overwritten."""
        with self._lock:
            self._payments[outcome.id] = outcome

    def get(self, payment_id: UUID) -> Optional[PaymentOutcome]:
        with self._lock:
            return self._payments.get(payment_id)

    def __len__(self):
        with self._lock:
            return len(self._payments)
