"""
settings.py — Environment-driven configuration for the Payment Gateway.

All values are read once at import time. Defaults target a local setup where the
acquiring bank simulator (mock_services/mock_acquiring_bank.py) listens on port 8080.
"""

import os

# Base URL of the acquiring bank (config key "acquiring.bank.url")
ACQUIRING_BANK_URL = os.environ.get("ACQUIRING_BANK_URL", "http://localhost:8080")

BANK_CONNECT_TIMEOUT_SECONDS = float(os.environ.get("BANK_CONNECT_TIMEOUT_SECONDS", "5.0"))
BANK_READ_TIMEOUT_SECONDS = float(os.environ.get("BANK_READ_TIMEOUT_SECONDS", "8.0"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
# Empty string disables the file handler
LOG_FILE = os.environ.get("LOG_FILE", "payment_gateway.log")
