"""
logging_config.py — Centralized Logging Configuration for the Payment Gateway

This module configures unified logging behavior for the entire application.
It ensures that all modules log messages consistently to the console and, optionally, a file.

Features:
    • Console output plus an optional persistent log file
    • Process ID tagging for multi-process visibility
    • Standardized log format for all modules
    • Reduced verbosity for the HTTP client libraries (httpx, httpcore)
"""

import logging
import sys

from .settings import LOG_FILE, LOG_LEVEL


def setup_logging():
    """
    Configures the global logging system for the application.

    The configuration includes:
        - Log level: taken from LOG_LEVEL (default INFO)
        - Log format: timestamp, log level, process ID, and message
        - Output destinations:
            1. Console (stdout): real-time logs, Docker/Kubernetes compatible
            2. File: LOG_FILE, unless set to an empty string
        - Reduced verbosity for httpx/httpcore, which log every outbound request
    """
    log_format = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'

    handlers = [logging.StreamHandler(sys.stdout)]
    if LOG_FILE:
        handlers.append(logging.FileHandler(LOG_FILE))

    logging.basicConfig(level=LOG_LEVEL, format=log_format, handlers=handlers)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name):
    """
    Returns a logger instance for a given module or component name.

    Args:
        name (str): The logger name, typically the module's __name__.

    Returns:
        logging.Logger: A logger that follows the global format and handlers.
    """
    return logging.getLogger(name)
