"""Logging utility configuration for the service calendar converter.

This module provides a centralized logger configuration for the calendar conversion steps.
The logger is configured to output to stdout with a consistent format across all modules.

Usage:
    from common.logging_utils import logger
    logger.info("Your message here")
"""

import logging
import os
import sys

# Create a logger with a specific name for the calendar converter
logger = logging.getLogger("service_calendar")

# Configure the logger only if it doesn't already have handlers
# This prevents duplicate handlers when the module is imported multiple times
if not logger.hasHandlers():
    # Create a stream handler that outputs to stdout
    handler = logging.StreamHandler(sys.stdout)

    # Format: "INFO - Your log message here"
    formatter = logging.Formatter(
        fmt='%(levelname)s - %(message)s'
    )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

# LOG_LEVEL may be a level name (DEBUG, INFO, ...); anything unknown falls back to INFO
logger.setLevel(getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))

# Allow log messages to propagate to parent loggers (pytest's caplog relies on it)
logger.propagate = True
