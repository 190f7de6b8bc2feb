"""
Error handling utilities for GenHPP.

Logging is configured here once for the whole package. The core calculators
wrap their entry points in ``error_handler`` so that any unexpected failure
reaches the caller as a ``GenHPPError`` carrying where it happened and with
which inputs.
"""

import logging
import os
import sys
import traceback
from functools import wraps

# Stdout always; a log file only off serverless (read-only filesystem)
_handlers = [logging.StreamHandler(sys.stdout)]
if not os.getenv("VERCEL"):
    _handlers.append(logging.FileHandler(os.getenv("GENHPP_LOG_FILE", "genhpp.log")))

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)

logger = logging.getLogger(__name__)


class GenHPPError(Exception):
    """Raised when a calculator fails on its inputs."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


def error_handler(func):
    """Re-raise anything but GenHPPError as GenHPPError, logging the failing frame."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GenHPPError:
            raise
        except Exception as exc:
            frame = traceback.extract_tb(exc.__traceback__)[-1]
            details = {
                "error_type": type(exc).__name__,
                "function": func.__name__,
                "location": f"{frame.filename}:{frame.lineno}",
                "inputs": {"args": repr(args), "kwargs": repr(kwargs)},
            }
            logger.error("%s failed at %s: %s", func.__name__, details["location"], exc)
            logger.debug("Traceback for %s:\n%s", func.__name__, traceback.format_exc())
            raise GenHPPError(f"{func.__name__}: {exc}", details) from exc

    return wrapper
