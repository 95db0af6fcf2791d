"""Utilities module for tpadmin."""

from utils.logging_utils import configure_logging, log_success
from utils.run_count_store import RunCountStore

__all__ = ["configure_logging", "log_success", "RunCountStore"]
