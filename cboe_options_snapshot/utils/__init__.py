# cboe_options_snapshot/utils/__init__.py
"""Utility functions for the cboe_options_snapshot package."""

from .logging_config import setup_logging

__all__ = [
    "setup_logging",
]
