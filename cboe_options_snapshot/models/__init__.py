# cboe_options_snapshot/models/__init__.py
"""Data models for the cboe_options_snapshot package."""

from .base import Base
from .option_snapshot import (
    INDEX_COLUMNS,
    NATURAL_KEY_COLUMNS,
    PRIMARY_KEY_NAME,
    TABLE_NAME,
    CallPut,
    OptionSnapshot,
)

__all__ = [
    "Base",
    "CallPut",
    "OptionSnapshot",
    "TABLE_NAME",
    "PRIMARY_KEY_NAME",
    "NATURAL_KEY_COLUMNS",
    "INDEX_COLUMNS",
]
