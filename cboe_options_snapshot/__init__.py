"""Schema for point-in-time CBOE options market snapshots."""

from cboe_options_snapshot.models import CallPut, OptionSnapshot
from cboe_options_snapshot.storage import apply_schema, render_ddl, schema_status

__version__ = "0.1.0"

__all__ = [
    "CallPut",
    "OptionSnapshot",
    "apply_schema",
    "render_ddl",
    "schema_status",
]
