"""Schema definition and database initialization for the snapshot table."""

from .schema import (
    SchemaStatus,
    apply_schema,
    drop_schema,
    render_ddl,
    schema_status,
)

__all__ = [
    "SchemaStatus",
    "apply_schema",
    "drop_schema",
    "render_ddl",
    "schema_status",
]
