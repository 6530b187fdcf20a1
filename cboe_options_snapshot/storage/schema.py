"""Idempotent schema operations for the options snapshot table."""

import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy import inspect
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateIndex, CreateTable, DropTable, ExecutableDDLElement

from cboe_options_snapshot.models import (
    INDEX_COLUMNS,
    NATURAL_KEY_COLUMNS,
    OptionSnapshot,
    TABLE_NAME,
)

logger = logging.getLogger(__name__)

SNAPSHOT_TABLE = OptionSnapshot.__table__

# Dialects the DDL script can be rendered for
DDL_DIALECTS = {
    "postgresql": postgresql.dialect,
    "sqlite": sqlite.dialect,
}


@dataclass
class SchemaStatus:
    """What of the snapshot schema is present in a live database."""
    table_exists: bool
    present_indexes: List[str] = field(default_factory=list)
    missing_indexes: List[str] = field(default_factory=list)
    missing_columns: List[str] = field(default_factory=list)
    primary_key_columns: List[str] = field(default_factory=list)

    @property
    def primary_key_matches(self) -> bool:
        return list(self.primary_key_columns) == list(NATURAL_KEY_COLUMNS)

    @property
    def is_applied(self) -> bool:
        return (self.table_exists
                and not self.missing_indexes
                and not self.missing_columns
                and self.primary_key_matches)

    def report(self) -> str:
        """Human readable, one line per check."""
        lines = [f"table {TABLE_NAME}: {'present' if self.table_exists else 'missing'}"]
        for name in INDEX_COLUMNS:
            state = "present" if name in self.present_indexes else "missing"
            lines.append(f"index {name}: {state}")
        if self.table_exists:
            if self.missing_columns:
                lines.append(f"missing columns: {', '.join(self.missing_columns)}")
            pk_state = "ok" if self.primary_key_matches else f"mismatch ({', '.join(self.primary_key_columns) or 'none'})"
            lines.append(f"primary key: {pk_state}")
        lines.append(f"applied: {'yes' if self.is_applied else 'no'}")
        return "\n".join(lines)


def schema_statements() -> List[ExecutableDDLElement]:
    """CREATE TABLE IF NOT EXISTS followed by one CREATE INDEX IF NOT EXISTS per index."""
    statements: List[ExecutableDDLElement] = [CreateTable(SNAPSHOT_TABLE, if_not_exists=True)]
    # Sorted by name so the script is stable between runs
    for index in sorted(SNAPSHOT_TABLE.indexes, key=lambda ix: ix.name):
        statements.append(CreateIndex(index, if_not_exists=True))
    return statements


def apply_schema(engine: Engine) -> None:
    """
    Ensures the snapshot table and its indexes exist.

    Every statement carries an IF NOT EXISTS guard, so applying the schema
    again is a no-op. Indexes are ensured even when the table already
    existed. An existing table with a different shape is left untouched.

    Args:
        engine: SQLAlchemy engine for the target database.

    Raises:
        SQLAlchemyError: Whatever the database reports (privileges, storage,
                         incompatible existing relation), after logging it.
    """
    logger.info(f"Applying schema for table '{TABLE_NAME}'...")
    try:
        with engine.begin() as conn:
            for statement in schema_statements():
                logger.debug(f"Executing: {statement.compile(dialect=engine.dialect)}")
                conn.execute(statement)
    except SQLAlchemyError as e:
        logger.error(f"Failed to apply schema for table '{TABLE_NAME}': {e}")
        raise
    logger.info(f"Schema for table '{TABLE_NAME}' is in place ({len(INDEX_COLUMNS)} indexes ensured).")


def drop_schema(engine: Engine) -> None:
    """Drops the snapshot table if it exists. Its indexes go with it."""
    logger.warning(f"Dropping table '{TABLE_NAME}' if it exists...")
    try:
        with engine.begin() as conn:
            conn.execute(DropTable(SNAPSHOT_TABLE, if_exists=True))
    except SQLAlchemyError as e:
        logger.error(f"Failed to drop table '{TABLE_NAME}': {e}")
        raise
    logger.info(f"Table '{TABLE_NAME}' dropped (or did not exist).")


def render_ddl(dialect_name: str = "postgresql") -> str:
    """
    Renders the idempotent DDL script for the given dialect.

    The script holds the same statements apply_schema executes, each
    terminated by a semicolon, suitable for an external migration tool.

    Raises:
        ValueError: If the dialect is not supported.
    """
    try:
        dialect = DDL_DIALECTS[dialect_name]()
    except KeyError:
        raise ValueError(
            f"Unsupported dialect '{dialect_name}', expected one of: {', '.join(sorted(DDL_DIALECTS))}"
        ) from None

    rendered = [str(statement.compile(dialect=dialect)).strip() for statement in schema_statements()]
    return ";\n\n".join(rendered) + ";\n"


def schema_status(engine: Engine) -> SchemaStatus:
    """Inspects the database and reports which parts of the schema exist."""
    inspector = inspect(engine)
    expected_indexes = list(INDEX_COLUMNS)

    if not inspector.has_table(TABLE_NAME):
        logger.info(f"Table '{TABLE_NAME}' does not exist.")
        return SchemaStatus(table_exists=False, missing_indexes=expected_indexes)

    existing_columns = {column["name"] for column in inspector.get_columns(TABLE_NAME)}
    missing_columns = [column.name for column in SNAPSHOT_TABLE.columns if column.name not in existing_columns]

    existing_indexes = {index["name"] for index in inspector.get_indexes(TABLE_NAME)}
    present = [name for name in expected_indexes if name in existing_indexes]
    missing = [name for name in expected_indexes if name not in existing_indexes]

    primary_key_columns = inspector.get_pk_constraint(TABLE_NAME).get("constrained_columns") or []

    status = SchemaStatus(
        table_exists=True,
        present_indexes=present,
        missing_indexes=missing,
        missing_columns=missing_columns,
        primary_key_columns=list(primary_key_columns),
    )
    logger.info(f"Schema status for '{TABLE_NAME}': applied={status.is_applied}")
    return status
