"""SQLAlchemy model for CBOE options market snapshots."""

import enum
from datetime import date, datetime
from typing import Any, Mapping, Tuple, Union

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Double,
    Identity,
    Index,
    Integer,
    PrimaryKeyConstraint,
    Text,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import validates
from sqlalchemy.sql.expression import FunctionElement

from cboe_options_snapshot.models.base import Base

TABLE_NAME = "t_options_cboe_snapshot"
PRIMARY_KEY_NAME = "t_options_cboe_snapshot_pk"

# Natural identity of a snapshot, in the order of the primary key constraint
NATURAL_KEY_COLUMNS = ("symbol", "call_put", "strike_price", "expiration", "last_updated_time")

# Secondary access paths: index name -> indexed column
INDEX_COLUMNS = {
    "idx_options_symbol": "symbol",
    "idx_options_expiration": "expiration",
    "idx_options_last_updated": "last_updated_time",
}


class next_snapshot_id(FunctionElement):
    """
    Insert-time value for the surrogate id when none is given.

    Renders DEFAULT so the identity column assigns it. SQLite ignores
    identity clauses, so there the next id is computed from the table.
    """
    name = "next_snapshot_id"
    type = Integer()
    inherit_cache = True


@compiles(next_snapshot_id)
def _next_snapshot_id_default(element, compiler, **kw):
    return "DEFAULT"


@compiles(next_snapshot_id, "sqlite")
def _next_snapshot_id_sqlite(element, compiler, **kw):
    return f"(SELECT COALESCE(MAX(id), 0) + 1 FROM {TABLE_NAME})"


class CallPut(str, enum.Enum):
    """Option side. Persisted as its plain text value."""
    CALL = "CALL"
    PUT = "PUT"

    @classmethod
    def parse(cls, value: Union["CallPut", str]) -> "CallPut":
        """Accepts CALL/PUT or C/P in any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized in ("C", "CALL"):
                return cls.CALL
            if normalized in ("P", "PUT"):
                return cls.PUT
        raise ValueError(f"Invalid call/put value: {value!r}")


class OptionSnapshot(Base):
    """
    One observed market state for an option contract at a point in time.

    Rows are identified by (symbol, call_put, strike_price, expiration,
    last_updated_time). The id column is assigned by the database and is not
    part of that identity.
    """
    __tablename__ = TABLE_NAME

    id = Column(Integer, Identity(), default=next_snapshot_id(), nullable=False, comment='Surrogate identifier assigned by the database')
    symbol = Column(Text, nullable=False, comment='Underlying ticker symbol (e.g., AAPL)')
    call_put = Column(Text, nullable=False, comment='Option side, CALL or PUT')
    expiration = Column(Text, nullable=False, comment='Contract expiration date, stored as text (YYYY-MM-DD)')
    strike_price = Column(Double, nullable=False, comment='Contract strike price')
    volume = Column(BigInteger, nullable=False, comment='Contracts traded')
    matched = Column(BigInteger, nullable=False, comment='Contracts matched on the exchange')
    routed = Column(BigInteger, nullable=False, comment='Contracts routed away')
    bid_size = Column(BigInteger, nullable=False)
    bid_price = Column(Double, nullable=False)
    ask_size = Column(BigInteger, nullable=False)
    ask_price = Column(Double, nullable=False)
    last_price = Column(Double, nullable=False, comment='Last traded price')
    last_updated_time = Column(DateTime(timezone=False), nullable=False, comment='When the source market data was last updated')
    etl_in_dt = Column(DateTime(timezone=False), nullable=False, comment='When the row was loaded into this store')

    __table_args__ = (
        PrimaryKeyConstraint(*NATURAL_KEY_COLUMNS, name=PRIMARY_KEY_NAME),
        *(Index(name, column) for name, column in INDEX_COLUMNS.items()),
        {'comment': 'Point-in-time CBOE options market snapshots, one row per contract per source update.'},
    )

    @validates("symbol")
    def _validate_symbol(self, key, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @validates("call_put")
    def _validate_call_put(self, key, value):
        return CallPut.parse(value).value

    @validates("expiration")
    def _validate_expiration(self, key, value):
        # datetime is a subclass of date, keep only the date part
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def natural_key(self) -> Tuple[str, str, float, str, datetime]:
        """The five values that identify this snapshot."""
        return tuple(getattr(self, column) for column in NATURAL_KEY_COLUMNS)

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        last_updated_time: datetime,
        etl_in_dt: datetime,
    ) -> "OptionSnapshot":
        """
        Builds a snapshot from one market data record keyed by column name.

        Numeric fields are coerced to the column types, so values read from a
        CSV file as strings are accepted.

        Raises:
            KeyError: If a market data field is missing from the record.
            ValueError: If a value cannot be converted.
        """
        return cls(
            symbol=record["symbol"],
            call_put=record["call_put"],
            expiration=record["expiration"],
            strike_price=float(record["strike_price"]),
            volume=int(record["volume"]),
            matched=int(record["matched"]),
            routed=int(record["routed"]),
            bid_size=int(record["bid_size"]),
            bid_price=float(record["bid_price"]),
            ask_size=int(record["ask_size"]),
            ask_price=float(record["ask_price"]),
            last_price=float(record["last_price"]),
            last_updated_time=last_updated_time,
            etl_in_dt=etl_in_dt,
        )

    def __repr__(self):
        return (f"<OptionSnapshot(symbol='{self.symbol}', call_put='{self.call_put}', "
                f"expiration='{self.expiration}', strike_price={self.strike_price}, "
                f"last_updated_time='{self.last_updated_time.isoformat() if self.last_updated_time else None}', "
                f"last_price={self.last_price})>")
