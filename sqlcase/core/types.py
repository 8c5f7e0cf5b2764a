from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel


class ColumnType(Enum):
    BOOL = "bool"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    TIMESTAMP = "timestamp"
    DATE = "date"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in TYPE_ALIASES:
                return TYPE_ALIASES[lowered]
            if lowered != value:
                return cls(lowered)
        return super()._missing_(value)

    @property
    def sql_type(self) -> str:
        return SQL_TYPE_MAP[self]

    def coerce(self, value: Any) -> Any:
        """Convert a fixture literal into the python value the engine returns."""
        if value is None:
            return None
        if self == ColumnType.BOOL:
            if isinstance(value, str):
                return value.strip().lower() in ("true", "1", "t", "yes")
            return bool(value)
        if self in (ColumnType.INT16, ColumnType.INT32, ColumnType.INT64):
            return int(value)
        if self in (ColumnType.FLOAT, ColumnType.DOUBLE):
            return float(value)
        if self == ColumnType.STRING:
            return str(value)
        if self == ColumnType.TIMESTAMP:
            if isinstance(value, datetime):
                return value
            if isinstance(value, (int, float)):
                # epoch milliseconds
                return datetime.fromtimestamp(value / 1000, tz=timezone.utc).replace(
                    tzinfo=None
                )
            return datetime.fromisoformat(str(value))
        if self == ColumnType.DATE:
            if isinstance(value, datetime):
                return value.date()
            if isinstance(value, date):
                return value
            return date.fromisoformat(str(value))
        raise ValueError(f"Cannot coerce value for type {self}")


TYPE_ALIASES = {
    "boolean": ColumnType.BOOL,
    "smallint": ColumnType.INT16,
    "i16": ColumnType.INT16,
    "int": ColumnType.INT32,
    "integer": ColumnType.INT32,
    "i32": ColumnType.INT32,
    "bigint": ColumnType.INT64,
    "i64": ColumnType.INT64,
    "real": ColumnType.FLOAT,
    "varchar": ColumnType.STRING,
    "text": ColumnType.STRING,
}

SQL_TYPE_MAP = {
    ColumnType.BOOL: "BOOLEAN",
    ColumnType.INT16: "SMALLINT",
    ColumnType.INT32: "INTEGER",
    ColumnType.INT64: "BIGINT",
    ColumnType.FLOAT: "REAL",
    ColumnType.DOUBLE: "DOUBLE PRECISION",
    ColumnType.STRING: "VARCHAR",
    ColumnType.TIMESTAMP: "TIMESTAMP",
    ColumnType.DATE: "DATE",
}


class Column(BaseModel):
    name: str
    type: ColumnType

    @classmethod
    def parse(cls, raw: str) -> "Column":
        """Parse a "<name> <type>" column declaration."""
        parts = raw.split()
        if len(parts) != 2:
            raise ValueError(
                f"Column declaration '{raw}' must be of the form '<name> <type>'"
            )
        return cls(name=parts[0], type=ColumnType(parts[1]))

    def __str__(self):
        return f"{self.name} {self.type.value}"


class Index(BaseModel):
    name: str
    keys: list[str]
    ts: str | None = None

    @classmethod
    def parse(cls, raw: str) -> "Index":
        """Parse a "name:key1|key2:ts" index declaration."""
        parts = raw.split(":")
        if len(parts) < 2 or len(parts) > 3 or not parts[0] or not parts[1]:
            raise ValueError(
                f"Index declaration '{raw}' must be of the form 'name:keys[:ts]'"
            )
        return cls(
            name=parts[0],
            keys=parts[1].split("|"),
            ts=parts[2] if len(parts) == 3 and parts[2] else None,
        )
