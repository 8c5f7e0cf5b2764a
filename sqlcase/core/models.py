from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sqlcase.constants import AUTO_TABLE_PREFIX, DEFAULT_DB
from sqlcase.core.types import Column, Index


def generate_table_name() -> str:
    return f"{AUTO_TABLE_PREFIX}{uuid4().hex[:12]}"


class InputTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(default_factory=generate_table_name)
    columns: list[Column] = Field(default_factory=list)
    indexs: list[Index] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)
    create: str | None = None
    insert: str | None = None

    @field_validator("columns", mode="before")
    @classmethod
    def parse_columns(cls, v):
        return [Column.parse(x) if isinstance(x, str) else x for x in v or []]

    @field_validator("indexs", mode="before")
    @classmethod
    def parse_indexs(cls, v):
        return [Index.parse(x) if isinstance(x, str) else x for x in v or []]

    @field_validator("rows", mode="before")
    @classmethod
    def default_rows(cls, v):
        return v or []

    @model_validator(mode="after")
    def check_row_width(self):
        width = len(self.columns)
        for idx, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {idx} of table {self.name} has {len(row)} values, expected {width}"
                )
            for col, value in zip(self.columns, row):
                try:
                    col.type.coerce(value)
                except (TypeError, ValueError) as e:
                    raise ValueError(
                        f"Row {idx} of table {self.name}: bad value {value!r} for {col}: {e}"
                    ) from e
        return self

    @property
    def coerced_rows(self) -> list[list[Any]]:
        return [
            [col.type.coerce(value) for col, value in zip(self.columns, row)]
            for row in self.rows
        ]


class ExpectDesc(BaseModel):
    model_config = ConfigDict(frozen=True)

    columns: list[Column] = Field(default_factory=list)
    rows: list[list[Any]] | None = None
    order: str | None = None
    count: int | None = None
    success: bool = True

    @field_validator("columns", mode="before")
    @classmethod
    def parse_columns(cls, v):
        return [Column.parse(x) if isinstance(x, str) else x for x in v or []]

    @model_validator(mode="after")
    def check_order_column(self):
        if self.order and self.columns:
            if self.order.lower() not in [c.name.lower() for c in self.columns]:
                raise ValueError(
                    f"Order column {self.order} is not one of the expected columns"
                )
        if self.rows is not None and self.columns:
            width = len(self.columns)
            for idx, row in enumerate(self.rows):
                if len(row) != width:
                    raise ValueError(
                        f"Expected row {idx} has {len(row)} values, expected {width}"
                    )
                for col, value in zip(self.columns, row):
                    try:
                        col.type.coerce(value)
                    except (TypeError, ValueError) as e:
                        raise ValueError(
                            f"Expected row {idx}: bad value {value!r} for {col}: {e}"
                        ) from e
        return self

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def coerced_rows(self) -> list[list[Any]] | None:
        if self.rows is None:
            return None
        if not self.columns:
            return [list(row) for row in self.rows]
        return [
            [col.type.coerce(value) for col, value in zip(self.columns, row)]
            for row in self.rows
        ]


class SQLCase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    desc: str = ""
    mode: str | None = None
    db: str | None = None
    sql: str | None = None
    sqls: list[str] = Field(default_factory=list)
    inputs: list[InputTable] = Field(default_factory=list)
    expect: ExpectDesc | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        if v is None:
            raise ValueError("Case id is required")
        return str(v)

    @field_validator("sqls", "tags", "inputs", mode="before")
    @classmethod
    def default_lists(cls, v):
        return v or []

    @model_validator(mode="after")
    def check_statement(self):
        if not self.sql and not self.sqls:
            raise ValueError(f"Case {self.id} defines neither sql nor sqls")
        return self

    @property
    def name(self) -> str:
        if self.desc:
            return f"{self.id}_{self.desc}"
        return self.id

    @property
    def table_names(self) -> list[str]:
        return [t.name for t in self.inputs]

    def render(self, sql: str) -> str:
        """Substitute positional table placeholders ({0}, {1}, ...)."""
        rendered = sql
        for idx, table in enumerate(self.table_names):
            rendered = rendered.replace("{" + str(idx) + "}", table)
        return rendered


class CaseFile(BaseModel):
    db: str = DEFAULT_DB
    debugs: list[str] = Field(default_factory=list)
    cases: list[SQLCase] = Field(default_factory=list)

    @field_validator("debugs", "cases", mode="before")
    @classmethod
    def default_lists(cls, v):
        return v or []

    @model_validator(mode="before")
    @classmethod
    def inherit_db(cls, data):
        if isinstance(data, dict):
            db = data.get("db") or DEFAULT_DB
            cases = data.get("cases") or []
            data = {
                **data,
                "db": db,
                "cases": [
                    {**case, "db": case.get("db") or db}
                    if isinstance(case, dict)
                    else case
                    for case in cases
                ],
            }
        return data

    @property
    def selected_cases(self) -> list[SQLCase]:
        if not self.debugs:
            return list(self.cases)
        return [case for case in self.cases if case.desc in self.debugs]
