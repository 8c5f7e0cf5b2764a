from dataclasses import dataclass, field
from typing import Any, List

from jinja2 import Template
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from sqlcase.constants import logger
from sqlcase.core.models import InputTable
from sqlcase.dialect.enums import Dialects
from sqlcase.engine import EngineConnection, ExecutionEngine, ResultProtocol
from sqlcase.hooks.base_hook import BaseHook

CREATE_TEMPLATE = Template(
    """CREATE TABLE {{ name }} (
{%- for column in columns %}
    {{ column.name }} {{ column.type.sql_type }}{% if not loop.last %},{% endif %}{% endfor %}
)"""
)

INSERT_TEMPLATE = Template(
    """INSERT INTO {{ name }} ({% for column in columns %}{{ column.name }}{% if not loop.last %}, {% endif %}{% endfor %})
VALUES ({% for column in columns %}:p{{ loop.index0 }}{% if not loop.last %}, {% endif %}{% endfor %})"""
)


@dataclass
class ExecutionResult:
    columns: list[str] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.rows)


class ExecutionContext(object):
    """Shared handle to the engine under test.

    Every dispatched case borrows the same connection; cases are expected
    to drop whatever tables they create.
    """

    def __init__(
        self,
        dialect: Dialects,
        engine: ExecutionEngine,
        hooks: List[BaseHook] | None = None,
    ):
        self.dialect = dialect
        self.engine = engine
        self.hooks = hooks or []
        self.logger = logger
        self.connection = self.connect()

    def connect(self) -> EngineConnection:
        self.connection = self.engine.connect()
        self.connected = True
        return self.connection

    def close(self):
        self.connection.close()
        self.engine.dispose(close=True)
        self.connected = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _run(self, sql: str, parameters: Any | None = None):
        for hook in self.hooks:
            hook.process_statement(sql)
        try:
            result: ResultProtocol
            if parameters is not None:
                result = self.connection.execute(text(sql), parameters)
            else:
                result = self.connection.execute(text(sql))
            if result.returns_rows:
                output = ExecutionResult(
                    columns=list(result.keys()),
                    rows=[list(row) for row in result.fetchall()],
                )
            else:
                output = ExecutionResult()
            self.connection.commit()
        except SQLAlchemyError:
            self.connection.rollback()
            raise
        return output

    def execute(self, sql: str) -> ExecutionResult:
        self.logger.debug(f"Executing: {sql}")
        return self._run(sql)

    def create_table(self, table: InputTable) -> None:
        if table.create:
            sql = table.create.replace("{0}", table.name)
        else:
            sql = CREATE_TEMPLATE.render(name=table.name, columns=table.columns)
        self.logger.debug(f"Creating table {table.name}")
        self._run(sql)

    def insert_rows(self, table: InputTable) -> None:
        if table.insert:
            self._run(table.insert.replace("{0}", table.name))
            return
        if not table.rows:
            return
        sql = INSERT_TEMPLATE.render(name=table.name, columns=table.columns)
        parameters = [
            {f"p{idx}": value for idx, value in enumerate(row)}
            for row in table.coerced_rows
        ]
        self.logger.debug(f"Inserting {len(parameters)} rows into {table.name}")
        self._run(sql, parameters)

    def drop_table(self, name: str) -> None:
        self._run(f"DROP TABLE IF EXISTS {name}")

    def table_exists(self, name: str) -> bool:
        result = self._run(
            "SELECT count(*) FROM information_schema.tables WHERE table_name = :name",
            {"name": name},
        )
        return bool(result.rows[0][0])
