import importlib.util
from enum import Enum
from typing import TYPE_CHECKING, Callable, List

from sqlcase.constants import logger
from sqlcase.dialect.config import DialectConfig

if TYPE_CHECKING:
    from sqlcase.context import ExecutionContext
    from sqlcase.hooks.base_hook import BaseHook


def default_factory(conf: DialectConfig, config_type):
    from sqlalchemy import create_engine

    if not isinstance(conf, config_type):
        raise TypeError(
            f"Invalid dialect configuration for type {config_type.__name__}, is {type(conf)}"
        )
    if conf.connect_args:
        return create_engine(
            conf.connection_string(), future=True, connect_args=conf.connect_args
        )
    return create_engine(conf.connection_string(), future=True)


class Dialects(Enum):
    DUCK_DB = "duck_db"
    POSTGRES = "postgres"

    @classmethod
    def _missing_(cls, value):
        if value == "duckdb":
            return cls.DUCK_DB
        if value == "postgresql":
            return cls.POSTGRES
        return super()._missing_(value)

    def default_engine(self, conf=None, _engine_factory: Callable = default_factory):
        if self == Dialects.DUCK_DB:
            from sqlcase.dialect.config import DuckDBConfig

            if not conf:
                conf = DuckDBConfig()
            return _engine_factory(conf, DuckDBConfig)
        elif self == Dialects.POSTGRES:
            spec = importlib.util.find_spec("psycopg2")
            if spec is None:
                raise ImportError(
                    "postgres driver not installed. python -m pip install sqlcase[postgres]"
                )
            from sqlcase.dialect.config import PostgresConfig

            return _engine_factory(conf, PostgresConfig)
        raise ValueError(
            f"Unsupported dialect {self} for default engine creation; create one explicitly."
        )

    def default_context(
        self,
        conf: DialectConfig | None = None,
        hooks: List["BaseHook"] | None = None,
        _engine_factory: Callable | None = None,
    ) -> "ExecutionContext":
        from sqlcase.context import ExecutionContext

        logger.debug(f"Creating execution context for {self.value}")
        if _engine_factory is not None:
            engine = self.default_engine(conf=conf, _engine_factory=_engine_factory)
        else:
            engine = self.default_engine(conf=conf)
        return ExecutionContext(dialect=self, engine=engine, hooks=hooks)
