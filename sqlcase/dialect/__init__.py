from .config import DialectConfig, DuckDBConfig, PostgresConfig
from .enums import Dialects

__all__ = [
    "Dialects",
    "DialectConfig",
    "DuckDBConfig",
    "PostgresConfig",
]
