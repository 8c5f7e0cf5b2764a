from dataclasses import dataclass, field
from pathlib import Path

from tomllib import TOMLDecodeError, loads

from sqlcase.core.exceptions import ConfigurationException
from sqlcase.dialect import DialectConfig, DuckDBConfig, PostgresConfig
from sqlcase.dialect.enums import Dialects

CONFIG_NAME = "sqlcase.toml"


@dataclass
class RuntimeConfig:

    engine_dialect: Dialects | None = None
    engine_config: DialectConfig | None = None
    fixture_root: Path | None = None
    groups: dict[str, bool] = field(default_factory=dict)


def load_config_file(path: Path) -> RuntimeConfig:
    with open(path, "r") as f:
        toml_content = f.read()
    try:
        config_data = loads(toml_content)
    except TOMLDecodeError as e:
        raise ConfigurationException(f"Invalid config file {path}: {e}") from e

    engine_raw: dict = config_data.get("engine", {})
    engine_config_raw = engine_raw.get("config", {})
    try:
        engine = (
            Dialects(engine_raw.get("dialect")) if engine_raw.get("dialect") else None
        )
    except ValueError as e:
        raise ConfigurationException(
            f"Unknown dialect {engine_raw.get('dialect')} in {path}"
        ) from e
    engine_config: DialectConfig | None
    if engine == Dialects.DUCK_DB:
        engine_config = DuckDBConfig(**engine_config_raw) if engine_config_raw else None
    elif engine == Dialects.POSTGRES:
        engine_config = (
            PostgresConfig(**engine_config_raw) if engine_config_raw else None
        )
    else:
        engine_config = None

    fixtures: dict = config_data.get("fixtures", {})
    root = fixtures.get("root")
    groups: dict = config_data.get("groups", {})
    for name, enabled in groups.items():
        if not isinstance(enabled, bool):
            raise ConfigurationException(
                f"Group override {name} must be true or false, got {enabled!r}"
            )
    return RuntimeConfig(
        engine_dialect=engine,
        engine_config=engine_config,
        fixture_root=path.parent / root if root else None,
        groups=groups,
    )


def find_config(start_path: Path | None = None) -> Path | None:
    """
    Search for sqlcase.toml starting from the given path, walking up parent directories.
    """
    current = (start_path or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None
