from pathlib import Path as PathlibPath

from click import Path, argument, group, option, pass_context
from click.exceptions import Exit

from sqlcase.constants import CONFIG
from sqlcase.core.exceptions import ConfigurationException
from sqlcase.dialect.enums import Dialects
from sqlcase.execution.config import RuntimeConfig, find_config, load_config_file
from sqlcase.hooks.query_debugger import DebuggingHook
from sqlcase.scripts.display import (
    print_error,
    print_info,
    show_inventory,
    show_report,
)
from sqlcase.suite import SUITE, CaseGroup, Suite, run_group


def resolve_runtime(config: str | None) -> RuntimeConfig:
    path = PathlibPath(config) if config else find_config()
    if path is None:
        return RuntimeConfig()
    print_info(f"Using config {path}")
    try:
        return load_config_file(path)
    except ConfigurationException as e:
        print_error(str(e))
        raise Exit(1)


def resolve_suite(runtime: RuntimeConfig) -> Suite:
    try:
        return SUITE.with_overrides(runtime.groups)
    except KeyError as e:
        print_error(str(e))
        raise Exit(1)


def select_groups(suite: Suite, targets: tuple[str, ...], run_all: bool):
    if not targets:
        if run_all:
            return [g.with_enabled(True) for g in suite.groups]
        return list(suite.groups)
    selected = []
    names = {g.name for g in suite.groups}
    for target in targets:
        if target in names:
            group = suite.get(target)
        else:
            local = PathlibPath(target)
            path = str(local.resolve()) if local.is_file() else target
            group = CaseGroup(name=local.stem, path=path)
        selected.append(group.with_enabled(True) if run_all else group)
    return selected


@group()
@option("--debug", is_flag=True, default=False, help="Enable debug mode")
@pass_context
def cli(ctx, debug: bool):
    """sqlcase - run YAML SQL fixtures against a database engine."""
    ctx.ensure_object(dict)
    ctx.obj["DEBUG"] = debug


@cli.command("list")
@option("--config", type=Path(exists=True), help="Path to sqlcase.toml")
def list_groups(config):
    """Show every case group and whether it is enabled."""
    runtime = resolve_runtime(config)
    show_inventory(resolve_suite(runtime))


@cli.command("run")
@argument("targets", nargs=-1)
@option("--dialect", type=str, default=None, help="Engine dialect (default duckdb)")
@option("--config", type=Path(exists=True), help="Path to sqlcase.toml")
@option("--all", "run_all", is_flag=True, default=False, help="Run disabled groups too")
@pass_context
def run(ctx, targets, dialect: str | None, config, run_all: bool):
    """Run case groups by name, or fixture files by path."""
    runtime = resolve_runtime(config)
    suite = resolve_suite(runtime)
    try:
        engine_dialect = (
            Dialects(dialect) if dialect else runtime.engine_dialect or Dialects.DUCK_DB
        )
    except ValueError:
        print_error(f"Unknown dialect {dialect}")
        raise Exit(1)
    hooks = [DebuggingHook()] if ctx.obj["DEBUG"] else None
    groups = select_groups(suite, targets, run_all)
    root = runtime.fixture_root or CONFIG.fixture_root
    failed = False
    with engine_dialect.default_context(
        conf=runtime.engine_config, hooks=hooks
    ) as context:
        for case_group in groups:
            report = run_group(context, case_group, root=root)
            show_report(report)
            failed = failed or not report.ok
    if failed:
        raise Exit(1)


if __name__ == "__main__":
    cli()
