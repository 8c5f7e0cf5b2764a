from pathlib import Path

import pytest

from sqlcase import SUITE, CaseGroup
from sqlcase.core.exceptions import (
    FixtureNotFoundException,
    MalformedFixtureException,
)
from sqlcase.executor import CaseResult, CaseStatus, ExecutorFactory
from sqlcase.loader import load_cases
from sqlcase.suite import SAMPLE_SELECT, dispatch, run_group
from sqlcase.testing import case_params


class PassingRun:
    def __init__(self, case):
        self.case = case

    def run(self):
        return CaseResult(name=self.case.name, status=CaseStatus.PASSED)


class CountingFactory:
    def __init__(self):
        self.calls = []

    def build(self, context, case):
        self.calls.append((context, case))
        return PassingRun(case)


def test_inventory():
    assert [g.name for g in SUITE.groups] == [
        "sample_select",
        "expression",
        "udaf_function",
        "sub_select",
    ]
    assert [g.name for g in SUITE.enabled] == ["sample_select"]
    assert all(g.reason for g in SUITE.disabled)
    assert SUITE.get("expression").path == "/integration/v1/test_expression.yaml"
    with pytest.raises(KeyError):
        SUITE.get("nope")


def test_overrides():
    suite = SUITE.with_overrides({"expression": True, "sample_select": False})
    assert suite.get("expression").enabled
    assert not suite.get("sample_select").enabled
    assert SUITE.get("sample_select").enabled
    with pytest.raises(KeyError):
        SUITE.with_overrides({"unknown": True})


def test_three_cases_dispatch_three_times(executor, fixture_dir: Path):
    group = CaseGroup(name="three", path="/three_cases.yaml")
    factory = CountingFactory()
    report = run_group(executor, group, root=fixture_dir, factory=factory)
    assert len(factory.calls) == 3
    assert all(context is executor for context, _ in factory.calls)
    assert report.passed == 3


def test_enabled_group_dispatch_matches_fixture(executor):
    factory = CountingFactory()
    report = run_group(executor, SAMPLE_SELECT, factory=factory)
    assert len(factory.calls) == len(load_cases(SAMPLE_SELECT.path))
    assert report.ok


def test_disabled_groups_never_execute(executor):
    factory = CountingFactory()
    broken = CaseGroup(
        name="broken", path="/integration/v1/missing.yaml", enabled=False
    )
    for group in [*SUITE.disabled, broken]:
        report = run_group(executor, group, factory=factory)
        assert report.results == []
        assert report.error is None
    assert factory.calls == []
    assert broken.load() == []


def test_disabled_group_params_are_skipped():
    broken = CaseGroup(
        name="broken", path="/integration/v1/missing.yaml", enabled=False
    )
    params = case_params(broken)
    assert len(params) == 1
    assert params[0].marks[0].name == "skip"


def test_missing_fixture_dispatches_nothing(executor):
    factory = CountingFactory()
    group = CaseGroup(name="missing", path="/integration/v1/missing.yaml")
    report = run_group(executor, group, factory=factory)
    assert isinstance(report.error, FixtureNotFoundException)
    assert factory.calls == []
    assert not report.ok
    with pytest.raises(FileNotFoundError):
        case_params(group)


def test_one_failing_case_reports_one_failure(executor, fixture_dir: Path):
    group = CaseGroup(name="one_failing", path="/one_failing.yaml")
    report = run_group(executor, group, root=fixture_dir)
    assert [r.status for r in report.results] == [
        CaseStatus.PASSED,
        CaseStatus.FAILED,
        CaseStatus.PASSED,
    ]
    assert report.failed == 1
    assert report.results[1].name == "1_wrong rows"


def test_short_expected_row_fails_only_its_case(executor, fixture_dir: Path):
    group = CaseGroup(name="short_order_row", path="/short_order_row.yaml")
    report = run_group(executor, group, root=fixture_dir)
    assert [r.status for r in report.results] == [
        CaseStatus.FAILED,
        CaseStatus.PASSED,
    ]
    assert "no value for order column b" in str(report.results[0].error)


class ExplodingRun:
    def run(self):
        raise RuntimeError("executor blew up")


class SometimesExplodingFactory:
    def build(self, context, case):
        if case.desc == "second":
            return ExplodingRun()
        return PassingRun(case)


def test_internal_error_fails_only_its_case(executor, fixture_dir: Path):
    group = CaseGroup(name="three", path="/three_cases.yaml")
    report = run_group(
        executor, group, root=fixture_dir, factory=SometimesExplodingFactory()
    )
    assert [r.status for r in report.results] == [
        CaseStatus.PASSED,
        CaseStatus.FAILED,
        CaseStatus.PASSED,
    ]
    assert isinstance(report.results[1].error, RuntimeError)


def test_undecodable_fixture_is_setup_failure(executor, tmp_path: Path):
    (tmp_path / "latin1.yaml").write_bytes(
        "cases:\n  - id: 0\n    desc: caf\u00e9\n    sql: select 1\n".encode("latin-1")
    )
    factory = CountingFactory()
    group = CaseGroup(name="latin1", path="/latin1.yaml")
    report = run_group(executor, group, root=tmp_path, factory=factory)
    assert isinstance(report.error, MalformedFixtureException)
    assert "invalid encoding" in str(report.error)
    assert factory.calls == []

def test_sample_select_runs_clean(executor):
    report = run_group(executor, SAMPLE_SELECT)
    assert report.failed == 0, [str(r.error) for r in report.results if r.error]
    assert report.passed == 6


@pytest.mark.parametrize("name", ["expression", "udaf_function", "sub_select"])
def test_disabled_fixtures_run_on_duckdb(executor, name):
    group = SUITE.get(name).with_enabled(True)
    results = dispatch(executor, group.load(), factory=ExecutorFactory)
    assert all(r.status == CaseStatus.PASSED for r in results), [
        str(r.error) for r in results if r.error
    ]
