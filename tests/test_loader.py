from pathlib import Path

import pytest

from sqlcase import CONFIG, load_cases
from sqlcase.core.exceptions import (
    FixtureNotFoundException,
    MalformedFixtureException,
)
from sqlcase.loader import CaseProvider, parse_case_file, resolve_fixture


def test_bundled_sample_select_loads():
    cases = load_cases("/integration/v1/test_select_sample.yaml")
    assert len(cases) == 6
    assert [c.id for c in cases] == ["0", "1", "2", "3", "4", "5"]
    assert cases[0].name == "0_select all columns"
    assert all(c.db == "test_db" for c in cases)


@pytest.mark.parametrize(
    "path",
    [
        "/integration/v1/test_expression.yaml",
        "/integration/v1/test_udaf_function.yaml",
        "/integration/v1/test_sub_select.yaml",
    ],
)
def test_bundled_disabled_fixtures_are_well_formed(path):
    assert len(load_cases(path)) > 0


def test_missing_fixture_is_not_found():
    with pytest.raises(FixtureNotFoundException) as exc:
        load_cases("/integration/v1/missing.yaml")
    assert isinstance(exc.value, FileNotFoundError)
    assert exc.value.path == "/integration/v1/missing.yaml"


def test_root_override(fixture_dir: Path):
    cases = load_cases("/three_cases.yaml", root=fixture_dir)
    assert [c.desc for c in cases] == ["first", "second", "third"]


def test_config_root_override(fixture_dir: Path):
    with CONFIG.temporary(fixture_root=fixture_dir):
        assert len(load_cases("three_cases.yaml")) == 3
    with pytest.raises(FixtureNotFoundException):
        load_cases("three_cases.yaml")


def test_absolute_path_used_directly(fixture_dir: Path):
    target = fixture_dir / "three_cases.yaml"
    assert resolve_fixture(str(target)) == target


def test_debugs_filter_and_db_inheritance(fixture_dir: Path):
    provider = CaseProvider.from_path("debugs.yaml", root=fixture_dir)
    assert len(provider.case_file.cases) == 3
    assert len(provider) == 1
    case = provider.cases[0]
    assert case.desc == "wanted"
    assert case.db == "override_db"
    assert provider.case_file.cases[0].db == "other_db"


def test_invalid_yaml_is_malformed(fixture_dir: Path):
    with pytest.raises(MalformedFixtureException) as exc:
        load_cases("bad_yaml.yaml", root=fixture_dir)
    assert "invalid YAML" in str(exc.value)


def test_schema_error_is_malformed(fixture_dir: Path):
    with pytest.raises(MalformedFixtureException) as exc:
        load_cases("bad_schema.yaml", root=fixture_dir)
    assert "has 1 values, expected 2" in str(exc.value)


def test_non_mapping_document_is_malformed():
    with pytest.raises(MalformedFixtureException):
        parse_case_file("- just\n- a list\n")


def test_empty_document_is_malformed():
    with pytest.raises(MalformedFixtureException):
        parse_case_file("")


def test_case_without_statement_is_malformed():
    with pytest.raises(MalformedFixtureException):
        parse_case_file("cases:\n  - id: 1\n    desc: nothing to run\n")
