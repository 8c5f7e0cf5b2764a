from datetime import datetime
from decimal import Decimal

import pytest

from sqlcase.checker import build_checkers, sort_rows, values_equal
from sqlcase.context import ExecutionResult
from sqlcase.core.exceptions import ResultMismatchException
from sqlcase.core.models import SQLCase


def make_case(expect: dict) -> SQLCase:
    return SQLCase.model_validate({"id": 0, "sql": "select 1", "expect": expect})


def run_checks(case: SQLCase, result: ExecutionResult):
    for checker in build_checkers(case):
        checker.check(result)


def test_values_equal():
    assert values_equal(1.1000000238, 1.1)
    assert not values_equal(1.2, 1.1)
    assert values_equal(Decimal("3.50"), 3.5)
    assert values_equal(None, None)
    assert not values_equal(None, 0)
    assert not values_equal(2, 3)
    assert values_equal("a", "a")


def test_sort_rows_handles_nulls():
    rows = [[2, "b"], [None, "c"], [1, "a"]]
    assert sort_rows(rows) == [[1, "a"], [2, "b"], [None, "c"]]
    assert sort_rows(rows, 1) == [[1, "a"], [2, "b"], [None, "c"]]


def test_no_expect_means_no_checkers():
    assert build_checkers(SQLCase(id=0, sql="select 1")) == []


def test_columns_checker():
    case = make_case({"columns": ["a int", "b string"]})
    run_checks(case, ExecutionResult(columns=["A", "b"], rows=[]))
    with pytest.raises(ResultMismatchException) as exc:
        run_checks(case, ExecutionResult(columns=["a"], rows=[]))
    assert "column mismatch" in str(exc.value)


def test_count_checker():
    case = make_case({"count": 2})
    run_checks(case, ExecutionResult(columns=["a"], rows=[[1], [2]]))
    with pytest.raises(ResultMismatchException):
        run_checks(case, ExecutionResult(columns=["a"], rows=[[1]]))


def test_rows_checker_unordered_and_coerced():
    case = make_case(
        {
            "columns": ["a string", "t timestamp"],
            "rows": [["y", 1590738990000], ["x", 1590738989000]],
        }
    )
    run_checks(
        case,
        ExecutionResult(
            columns=["a", "t"],
            rows=[
                ["x", datetime(2020, 5, 29, 7, 56, 29)],
                ["y", datetime(2020, 5, 29, 7, 56, 30)],
            ],
        ),
    )


def test_rows_checker_reports_row():
    case = make_case({"columns": ["a int"], "order": "a", "rows": [[1], [3]]})
    with pytest.raises(ResultMismatchException) as exc:
        run_checks(case, ExecutionResult(columns=["a"], rows=[[1], [2]]))
    assert "row 1 mismatch" in str(exc.value)


def test_rows_checker_missing_order_column():
    case = make_case({"order": "z", "rows": [[1]]})
    with pytest.raises(ResultMismatchException):
        run_checks(case, ExecutionResult(columns=["a"], rows=[[1]]))


def test_rows_checker_short_expected_row_with_order():
    case = make_case({"order": "b", "rows": [[2]]})
    with pytest.raises(ResultMismatchException) as exc:
        run_checks(case, ExecutionResult(columns=["a", "b"], rows=[[1, 2]]))
    assert "no value for order column b" in str(exc.value)
