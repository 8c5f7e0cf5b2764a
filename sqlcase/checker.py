import math
from decimal import Decimal
from typing import Any

from sqlcase.constants import CONFIG
from sqlcase.context import ExecutionResult
from sqlcase.core.exceptions import ResultMismatchException
from sqlcase.core.models import ExpectDesc, SQLCase


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def values_equal(actual: Any, expected: Any, tolerance: float | None = None) -> bool:
    tolerance = CONFIG.float_tolerance if tolerance is None else tolerance
    if actual is None or expected is None:
        return actual is None and expected is None
    if _is_numeric(actual) and _is_numeric(expected):
        if isinstance(actual, int) and isinstance(expected, int):
            return actual == expected
        return math.isclose(
            float(actual), float(expected), rel_tol=tolerance, abs_tol=tolerance
        )
    return actual == expected


def _sort_value(value: Any):
    if value is None:
        return (True, 0)
    if isinstance(value, float):
        return (False, round(value, 6))
    if isinstance(value, Decimal):
        return (False, round(float(value), 6))
    return (False, value)


def sort_rows(rows: list[list[Any]], index: int | None = None) -> list[list[Any]]:
    def key(row):
        full = tuple(_sort_value(v) for v in row)
        if index is not None:
            return (_sort_value(row[index]), full)
        return full

    return sorted(rows, key=key)


class Checker:
    def __init__(self, case: SQLCase, expect: ExpectDesc):
        self.case = case
        self.expect = expect

    def fail(self, message: str):
        raise ResultMismatchException(self.case.name, message)

    def check(self, result: ExecutionResult) -> None:
        raise NotImplementedError


class ColumnsChecker(Checker):
    def check(self, result: ExecutionResult) -> None:
        expected = self.expect.column_names
        actual = [c for c in result.columns]
        if [c.lower() for c in actual] != [c.lower() for c in expected]:
            self.fail(f"column mismatch: expected {expected}, got {actual}")


class CountChecker(Checker):
    def check(self, result: ExecutionResult) -> None:
        if result.count != self.expect.count:
            self.fail(f"row count mismatch: expected {self.expect.count}, got {result.count}")


class RowsChecker(Checker):
    def check(self, result: ExecutionResult) -> None:
        expected = self.expect.coerced_rows or []
        actual = result.rows
        if len(actual) != len(expected):
            self.fail(
                f"row count mismatch: expected {len(expected)}, got {len(actual)}\n"
                f"expected: {expected}\nactual:   {actual}"
            )
        index = None
        if self.expect.order:
            lowered = [c.lower() for c in result.columns]
            if self.expect.order.lower() not in lowered:
                self.fail(f"order column {self.expect.order} missing from result")
            index = lowered.index(self.expect.order.lower())
            for idx, row in enumerate(expected):
                if len(row) <= index:
                    self.fail(
                        f"expected row {idx} has {len(row)} values, "
                        f"no value for order column {self.expect.order}"
                    )
        actual = sort_rows(actual, index)
        expected = sort_rows(expected, index)
        for idx, (actual_row, expected_row) in enumerate(zip(actual, expected)):
            if len(actual_row) != len(expected_row) or not all(
                values_equal(a, e) for a, e in zip(actual_row, expected_row)
            ):
                self.fail(
                    f"row {idx} mismatch: expected {expected_row}, got {actual_row}"
                )


def build_checkers(case: SQLCase) -> list[Checker]:
    expect = case.expect
    if expect is None or not expect.success:
        return []
    checkers: list[Checker] = []
    if expect.columns:
        checkers.append(ColumnsChecker(case, expect))
    if expect.count is not None:
        checkers.append(CountChecker(case, expect))
    if expect.rows is not None:
        checkers.append(RowsChecker(case, expect))
    return checkers
