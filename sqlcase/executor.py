from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError

from sqlcase.checker import build_checkers
from sqlcase.constants import CONFIG, logger
from sqlcase.context import ExecutionContext, ExecutionResult
from sqlcase.core.exceptions import (
    CaseExecutionException,
    UnexpectedSuccessException,
)
from sqlcase.core.models import SQLCase


class CaseStatus(Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class CaseResult:
    name: str
    status: CaseStatus
    result: ExecutionResult | None = None
    error: Exception | None = None
    reason: str | None = None
    statements: list[str] = field(default_factory=list)


class BaseExecutor:
    def __init__(self, context: ExecutionContext, case: SQLCase):
        self.context = context
        self.case = case

    def run(self) -> CaseResult:
        raise NotImplementedError


class NullExecutor(BaseExecutor):
    """Executor for cases that must not be run."""

    def __init__(self, context: ExecutionContext, case: SQLCase, reason: str):
        super().__init__(context, case)
        self.reason = reason

    def run(self) -> CaseResult:
        logger.info(f"Skipping case {self.case.name}: {self.reason}")
        outcome = CaseResult(
            name=self.case.name, status=CaseStatus.SKIPPED, reason=self.reason
        )
        for hook in self.context.hooks:
            hook.process_case_result(outcome)
        return outcome


class SQLExecutor(BaseExecutor):
    """Creates the case inputs, runs its statements and checks the outcome.

    Tables created for the case are always dropped, pass or fail.
    """

    def __init__(self, context: ExecutionContext, case: SQLCase):
        super().__init__(context, case)
        self.created: list[str] = []
        self.statements: list[str] = []

    def prepare(self) -> None:
        for table in self.case.inputs:
            try:
                self.context.create_table(table)
                self.created.append(table.name)
                self.context.insert_rows(table)
            except SQLAlchemyError as e:
                raise CaseExecutionException(
                    self.case.name, f"setup of {table.name}", e
                ) from e

    def execute(self) -> ExecutionResult:
        result = ExecutionResult()
        sqls = [*self.case.sqls]
        if self.case.sql:
            sqls.append(self.case.sql)
        for raw in sqls:
            sql = self.case.render(raw)
            self.statements.append(sql)
            result = self.context.execute(sql)
        return result

    def check(self, result: ExecutionResult) -> None:
        for checker in build_checkers(self.case):
            checker.check(result)

    def tear_down(self) -> None:
        for name in reversed(self.created):
            try:
                self.context.drop_table(name)
            except SQLAlchemyError as e:
                logger.warning(f"Failed to drop table {name}: {e}")
        self.created = []

    def run(self) -> CaseResult:
        logger.info(f"Running case {self.case.name}")
        for hook in self.context.hooks:
            hook.process_case_start(self.case)
        expect_success = self.case.expect is None or self.case.expect.success
        try:
            self.prepare()
            try:
                result = self.execute()
            except SQLAlchemyError as e:
                if expect_success:
                    raise CaseExecutionException(
                        self.case.name, self.statements[-1], e
                    ) from e
                logger.info(f"Case {self.case.name} failed as expected: {e}")
                result = None
            else:
                if not expect_success:
                    raise UnexpectedSuccessException(
                        self.case.name,
                        f"expected {self.statements[-1]!r} to fail, but it succeeded",
                    )
                self.check(result)
        finally:
            self.tear_down()
        outcome = CaseResult(
            name=self.case.name,
            status=CaseStatus.PASSED,
            result=result,
            statements=list(self.statements),
        )
        for hook in self.context.hooks:
            hook.process_case_result(outcome)
        return outcome


class ExecutorFactory:
    @staticmethod
    def build(context: ExecutionContext, case: SQLCase) -> BaseExecutor:
        skip_tags = [tag for tag in case.tags if tag.upper() in CONFIG.skip_tags]
        if skip_tags:
            return NullExecutor(
                context, case, reason=f"tagged {', '.join(skip_tags)}"
            )
        return SQLExecutor(context, case)
