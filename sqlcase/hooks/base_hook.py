from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlcase.core.models import SQLCase
    from sqlcase.executor import CaseResult


class BaseHook:
    pass

    def process_case_start(self, case: "SQLCase"):
        pass

    def process_statement(self, sql: str):
        pass

    def process_case_result(self, result: "CaseResult"):
        pass
