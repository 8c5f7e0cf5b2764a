from logging import DEBUG, StreamHandler

from sqlcase.constants import logger
from sqlcase.hooks.base_hook import BaseHook


class DebuggingHook(BaseHook):
    def __init__(self, level=DEBUG, process_statements: bool = True):
        if not any([isinstance(x, StreamHandler) for x in logger.handlers]):
            logger.addHandler(StreamHandler())
        logger.setLevel(level)
        self.process_statements = process_statements
        self.messages: list[str] = []

    def print(self, *args):
        merged = " ".join([str(x) for x in args])
        self.messages.append(merged)
        logger.debug(merged)

    def process_case_start(self, case):
        self.print(f"case {case.name} starting")

    def process_statement(self, sql: str):
        if self.process_statements:
            self.print(sql)

    def process_case_result(self, result):
        self.print(f"case {result.name}: {result.status.value}")
