from sqlcase.constants import CONFIG
from sqlcase.context import ExecutionContext
from sqlcase.core.models import SQLCase
from sqlcase.dialect.enums import Dialects
from sqlcase.executor import ExecutorFactory
from sqlcase.loader import load_cases
from sqlcase.suite import SUITE, CaseGroup

__version__ = "0.1.0"

__all__ = [
    "load_cases",
    "ExecutorFactory",
    "ExecutionContext",
    "Dialects",
    "SQLCase",
    "CaseGroup",
    "SUITE",
    "CONFIG",
]
