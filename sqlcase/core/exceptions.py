class ConfigurationException(Exception):
    pass


class FixtureNotFoundException(FileNotFoundError):
    def __init__(self, path: str, resolved: str | None = None):
        message = f"Fixture {path} not found"
        if resolved and resolved != path:
            message += f" (looked in {resolved})"
        super().__init__(message)
        self.path = path
        self.resolved = resolved


class MalformedFixtureException(ValueError):
    def __init__(self, path: str, message: str):
        super().__init__(f"Malformed fixture {path}: {message}")
        self.path = path
        self.message = message


class CaseFailure(AssertionError):
    def __init__(self, case_name: str, message: str):
        super().__init__(f"[{case_name}] {message}")
        self.case_name = case_name
        self.message = message


class ResultMismatchException(CaseFailure):
    pass


class UnexpectedSuccessException(CaseFailure):
    pass


class CaseExecutionException(CaseFailure):
    def __init__(self, case_name: str, sql: str, error: Exception):
        super().__init__(case_name, f"{type(error).__name__} running {sql!r}: {error}")
        self.sql = sql
        self.error = error
