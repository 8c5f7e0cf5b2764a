from typing import Any, Generator, List, Optional, Protocol


class ResultProtocol(Protocol):
    returns_rows: bool

    def fetchall(self) -> List[Any]: ...

    def keys(self) -> List[str]: ...

    def fetchone(self) -> Optional[Any]: ...

    def __iter__(self) -> Generator[Any, None, None]: ...


class EngineConnection(Protocol):

    def execute(self, statement: Any, parameters: Any | None = None) -> ResultProtocol: ...

    def commit(self):
        raise NotImplementedError()

    def rollback(self):
        raise NotImplementedError()

    def close(self) -> None:
        return


class ExecutionEngine(Protocol):

    def connect(self) -> EngineConnection: ...

    def dispose(self, close: bool = True):
        pass
