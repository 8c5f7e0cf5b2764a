from pathlib import Path

from pytest import fixture

from sqlcase import Dialects

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@fixture(scope="session")
def executor():
    context = Dialects.DUCK_DB.default_context()
    yield context
    context.close()


@fixture(scope="session")
def fixture_dir() -> Path:
    return FIXTURE_DIR
