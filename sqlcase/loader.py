from pathlib import Path

import yaml
from pydantic import ValidationError

from sqlcase.constants import CONFIG, logger
from sqlcase.core.exceptions import (
    FixtureNotFoundException,
    MalformedFixtureException,
)
from sqlcase.core.models import CaseFile, SQLCase


def resolve_fixture(path: str | Path, root: Path | None = None) -> Path:
    """Resolve a fixture resource path against the fixture root.

    Resource paths are written with a leading slash (``/integration/v1/x.yaml``)
    and are always relative to the root. Filesystem paths that already exist
    are used as-is.
    """
    candidate = Path(path)
    if candidate.is_absolute() and candidate.is_file():
        return candidate
    base = root or CONFIG.fixture_root
    resolved = Path(base) / str(path).lstrip("/")
    if not resolved.is_file():
        raise FixtureNotFoundException(str(path), str(resolved))
    return resolved


def parse_case_file(text: str, source: str = "<string>") -> CaseFile:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedFixtureException(source, f"invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise MalformedFixtureException(
            source, f"expected a mapping at top level, got {type(raw).__name__}"
        )
    try:
        return CaseFile.model_validate(raw)
    except ValidationError as e:
        raise MalformedFixtureException(source, str(e)) from e


class CaseProvider:
    def __init__(self, path: str, case_file: CaseFile):
        self.path = path
        self.case_file = case_file

    @classmethod
    def from_path(cls, path: str | Path, root: Path | None = None) -> "CaseProvider":
        resolved = resolve_fixture(path, root)
        logger.debug(f"Loading fixture {path} from {resolved}")
        try:
            with open(resolved, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise MalformedFixtureException(str(path), f"invalid encoding: {e}") from e
        case_file = parse_case_file(text, source=str(path))
        return cls(str(path), case_file)

    @property
    def cases(self) -> list[SQLCase]:
        return self.case_file.selected_cases

    def __len__(self) -> int:
        return len(self.cases)


def load_cases(path: str | Path, root: Path | None = None) -> list[SQLCase]:
    provider = CaseProvider.from_path(path, root)
    cases = provider.cases
    logger.info(f"Loaded {len(cases)} cases from {path}")
    return cases
