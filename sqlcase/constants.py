from contextlib import contextmanager
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import Any

logger = getLogger("sqlcase")

DEFAULT_DB = "test_db"

AUTO_TABLE_PREFIX = "auto_"

FIXTURE_ROOT = Path(__file__).parent / "fixtures"


@dataclass
class Config:
    fixture_root: Path = FIXTURE_ROOT
    float_tolerance: float = 1e-6
    skip_tags: tuple[str, ...] = ("SKIP", "TODO")

    @contextmanager
    def temporary(self, **kwargs: Any):
        """
        Context manager to temporarily set attributes and revert them afterwards.

        Usage:
            with CONFIG.temporary(fixture_root=Path("/tmp/fixtures")):
                load_cases("/integration/v1/test_select_sample.yaml")
        """
        original_values = {key: getattr(self, key) for key in kwargs}
        for key, value in kwargs.items():
            setattr(self, key, value)
        try:
            yield self
        finally:
            for key, value in original_values.items():
                setattr(self, key, value)


CONFIG = Config()
