"""pytest binding for case groups.

Usage:

    @pytest.mark.parametrize("case", case_params(SAMPLE_SELECT), ids=case_id)
    def test_sample_select(executor, case):
        ExecutorFactory.build(executor, case).run()
"""

from pathlib import Path
from typing import Any

from sqlcase.constants import CONFIG
from sqlcase.core.models import SQLCase
from sqlcase.suite import CaseGroup


def case_id(case: Any) -> str:
    if isinstance(case, SQLCase):
        return case.name
    return str(case)


def case_params(group: CaseGroup, root: Path | None = None) -> list:
    """Build parameter sets for a group.

    A disabled group yields a single skipped parameter and its fixture is
    never read. Load errors for enabled groups propagate at collection.
    """
    import pytest

    if not group.enabled:
        return [
            pytest.param(
                None,
                marks=pytest.mark.skip(reason=group.reason or "group disabled"),
                id=f"{group.name}-disabled",
            )
        ]
    params = []
    for case in group.load(root):
        skip_tags = [tag for tag in case.tags if tag.upper() in CONFIG.skip_tags]
        marks = (
            [pytest.mark.skip(reason=f"tagged {', '.join(skip_tags)}")]
            if skip_tags
            else []
        )
        params.append(pytest.param(case, marks=marks, id=case.name))
    return params
