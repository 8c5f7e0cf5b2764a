from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable

from sqlcase.constants import logger
from sqlcase.context import ExecutionContext
from sqlcase.core.exceptions import (
    CaseFailure,
    FixtureNotFoundException,
    MalformedFixtureException,
)
from sqlcase.core.models import SQLCase
from sqlcase.executor import CaseResult, CaseStatus, ExecutorFactory
from sqlcase.loader import load_cases


@dataclass(frozen=True)
class CaseGroup:
    """A named fixture bound to a test, with an explicit enable flag."""

    name: str
    path: str
    enabled: bool = True
    reason: str | None = None

    def load(self, root: Path | None = None) -> list[SQLCase]:
        if not self.enabled:
            return []
        return load_cases(self.path, root)

    def with_enabled(self, enabled: bool) -> "CaseGroup":
        return replace(self, enabled=enabled)


@dataclass
class GroupReport:
    group: CaseGroup
    results: list[CaseResult] = field(default_factory=list)
    error: Exception | None = None

    def count(self, status: CaseStatus) -> int:
        return len([r for r in self.results if r.status == status])

    @property
    def passed(self) -> int:
        return self.count(CaseStatus.PASSED)

    @property
    def failed(self) -> int:
        return self.count(CaseStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(CaseStatus.SKIPPED)

    @property
    def ok(self) -> bool:
        return self.error is None and self.failed == 0


@dataclass
class Suite:
    groups: list[CaseGroup]

    def get(self, name: str) -> CaseGroup:
        for group in self.groups:
            if group.name == name:
                return group
        raise KeyError(f"No case group named {name}")

    @property
    def enabled(self) -> list[CaseGroup]:
        return [g for g in self.groups if g.enabled]

    @property
    def disabled(self) -> list[CaseGroup]:
        return [g for g in self.groups if not g.enabled]

    def with_overrides(self, overrides: dict[str, bool]) -> "Suite":
        unknown = set(overrides) - {g.name for g in self.groups}
        if unknown:
            raise KeyError(f"Unknown case groups in overrides: {sorted(unknown)}")
        return Suite(
            groups=[
                g.with_enabled(overrides[g.name]) if g.name in overrides else g
                for g in self.groups
            ]
        )


SAMPLE_SELECT = CaseGroup(
    name="sample_select", path="/integration/v1/test_select_sample.yaml"
)
EXPRESSION = CaseGroup(
    name="expression",
    path="/integration/v1/test_expression.yaml",
    enabled=False,
    reason="expression cases disabled",
)
UDAF_FUNCTION = CaseGroup(
    name="udaf_function",
    path="/integration/v1/test_udaf_function.yaml",
    enabled=False,
    reason="udaf function cases disabled",
)
SUB_SELECT = CaseGroup(
    name="sub_select",
    path="/integration/v1/test_sub_select.yaml",
    enabled=False,
    reason="sub select cases disabled",
)

SUITE = Suite(groups=[SAMPLE_SELECT, EXPRESSION, UDAF_FUNCTION, SUB_SELECT])


def dispatch(
    context: ExecutionContext,
    cases: Iterable[SQLCase],
    factory=ExecutorFactory,
) -> list[CaseResult]:
    """Run each case once, in order; one case failing does not stop the rest."""
    results = []
    for case in cases:
        try:
            results.append(factory.build(context, case).run())
        except CaseFailure as e:
            logger.error(f"Case {case.name} failed: {e}")
            results.append(
                CaseResult(name=case.name, status=CaseStatus.FAILED, error=e)
            )
        except Exception as e:
            logger.exception(f"Case {case.name} errored: {e}")
            results.append(
                CaseResult(name=case.name, status=CaseStatus.FAILED, error=e)
            )
    return results


def run_group(
    context: ExecutionContext,
    group: CaseGroup,
    root: Path | None = None,
    factory=ExecutorFactory,
) -> GroupReport:
    report = GroupReport(group=group)
    if not group.enabled:
        logger.info(f"Skipping disabled group {group.name}")
        return report
    try:
        cases = group.load(root)
    except (FixtureNotFoundException, MalformedFixtureException) as e:
        logger.error(f"Could not load group {group.name}: {e}")
        report.error = e
        return report
    report.results = dispatch(context, cases, factory=factory)
    return report
