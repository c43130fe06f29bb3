"""Validation models -- severities, per-rule results and the aggregate report.

The report is a value: it is built once from the list of results returned by
the engine and never updated afterwards.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Outcome of a single rule."""

    PASS = "PASS"
    WARN = "WARN"  # Best-practice signal missing; the project still runs
    FAIL = "FAIL"  # Build-breaking omission; the project cannot run


class RuleGroup(str, Enum):
    """Topic a rule belongs to.  Used for ordering and report layout only."""

    MANIFEST = "manifest"
    STRUCTURE = "structure"
    CONTENT = "content"


GROUP_ORDER: tuple[RuleGroup, ...] = (
    RuleGroup.MANIFEST,
    RuleGroup.STRUCTURE,
    RuleGroup.CONTENT,
)


class Outcome(str, Enum):
    """Overall verdict of a validation run."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class ValidationResult(BaseModel):
    """A single rule's verdict."""

    model_config = ConfigDict(frozen=True)

    rule_id: str = Field(..., description="Identifier of the rule that produced this result")
    group: RuleGroup
    severity: Severity
    message: str = Field(..., description="Human-readable explanation")


class ValidationReport(BaseModel):
    """Aggregated result of a validation run.

    ``outcome`` is ``FAILURE`` iff at least one result is ``FAIL``; any number
    of warnings alone still yields ``SUCCESS``.
    """

    model_config = ConfigDict(frozen=True)

    project_path: str = Field(default="", description="Path to the validated project")
    results: tuple[ValidationResult, ...] = Field(default=())
    passed: int = Field(default=0, ge=0)
    warnings: int = Field(default=0, ge=0)
    failures: int = Field(default=0, ge=0)
    outcome: Outcome = Outcome.SUCCESS

    @classmethod
    def aggregate(
        cls, results: list[ValidationResult], project_path: str = ""
    ) -> "ValidationReport":
        """Build a report from *results* without mutating anything."""
        counts = {severity: 0 for severity in Severity}
        for result in results:
            counts[result.severity] += 1
        return cls(
            project_path=project_path,
            results=tuple(results),
            passed=counts[Severity.PASS],
            warnings=counts[Severity.WARN],
            failures=counts[Severity.FAIL],
            outcome=Outcome.FAILURE if counts[Severity.FAIL] else Outcome.SUCCESS,
        )

    @property
    def exit_code(self) -> int:
        """Process exit status: 0 for SUCCESS (warnings included), 1 for FAILURE."""
        return 0 if self.outcome is Outcome.SUCCESS else 1

    def by_severity(self, severity: Severity) -> list[ValidationResult]:
        return [r for r in self.results if r.severity is severity]

    def by_group(self, group: RuleGroup) -> list[ValidationResult]:
        return [r for r in self.results if r.group is group]
