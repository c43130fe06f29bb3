"""Static validator for Gatling projects.

Runs independent manifest, structure and content rules over a project tree
and aggregates their results into a ``ValidationReport`` whose exit code
gates only on build-breaking defects.
"""

from gatling_scaffold.validator.base import ProjectTree, ValidationRule
from gatling_scaffold.validator.engine import ValidationEngine, default_rules
from gatling_scaffold.validator.models import (
    Outcome,
    RuleGroup,
    Severity,
    ValidationReport,
    ValidationResult,
)
from gatling_scaffold.validator.report import print_report

__all__ = [
    "Outcome",
    "ProjectTree",
    "RuleGroup",
    "Severity",
    "ValidationEngine",
    "ValidationReport",
    "ValidationResult",
    "ValidationRule",
    "default_rules",
    "print_report",
]
