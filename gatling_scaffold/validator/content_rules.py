"""Content-quality rules over the simulation sources.

Each rule searches the concatenated text of every source file for a marker of
a load-testing best practice.  This is a heuristic: a marker that only
appears in a comment counts as present, and an unconventional call form
counts as absent.  Both cases are accepted limitations; the rules only ever
warn.
"""

from __future__ import annotations

import re

from .base import ProjectTree, ValidationRule
from .models import RuleGroup, Severity, ValidationResult


class _ContentRule(ValidationRule):
    group = RuleGroup.CONTENT
    severity = Severity.WARN
    pattern: re.Pattern[str]
    found: str = ""
    missing: str = ""

    def applies(self, tree: ProjectTree) -> bool:
        return bool(tree.source_files())

    def check(self, tree: ProjectTree) -> ValidationResult:
        if self.pattern.search(tree.source_text()):
            return self.ok(self.found)
        return self.problem(self.missing)


class AssertionsRule(_ContentRule):
    id = "assertions"
    description = "Simulations declare assertions (pass/fail thresholds)"
    pattern = re.compile(r"\bassertions\s*\(")
    found = "Assertions found in simulation(s)"
    missing = "No assertions detected; add .assertions() to define pass/fail thresholds"


class PacingRule(_ContentRule):
    id = "pacing"
    description = "Simulations pause between requests (think time / pacing)"
    pattern = re.compile(r"\b(?:pause|pace)\s*\(")
    found = "pause() calls found; good for realistic think time"
    missing = (
        "No pause() calls found; add pauses between requests to simulate "
        "real user behavior"
    )


class DynamicExtractionRule(_ContentRule):
    id = "dynamic-extraction"
    description = "Simulations extract dynamic values from responses"
    pattern = re.compile(r"\bsaveAs\s*\(")
    found = "saveAs() found; dynamic value extraction in use"
    missing = (
        "No saveAs() calls found; consider extracting dynamic values "
        "(tokens, IDs) from responses"
    )


class FeedersRule(_ContentRule):
    id = "feeders"
    description = "Simulations use feeders for parameterized test data"
    pattern = re.compile(r"\b(?:csv|tsv|ssv|jsonFile|jsonUrl|arrayFeeder|listFeeder)\s*\(")
    found = "Feeders found; parameterized test data in use"
    missing = "No feeders found; consider using csv() or jsonFile() for varied test data"


CONTENT_RULES: tuple[type[ValidationRule], ...] = (
    AssertionsRule,
    PacingRule,
    DynamicExtractionRule,
    FeedersRule,
)
