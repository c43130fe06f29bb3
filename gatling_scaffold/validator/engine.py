"""Validation Engine -- runs every rule against a project tree.

Usage::

    engine = ValidationEngine()
    results = engine.run("./my-perf-tests")
    report = ValidationReport.aggregate(results)
    sys.exit(report.exit_code)

Rules are isolated: an exception inside one rule becomes a FAIL result for
that rule and the remaining rules still run.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..errors import RuleExecutionError
from .base import ProjectTree, ValidationRule
from .content_rules import CONTENT_RULES
from .manifest_rules import MANIFEST_RULES
from .models import GROUP_ORDER, RuleGroup, Severity, ValidationReport, ValidationResult
from .structure_rules import STRUCTURE_RULES

logger = logging.getLogger(__name__)


def default_rules() -> list[ValidationRule]:
    """Create the default rule set in execution order."""
    return [rule() for rule in (*MANIFEST_RULES, *STRUCTURE_RULES, *CONTENT_RULES)]


class ValidationEngine:
    """Runs an ordered set of independent rules against a project directory.

    Args:
        rules: Rules to run.  Defaults to :func:`default_rules`.
        max_workers: Evaluate rules on a thread pool of this size.  Rules
            share no state, so results are identical to a sequential run.
    """

    def __init__(
        self,
        rules: list[ValidationRule] | None = None,
        max_workers: int | None = None,
    ) -> None:
        rules = rules if rules is not None else default_rules()
        # Stable sort: group order first, declaration order within a group.
        self.rules = sorted(rules, key=lambda r: GROUP_ORDER.index(r.group))
        self.max_workers = max_workers

    def run(self, target_root: str | Path) -> list[ValidationResult]:
        """Evaluate every applicable rule and return their results in order."""
        root = Path(target_root)
        if not root.is_dir():
            return [
                ValidationResult(
                    rule_id="project-directory",
                    group=RuleGroup.STRUCTURE,
                    severity=Severity.FAIL,
                    message=f"Project directory does not exist: {root}",
                )
            ]

        tree = ProjectTree(root)
        if self.max_workers and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                outcomes = list(pool.map(lambda rule: self._evaluate(rule, tree), self.rules))
        else:
            outcomes = [self._evaluate(rule, tree) for rule in self.rules]

        results = [result for result in outcomes if result is not None]
        logger.debug("Ran %d rules against %s, %d results", len(self.rules), root, len(results))
        return results

    def validate(self, target_root: str | Path) -> ValidationReport:
        """Run the rules and aggregate their results into a report."""
        return ValidationReport.aggregate(self.run(target_root), project_path=str(target_root))

    # -- Internal helpers --------------------------------------------------

    @staticmethod
    def _evaluate(rule: ValidationRule, tree: ProjectTree) -> ValidationResult | None:
        try:
            return rule.evaluate(tree)
        except RuleExecutionError as exc:
            message = str(exc)
        except (OSError, UnicodeDecodeError) as exc:
            message = f"Could not read project files: {exc}"
        except Exception as exc:  # one broken rule must not stop the others
            message = f"Rule crashed: {type(exc).__name__}: {exc}"
        logger.warning("Rule %s could not complete: %s", rule.id, message)
        return ValidationResult(
            rule_id=rule.id, group=rule.group, severity=Severity.FAIL, message=message
        )
