"""Base validation rule and the read-only project tree rules inspect.

Each rule is a standalone, independently testable unit that checks exactly
one concern.  Rules never keep state between runs and never write.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from .models import RuleGroup, Severity, ValidationResult

# Directories that never contain hand-written simulation sources.
SKIP_DIRS = {"node_modules", "target", "build", "dist", ".git", ".gradle", ".idea"}

SOURCE_EXTENSIONS = {".java", ".kt", ".scala", ".ts", ".js"}

BUILD_FILES = ("pom.xml", "build.gradle", "build.gradle.kts", "package.json")

RESOURCE_DIRS = ("src/test/resources", "src/resources")


class ProjectTree:
    """Read-only view of a project directory.

    Nothing is cached: every call goes to the filesystem so that rules stay
    independent of one another.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path(self, relative: str) -> Path:
        return self.root / relative

    def exists(self, relative: str) -> bool:
        return (self.root / relative).is_file()

    def read_text(self, relative: str | Path) -> str:
        """Read a file below the root as UTF-8."""
        path = relative if isinstance(relative, Path) else self.root / relative
        return path.read_text(encoding="utf-8")

    def relative(self, path: Path) -> str:
        """Return *path* relative to the root as a forward-slash string."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)

    def gradle_file(self) -> str | None:
        """Name of the Gradle build script, preferring the Kotlin DSL."""
        for name in ("build.gradle.kts", "build.gradle"):
            if self.exists(name):
                return name
        return None

    def source_files(self) -> list[Path]:
        """Every simulation-language source file under ``src/``, sorted."""
        src = self.root / "src"
        if not src.is_dir():
            return []
        return _collect_files(src, SOURCE_EXTENSIONS)

    def source_text(self) -> str:
        """Concatenated text of every source file, separated by newlines."""
        return "\n".join(self.read_text(path) for path in self.source_files())

    def resource_dirs(self) -> list[str]:
        """Existing resource directories, in lookup order."""
        return [rel for rel in RESOURCE_DIRS if (self.root / rel).is_dir()]


class ValidationRule(ABC):
    """Abstract base for all project rules.

    Contract:
        - ``evaluate()`` returns exactly one result, or ``None`` when the rule
          does not apply to this project (e.g. Maven rules without a pom).
        - A failed check is reported with the rule's declared ``severity``:
          ``FAIL`` for build-breaking omissions, ``WARN`` for best-practice
          signals.
        - Rules may raise; the engine turns the exception into a ``FAIL``
          result for that rule alone.
    """

    id: ClassVar[str]
    description: ClassVar[str]
    group: ClassVar[RuleGroup]
    severity: ClassVar[Severity]

    def applies(self, tree: ProjectTree) -> bool:
        """Whether this rule has anything to inspect in *tree*."""
        return True

    @abstractmethod
    def check(self, tree: ProjectTree) -> ValidationResult:
        """Inspect *tree* and return a result built with ``ok``/``problem``."""
        ...

    def evaluate(self, tree: ProjectTree) -> ValidationResult | None:
        if not self.applies(tree):
            return None
        return self.check(tree)

    # -- Helper methods --

    def ok(self, message: str) -> ValidationResult:
        return ValidationResult(
            rule_id=self.id, group=self.group, severity=Severity.PASS, message=message
        )

    def problem(self, message: str) -> ValidationResult:
        """A failed check, reported at the rule's declared severity."""
        return ValidationResult(
            rule_id=self.id, group=self.group, severity=self.severity, message=message
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _collect_files(root: Path, extensions: set[str]) -> list[Path]:
    """Recursively collect files matching the given extensions, skipping
    build output and dependency directories."""
    results: list[Path] = []
    for child in sorted(root.iterdir()):
        if child.is_dir():
            if child.name in SKIP_DIRS:
                continue
            results.extend(_collect_files(child, extensions))
        elif child.suffix in extensions:
            results.append(child)
    return results
