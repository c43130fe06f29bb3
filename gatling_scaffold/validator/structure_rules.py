"""Directory-structure rules: sources, simulation entry point, resources."""

from __future__ import annotations

import re
from pathlib import Path

from .base import ProjectTree, ValidationRule
from .models import RuleGroup, Severity, ValidationResult

_JVM_SIMULATION = re.compile(
    r"""
    \bclass\s+\w+              # class Foo
    [^{]*?                     # constructor params, generics, ...
    (?:\bextends\s+Simulation\b          # Java / Scala
      |:\s*Simulation\s*\(\s*\))         # Kotlin
    """,
    re.VERBOSE | re.DOTALL,
)

_JS_SIMULATION = re.compile(r"\bsimulation\s*\(")

_JS_SIMULATION_SUFFIXES = (".gatling.ts", ".gatling.js")

FEEDER_EXTENSIONS = {".csv", ".json", ".tsv", ".ssv"}

_MAX_LISTED = 5


def _is_entry_point(tree: ProjectTree, path: Path) -> bool:
    if path.name.endswith(_JS_SIMULATION_SUFFIXES):
        return bool(_JS_SIMULATION.search(tree.read_text(path)))
    if path.suffix in {".java", ".kt", ".scala"}:
        return bool(_JVM_SIMULATION.search(tree.read_text(path)))
    return False


def _listing(names: list[str]) -> str:
    shown = ", ".join(names[:_MAX_LISTED])
    if len(names) > _MAX_LISTED:
        shown += f" (+{len(names) - _MAX_LISTED} more)"
    return shown


class SourceFilesRule(ValidationRule):
    id = "source-files"
    description = "At least one simulation source file exists under src/"
    group = RuleGroup.STRUCTURE
    severity = Severity.FAIL

    def check(self, tree: ProjectTree) -> ValidationResult:
        files = tree.source_files()
        if files:
            return self.ok(f"Found {len(files)} source file(s) under src/")
        return self.problem(
            "No simulation source files found. Create one in src/test/java "
            "(or scala/kotlin) or src/simulations/*.gatling.ts (JS/TS)"
        )


class SimulationEntryPointRule(ValidationRule):
    id = "simulation-entry-point"
    description = "A runnable Gatling simulation can be discovered"
    group = RuleGroup.STRUCTURE
    severity = Severity.FAIL

    def check(self, tree: ProjectTree) -> ValidationResult:
        entry_points = [
            tree.relative(path)
            for path in tree.source_files()
            if _is_entry_point(tree, path)
        ]
        if entry_points:
            return self.ok(f"Simulation entry point(s): {_listing(entry_points)}")
        return self.problem(
            "No simulation found: JVM classes must extend Simulation and JS/TS "
            "simulations must be *.gatling.ts / *.gatling.js files exporting simulation(...)"
        )


class ResourcesDirectoryRule(ValidationRule):
    id = "resources-directory"
    description = "A resources directory exists for gatling.conf and feeders"
    group = RuleGroup.STRUCTURE
    severity = Severity.WARN

    def check(self, tree: ProjectTree) -> ValidationResult:
        found = tree.resource_dirs()
        if found:
            return self.ok(f"Resources directory: {found[0]}/")
        return self.problem(
            "No resources directory found; create src/test/resources/ "
            "(or src/resources/ for JS/TS) for gatling.conf and feeders"
        )


class FeederFilesRule(ValidationRule):
    id = "feeder-files"
    description = "Feeder data files (CSV/JSON) exist in a resources data/ directory"
    group = RuleGroup.STRUCTURE
    severity = Severity.WARN

    def check(self, tree: ProjectTree) -> ValidationResult:
        for resources in tree.resource_dirs():
            data_dir = tree.path(resources) / "data"
            if not data_dir.is_dir():
                continue
            feeders = sorted(
                p for p in data_dir.rglob("*") if p.is_file() and p.suffix in FEEDER_EXTENSIONS
            )
            if feeders:
                return self.ok(f"Found {len(feeders)} feeder file(s) in {resources}/data/")
        return self.problem(
            "No feeder files (CSV/JSON) found in resources/data/; add test data files"
        )


STRUCTURE_RULES: tuple[type[ValidationRule], ...] = (
    SourceFilesRule,
    SimulationEntryPointRule,
    ResourcesDirectoryRule,
    FeederFilesRule,
)
