"""Manifest-declaration rules for Maven, Gradle and npm projects.

``pom.xml`` and ``package.json`` are parsed structurally.  A Gradle build
script is a program rather than a data format, so the Gradle rules fall back
to pattern search over its text.
"""

from __future__ import annotations

import json
import re
import xml.etree.ElementTree as ET
from typing import Any

from ..errors import RuleExecutionError
from .base import BUILD_FILES, ProjectTree, ValidationRule
from .models import RuleGroup, Severity, ValidationResult

GATLING_GROUP = "io.gatling.highcharts"
GATLING_ARTIFACT = "gatling-charts-highcharts"
MAVEN_PLUGIN_GROUP = "io.gatling"
MAVEN_PLUGIN_ARTIFACT = "gatling-maven-plugin"


# ---------------------------------------------------------------------------
# pom.xml helpers
# ---------------------------------------------------------------------------

def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tag names."""
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _children(element: ET.Element | None, name: str) -> list[ET.Element]:
    if element is None:
        return []
    return [child for child in element if _local(child.tag) == name]


def _text(element: ET.Element, name: str) -> str:
    child = _child(element, name)
    return (child.text or "").strip() if child is not None else ""


def load_pom(tree: ProjectTree, rule_id: str) -> ET.Element:
    """Parse ``pom.xml`` and return its root ``<project>`` element."""
    try:
        root = ET.fromstring(tree.read_text("pom.xml"))
    except ET.ParseError as exc:
        raise RuleExecutionError(rule_id, f"pom.xml is not well-formed XML: {exc}") from exc
    if _local(root.tag) != "project":
        raise RuleExecutionError(rule_id, "pom.xml root element is not <project>")
    return root


def pom_dependencies(project: ET.Element) -> list[dict[str, str]]:
    """Declared ``<dependencies>`` as groupId/artifactId/version/scope dicts."""
    return [
        {
            "groupId": _text(dep, "groupId"),
            "artifactId": _text(dep, "artifactId"),
            "version": _text(dep, "version"),
            "scope": _text(dep, "scope"),
        }
        for dep in _children(_child(project, "dependencies"), "dependency")
    ]


def pom_plugins(project: ET.Element) -> list[tuple[str, str]]:
    """``(groupId, artifactId)`` of every build plugin, managed ones included."""
    build = _child(project, "build")
    if build is None:
        return []
    plugins = _children(_child(build, "plugins"), "plugin")
    management = _child(build, "pluginManagement")
    if management is not None:
        plugins += _children(_child(management, "plugins"), "plugin")
    return [(_text(p, "groupId"), _text(p, "artifactId")) for p in plugins]


def pom_properties(project: ET.Element) -> dict[str, str]:
    properties = _child(project, "properties")
    if properties is None:
        return {}
    return {_local(prop.tag): (prop.text or "").strip() for prop in properties}


def _gatling_dependency(project: ET.Element) -> dict[str, str] | None:
    for dep in pom_dependencies(project):
        if dep["groupId"] == GATLING_GROUP and dep["artifactId"] == GATLING_ARTIFACT:
            return dep
    return None


# ---------------------------------------------------------------------------
# package.json helpers
# ---------------------------------------------------------------------------

_NPM_DEPENDENCY_SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def load_package_json(tree: ProjectTree, rule_id: str) -> dict[str, Any]:
    try:
        data = json.loads(tree.read_text("package.json"))
    except json.JSONDecodeError as exc:
        raise RuleExecutionError(rule_id, f"package.json is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise RuleExecutionError(rule_id, "package.json must contain a JSON object")
    return data


def npm_dependencies(package: dict[str, Any]) -> dict[str, str]:
    """Merge every dependency section into one ``{name: version}`` mapping."""
    merged: dict[str, str] = {}
    for section in _NPM_DEPENDENCY_SECTIONS:
        entries = package.get(section) or {}
        if isinstance(entries, dict):
            merged.update({str(k): str(v) for k, v in entries.items()})
    return merged


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

class BuildFileRule(ValidationRule):
    id = "build-file"
    description = "A build manifest (pom.xml, build.gradle(.kts) or package.json) exists"
    group = RuleGroup.MANIFEST
    severity = Severity.FAIL

    def check(self, tree: ProjectTree) -> ValidationResult:
        found = [name for name in BUILD_FILES if tree.exists(name)]
        if found:
            return self.ok(f"Build file found: {', '.join(found)}")
        return self.problem("No build file found (pom.xml, build.gradle, or package.json)")


class _MavenRule(ValidationRule):
    group = RuleGroup.MANIFEST

    def applies(self, tree: ProjectTree) -> bool:
        return tree.exists("pom.xml")


class MavenCoreDependencyRule(_MavenRule):
    id = "maven-core-dependency"
    description = "pom.xml declares the Gatling runtime dependency"
    severity = Severity.FAIL

    def check(self, tree: ProjectTree) -> ValidationResult:
        if _gatling_dependency(load_pom(tree, self.id)) is not None:
            return self.ok(f"{GATLING_ARTIFACT} dependency found")
        return self.problem(f"Missing dependency: {GATLING_GROUP}:{GATLING_ARTIFACT}")


class MavenBuildPluginRule(_MavenRule):
    id = "maven-build-plugin"
    description = "pom.xml declares the Gatling Maven plugin"
    severity = Severity.FAIL

    def check(self, tree: ProjectTree) -> ValidationResult:
        for group_id, artifact_id in pom_plugins(load_pom(tree, self.id)):
            if artifact_id == MAVEN_PLUGIN_ARTIFACT and group_id == MAVEN_PLUGIN_GROUP:
                return self.ok(f"{MAVEN_PLUGIN_ARTIFACT} found")
        return self.problem(f"Missing plugin: {MAVEN_PLUGIN_GROUP}:{MAVEN_PLUGIN_ARTIFACT}")


class MavenTestScopeRule(_MavenRule):
    id = "maven-test-scope"
    description = "The Gatling dependency is declared in test scope"
    severity = Severity.WARN

    def applies(self, tree: ProjectTree) -> bool:
        return super().applies(tree) and _gatling_dependency(load_pom(tree, self.id)) is not None

    def check(self, tree: ProjectTree) -> ValidationResult:
        dependency = _gatling_dependency(load_pom(tree, self.id))
        if dependency is not None and dependency["scope"] == "test":
            return self.ok("Gatling dependency scope is 'test'")
        return self.problem("Gatling dependency scope is not 'test'; add <scope>test</scope>")


class MavenVersionPropertyRule(_MavenRule):
    id = "maven-version-property"
    description = "The Gatling version is pinned in a <gatling.version> property"
    severity = Severity.WARN

    def check(self, tree: ProjectTree) -> ValidationResult:
        version = pom_properties(load_pom(tree, self.id)).get("gatling.version")
        if version:
            return self.ok(f"Gatling version pinned: {version}")
        return self.problem(
            "Gatling version not extracted to a property; consider using <gatling.version>"
        )


class MavenCompilerReleaseRule(_MavenRule):
    id = "maven-compiler-release"
    description = "The Java compiler release is configured"
    severity = Severity.WARN

    def check(self, tree: ProjectTree) -> ValidationResult:
        properties = pom_properties(load_pom(tree, self.id))
        for key in ("maven.compiler.release", "maven.compiler.source"):
            if properties.get(key):
                return self.ok(f"Java compiler version configured ({key}={properties[key]})")
        return self.problem(
            "No maven.compiler.release found; add "
            "<maven.compiler.release>17</maven.compiler.release>"
        )


_GRADLE_PLUGIN = re.compile(r"""(?:id\s*\(?\s*|plugin:\s*)["']io\.gatling\.gradle["']""")
_GRADLE_DEPENDENCY = re.compile(r"gatling-charts-highcharts")


class _GradleRule(ValidationRule):
    group = RuleGroup.MANIFEST

    def applies(self, tree: ProjectTree) -> bool:
        return tree.gradle_file() is not None

    def script(self, tree: ProjectTree) -> str:
        name = tree.gradle_file()
        return tree.read_text(name) if name else ""


class GradleBuildPluginRule(_GradleRule):
    id = "gradle-build-plugin"
    description = "The Gatling Gradle plugin is applied"
    severity = Severity.FAIL

    def check(self, tree: ProjectTree) -> ValidationResult:
        if _GRADLE_PLUGIN.search(self.script(tree)):
            return self.ok("Gatling Gradle plugin found")
        return self.problem("Missing plugin: id 'io.gatling.gradle'")


class GradleCoreDependencyRule(_GradleRule):
    id = "gradle-core-dependency"
    description = "The Gatling runtime dependency is declared"
    severity = Severity.FAIL

    def check(self, tree: ProjectTree) -> ValidationResult:
        if _GRADLE_DEPENDENCY.search(self.script(tree)):
            return self.ok(f"{GATLING_ARTIFACT} dependency found")
        return self.problem(f"Missing dependency: {GATLING_GROUP}:{GATLING_ARTIFACT}")


class _NpmDependencyRule(ValidationRule):
    group = RuleGroup.MANIFEST
    severity = Severity.FAIL
    package: str = ""

    def applies(self, tree: ProjectTree) -> bool:
        return tree.exists("package.json")

    def check(self, tree: ProjectTree) -> ValidationResult:
        dependencies = npm_dependencies(load_package_json(tree, self.id))
        if self.package in dependencies:
            return self.ok(f"{self.package} found in package.json ({dependencies[self.package]})")
        return self.problem(f"Missing dependency: {self.package}")


class NpmCoreDependencyRule(_NpmDependencyRule):
    id = "npm-core-dependency"
    description = "package.json declares the Gatling core SDK"
    package = "@gatling.io/core"


class NpmHttpDependencyRule(_NpmDependencyRule):
    id = "npm-http-dependency"
    description = "package.json declares the Gatling HTTP SDK"
    package = "@gatling.io/http"


class NpmCliToolingRule(_NpmDependencyRule):
    id = "npm-cli-tooling"
    description = "package.json declares the Gatling CLI needed to build and run"
    package = "@gatling.io/cli"


MANIFEST_RULES: tuple[type[ValidationRule], ...] = (
    BuildFileRule,
    MavenCoreDependencyRule,
    MavenBuildPluginRule,
    MavenTestScopeRule,
    MavenVersionPropertyRule,
    MavenCompilerReleaseRule,
    GradleBuildPluginRule,
    GradleCoreDependencyRule,
    NpmCoreDependencyRule,
    NpmHttpDependencyRule,
    NpmCliToolingRule,
)
