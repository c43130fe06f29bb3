"""Configuration matrix of supported (language, build tool) combinations.

Each language belongs to a family that decides its layout and the template
set it renders with:

* ``jvm`` -- Java, Kotlin and Scala.  Sources live under
  ``src/test/<lang>/<namespace path>/`` and the build is Maven or Gradle.
* ``js`` -- TypeScript and JavaScript.  Sources live flat under
  ``src/simulations/`` and the build is always npm.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..errors import UnsupportedComboError
from .models import FileTemplate, LanguageBuildCombo, TemplateSet


class LanguageProfile(BaseModel):
    """Static facts about one supported language."""

    model_config = ConfigDict(frozen=True)

    language: str
    family: str
    build_tools: tuple[str, ...]
    source_root: str
    file_extension: str
    namespaced: bool

    @property
    def default_build_tool(self) -> str:
        return self.build_tools[0]


# ---------------------------------------------------------------------------
# Language table
# ---------------------------------------------------------------------------

_JVM_BUILD_TOOLS = ("maven", "gradle")
_JS_BUILD_TOOLS = ("npm",)

LANGUAGES: dict[str, LanguageProfile] = {
    "java": LanguageProfile(
        language="java",
        family="jvm",
        build_tools=_JVM_BUILD_TOOLS,
        source_root="src/test/java",
        file_extension="java",
        namespaced=True,
    ),
    "kotlin": LanguageProfile(
        language="kotlin",
        family="jvm",
        build_tools=_JVM_BUILD_TOOLS,
        source_root="src/test/kotlin",
        file_extension="kt",
        namespaced=True,
    ),
    "scala": LanguageProfile(
        language="scala",
        family="jvm",
        build_tools=_JVM_BUILD_TOOLS,
        source_root="src/test/scala",
        file_extension="scala",
        namespaced=True,
    ),
    "typescript": LanguageProfile(
        language="typescript",
        family="js",
        build_tools=_JS_BUILD_TOOLS,
        source_root="src/simulations",
        file_extension="ts",
        namespaced=False,
    ),
    "javascript": LanguageProfile(
        language="javascript",
        family="js",
        build_tools=_JS_BUILD_TOOLS,
        source_root="src/simulations",
        file_extension="js",
        namespaced=False,
    ),
}


# ---------------------------------------------------------------------------
# Template sets (declaration order is write order)
# ---------------------------------------------------------------------------

_JVM_COMMON: tuple[FileTemplate, ...] = (
    FileTemplate(path="src/test/resources/gatling.conf", template="jvm/gatling.conf.j2"),
    FileTemplate(path="src/test/resources/logback-test.xml", template="jvm/logback-test.xml.j2"),
    FileTemplate(path="src/test/resources/data/users.csv", template="common/users.csv.j2"),
    FileTemplate(
        path="{{ source_root }}/{{ package_path }}/{{ simulation_class }}.{{ file_extension }}",
        template="jvm/simulation.{{ language }}.j2",
    ),
    FileTemplate(path=".gitignore", template="common/gitignore.j2"),
    FileTemplate(path="README.md", template="common/README.md.j2"),
)

TEMPLATE_SETS: dict[str, TemplateSet] = {
    "jvm-maven": TemplateSet(
        id="jvm-maven",
        templates=(FileTemplate(path="pom.xml", template="jvm/pom.xml.j2"),) + _JVM_COMMON,
    ),
    "jvm-gradle": TemplateSet(
        id="jvm-gradle",
        templates=(FileTemplate(path="build.gradle", template="jvm/build.gradle.j2"),)
        + _JVM_COMMON,
    ),
    "js-npm": TemplateSet(
        id="js-npm",
        templates=(
            FileTemplate(path="package.json", template="js/package.json.j2"),
            FileTemplate(
                path="tsconfig.json",
                template="js/tsconfig.json.j2",
                languages=frozenset({"typescript"}),
            ),
            FileTemplate(path="src/resources/data/users.csv", template="common/users.csv.j2"),
            FileTemplate(
                path="{{ source_root }}/{{ simulation_class }}.gatling.{{ file_extension }}",
                template="js/simulation.gatling.j2",
            ),
            FileTemplate(path=".gitignore", template="common/gitignore.j2"),
            FileTemplate(path="README.md", template="common/README.md.j2"),
        ),
    ),
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def profile(language: str) -> LanguageProfile:
    """Return the profile of *language* or raise ``UnsupportedComboError``."""
    key = language.strip().lower()
    try:
        return LANGUAGES[key]
    except KeyError:
        raise UnsupportedComboError(
            language, None, list(LANGUAGES), unknown_language=True
        ) from None


def default_build_tool(language: str) -> str:
    """Return the preferred build tool for *language*."""
    return profile(language).default_build_tool


def resolve(language: str, build_tool: str) -> str:
    """Resolve a (language, build tool) pair to its template set id.

    Raises:
        UnsupportedComboError: The language is unknown, or the build tool is
            not offered for it.  The message lists the valid alternatives.
    """
    lang = profile(language)
    tool = build_tool.strip().lower()
    if tool not in lang.build_tools:
        raise UnsupportedComboError(lang.language, build_tool, list(lang.build_tools))
    return f"{lang.family}-{tool}"


def template_set(template_set_id: str) -> TemplateSet:
    """Return the template set registered under *template_set_id*."""
    return TEMPLATE_SETS[template_set_id]


def supported_combos() -> list[LanguageBuildCombo]:
    """Every supported combo, in declaration order."""
    return [
        LanguageBuildCombo(language=lang.language, build_tool=tool)
        for lang in LANGUAGES.values()
        for tool in lang.build_tools
    ]
