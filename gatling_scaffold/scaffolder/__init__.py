"""Gatling project scaffolder -- generates complete project structures.

This package resolves a (language, build tool) pair against the
configuration matrix, renders the matching Jinja2 template set and writes
the result atomically.

Quick usage::

    from gatling_scaffold.scaffolder import ProjectGenerator, ProjectSpec

    spec = ProjectSpec(
        name="my-perf-tests",
        language="java",
        build_tool="maven",
        namespace="com.example.perf",
    )
    project = ProjectGenerator(spec).generate("./my-perf-tests")
"""

from gatling_scaffold.scaffolder.generator import ProjectGenerator
from gatling_scaffold.scaffolder.matrix import (
    LanguageProfile,
    resolve,
    supported_combos,
    template_set,
)
from gatling_scaffold.scaffolder.models import (
    FileTemplate,
    GeneratedProject,
    LanguageBuildCombo,
    ProjectSpec,
    RenderedFile,
    TemplateSet,
)
from gatling_scaffold.scaffolder.templates import TemplateRenderer
from gatling_scaffold.scaffolder.writer import ProjectWriter

__all__ = [
    "FileTemplate",
    "GeneratedProject",
    "LanguageBuildCombo",
    "LanguageProfile",
    "ProjectGenerator",
    "ProjectSpec",
    "ProjectWriter",
    "RenderedFile",
    "TemplateRenderer",
    "TemplateSet",
    "resolve",
    "supported_combos",
    "template_set",
]
