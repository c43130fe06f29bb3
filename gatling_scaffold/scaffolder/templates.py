"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``gatling_scaffold/scaffolder/templates/`` directory and renders a whole
template set against a ``ProjectSpec``.  Rendering never writes: it returns
the concrete paths and contents and leaves materialization to the writer.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    UndefinedError,
    select_autoescape,
)

from ..errors import InputValidationError, TemplateRenderError
from . import matrix
from .models import ProjectSpec, RenderedFile, TemplateSet

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Documented defaults
# ---------------------------------------------------------------------------

# Values every template may reference that are not part of ProjectSpec.
DEFAULT_VERSIONS: dict[str, str] = {
    "gatling_version": "3.14.5",
    "gatling_maven_plugin_version": "4.14.0",
    "gatling_gradle_plugin_version": "3.14.5",
    "gatling_js_version": "3.14.5",
    "scala_maven_plugin_version": "4.9.2",
    "kotlin_version": "2.0.0",
    "java_release": "17",
    "node_engine": ">=18",
}

RAMP_DURATION_SECONDS = 60


# ---------------------------------------------------------------------------
# Identifier policy
# ---------------------------------------------------------------------------

_IDENTIFIER = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")
_CLASS_NAME = re.compile(r"[A-Za-z][A-Za-z0-9_]*")
_BASE_URL = re.compile(r"https?://[^\s\"'`\\]+")


def check_identifier(field: str, value: str) -> None:
    """Raise ``InputValidationError`` unless *value* obeys the identifier policy.

    The first character must be a letter; the rest letters, digits, hyphens
    or underscores.
    """
    if not _IDENTIFIER.fullmatch(value):
        raise InputValidationError(
            field,
            value,
            "must start with a letter and contain only letters, digits, "
            "hyphens and underscores",
        )


def check_namespace(value: str, package: bool = False) -> None:
    """Apply the identifier policy to every segment of a dotted namespace.

    With *package* set the namespace becomes a JVM package declaration and
    directory path, so segments must also be valid JVM identifiers (no
    hyphens).
    """
    if package:
        pattern, allowed = _CLASS_NAME, "letters, digits and underscores"
    else:
        pattern, allowed = _IDENTIFIER, "letters, digits, hyphens and underscores"
    for segment in value.split("."):
        if not pattern.fullmatch(segment):
            raise InputValidationError(
                "namespace",
                value,
                f"segment {segment!r} must start with a letter and contain only {allowed}",
            )


def validate_spec(spec: ProjectSpec) -> None:
    """Check every user-supplied value of *spec* before any substitution."""
    check_identifier("project name", spec.name)
    check_namespace(spec.namespace, package=matrix.profile(spec.language).namespaced)
    if not _CLASS_NAME.fullmatch(spec.simulation_class):
        raise InputValidationError(
            "simulation name",
            spec.simulation_class,
            "must start with a letter and contain only letters, digits and underscores",
        )
    if not _BASE_URL.fullmatch(spec.base_url):
        raise InputValidationError(
            "base URL",
            spec.base_url,
            "must be an http:// or https:// URL without spaces or quotes",
        )


def namespace_to_path(namespace: str) -> str:
    """Map a dotted namespace ``a.b.c`` to the nested path ``a/b/c``."""
    return "/".join(namespace.split("."))


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 template sets for project scaffolding.

    Templates use ``StrictUndefined``: a placeholder the context cannot
    resolve is a broken matrix/template invariant and surfaces as
    ``TemplateRenderError`` rather than as an empty string in the output.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filter
        self.env.filters["slugify"] = _slugify_filter

    # -- Context -----------------------------------------------------------

    @staticmethod
    def build_context(spec: ProjectSpec) -> dict[str, Any]:
        """Return the variables available to every path pattern and template."""
        lang = matrix.profile(spec.language)
        return {
            "project_name": spec.name,
            "language": lang.language,
            "build_tool": spec.build_tool,
            "family": lang.family,
            "namespace": spec.namespace,
            "package_path": namespace_to_path(spec.namespace) if lang.namespaced else "",
            "simulation_class": spec.simulation_class,
            "base_url": spec.base_url,
            "users": spec.users,
            "source_root": lang.source_root,
            "file_extension": lang.file_extension,
            "ramp_duration": RAMP_DURATION_SECONDS,
            **DEFAULT_VERSIONS,
        }

    # -- Rendering ---------------------------------------------------------

    def render(self, spec: ProjectSpec, template_set: TemplateSet) -> list[RenderedFile]:
        """Render every applicable template of *template_set* for *spec*.

        Returns:
            Rendered files in template set declaration order.

        Raises:
            InputValidationError: A user-supplied value breaks the policy.
            TemplateRenderError: A template or path pattern is broken.
        """
        validate_spec(spec)
        context = self.build_context(spec)

        rendered: list[RenderedFile] = []
        for entry in template_set.templates:
            if not entry.applies_to(context["language"]):
                continue
            path = _normalise_path(self.render_string(entry.path, context))
            template_name = self.render_string(entry.template, context)
            content = self.render_template(template_name, context)
            rendered.append(RenderedFile(path=path, content=content))
            logger.debug("Rendered %s from %s", path, template_name)
        return rendered

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a single template file with the provided context."""
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except UndefinedError as exc:
            raise TemplateRenderError(
                f"Unresolved placeholder in template {template_name}: {exc}"
            ) from exc
        except TemplateError as exc:
            raise TemplateRenderError(f"Cannot render template {template_name}: {exc}") from exc

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string (used for path patterns)."""
        try:
            return self.env.from_string(template_string).render(**context)
        except UndefinedError as exc:
            raise TemplateRenderError(
                f"Unresolved placeholder in pattern {template_string!r}: {exc}"
            ) from exc
        except TemplateError as exc:
            raise TemplateRenderError(
                f"Cannot render pattern {template_string!r}: {exc}"
            ) from exc


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _normalise_path(raw: str) -> str:
    """Collapse empty segments (a flat layout renders ``root//File``)."""
    path = PurePosixPath(*[part for part in raw.split("/") if part])
    if raw.startswith("/") or ".." in path.parts or not path.parts:
        raise TemplateRenderError(f"Rendered path {raw!r} escapes the project root")
    return path.as_posix()
