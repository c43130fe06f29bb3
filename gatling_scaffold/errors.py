"""Exceptions raised by the scaffolder and the validator."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised by gatling-scaffold."""


class InputValidationError(ScaffoldError):
    """A user-supplied value (name, namespace, URL, ...) is malformed."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid {field} {value!r}: {reason}")
        self.field = field
        self.value = value
        self.reason = reason


class UnsupportedComboError(ScaffoldError):
    """The (language, build tool) pair is not in the configuration matrix."""

    def __init__(
        self,
        language: str,
        build_tool: str | None,
        valid: list[str],
        *,
        unknown_language: bool = False,
    ) -> None:
        if unknown_language:
            message = (
                f"Unsupported language {language!r}. "
                f"Supported languages: {', '.join(valid)}"
            )
        else:
            message = (
                f"Build tool {build_tool!r} is not supported for {language}. "
                f"Valid build tools for {language}: {', '.join(valid)}"
            )
        super().__init__(message)
        self.language = language
        self.build_tool = build_tool
        self.valid = list(valid)


class DirectoryConflictError(ScaffoldError):
    """The target root already exists and is not an empty directory."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(
            f"Target directory {path} already exists and is not empty. "
            "Choose another project name or output directory."
        )
        self.path = Path(path)


class TemplateRenderError(ScaffoldError):
    """A template could not be rendered.

    Raised for unresolved placeholders and malformed template output.  This
    indicates a defect in the matrix or the templates, never a user error.
    """


class RuleExecutionError(ScaffoldError):
    """A single validation rule could not complete."""

    def __init__(self, rule_id: str, message: str) -> None:
        super().__init__(message)
        self.rule_id = rule_id
