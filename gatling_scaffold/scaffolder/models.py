"""Data models shared by the scaffolding pipeline.

``ProjectSpec`` is the single user-declared input; everything else is either
static matrix data (``LanguageBuildCombo``, ``FileTemplate``, ``TemplateSet``)
or pipeline output (``RenderedFile``, ``GeneratedProject``).  All models are
frozen: once built they are never mutated.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectSpec(BaseModel):
    """Pydantic model describing the project to scaffold."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name (directory, artifactId, package name)")
    language: str = Field(..., description="Simulation language, e.g. 'java' or 'typescript'")
    build_tool: str = Field(..., description="Build tool, e.g. 'maven', 'gradle' or 'npm'")
    namespace: str = Field(default="perf", description="Dotted base package (JVM only)")
    simulation_class: str = Field(
        default="ApiSimulation", description="Name of the generated simulation"
    )
    base_url: str = Field(default="https://api.example.com", description="Target base URL")
    users: int = Field(default=10, ge=1, description="Default concurrent user count")

    @field_validator("language", "build_tool")
    @classmethod
    def normalise_choice(cls, value: str) -> str:
        """Matrix keys are lower-case; accept any casing and stray whitespace."""
        return value.strip().lower()


class LanguageBuildCombo(BaseModel):
    """A supported (language, build tool) pair."""

    model_config = ConfigDict(frozen=True)

    language: str
    build_tool: str

    def __str__(self) -> str:
        return f"{self.language}/{self.build_tool}"


class FileTemplate(BaseModel):
    """One file in a template set.

    Both ``path`` and ``template`` are Jinja2 expressions rendered against the
    same context as the file body, so a single entry can serve a whole
    language family (``jvm/simulation.{{ language }}.j2``).
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Output path pattern, relative to the project root")
    template: str = Field(..., description="Template name pattern under the templates dir")
    languages: frozenset[str] | None = Field(
        default=None, description="Restrict the entry to these languages"
    )

    def applies_to(self, language: str) -> bool:
        return self.languages is None or language in self.languages


class TemplateSet(BaseModel):
    """Ordered collection of file templates bound to one combo family."""

    model_config = ConfigDict(frozen=True)

    id: str
    templates: tuple[FileTemplate, ...]


class RenderedFile(BaseModel):
    """A concrete file produced by the renderer: relative path plus content."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="POSIX path relative to the project root")
    content: str


class GeneratedProject(BaseModel):
    """The materialized project tree returned by the writer."""

    model_config = ConfigDict(frozen=True)

    root: Path
    files: tuple[str, ...] = Field(
        default=(), description="Written files, relative to root, in write order"
    )
    combo: LanguageBuildCombo | None = Field(
        default=None, description="The combo the project was generated for"
    )

    def paths(self) -> list[Path]:
        """Return the absolute path of every written file."""
        return [self.root / Path(rel) for rel in self.files]
