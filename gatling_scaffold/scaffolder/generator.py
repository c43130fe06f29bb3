"""Main scaffolding orchestrator.

Takes a ``ProjectSpec`` and drives the generation path:

    ProjectSpec -> ConfigurationMatrix -> TemplateRenderer -> ProjectWriter

Every user-facing error (bad input, unsupported combo, occupied target) is
raised before the first byte is written.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import matrix
from .models import GeneratedProject, LanguageBuildCombo, ProjectSpec, RenderedFile
from .templates import TemplateRenderer
from .writer import ProjectWriter

logger = logging.getLogger(__name__)


class ProjectGenerator:
    """Generates a Gatling project skeleton for one ``ProjectSpec``."""

    def __init__(
        self,
        spec: ProjectSpec,
        renderer: TemplateRenderer | None = None,
        writer: ProjectWriter | None = None,
    ) -> None:
        self.spec = spec
        self.renderer = renderer or TemplateRenderer()
        self.writer = writer or ProjectWriter()

    # -- Public API --------------------------------------------------------

    def preview(self) -> list[RenderedFile]:
        """Resolve and render the project without touching the filesystem."""
        template_set_id = matrix.resolve(self.spec.language, self.spec.build_tool)
        logger.debug(
            "Resolved %s/%s to template set %s",
            self.spec.language,
            self.spec.build_tool,
            template_set_id,
        )
        return self.renderer.render(self.spec, matrix.template_set(template_set_id))

    def generate(self, target_root: str | Path) -> GeneratedProject:
        """Generate the complete project under *target_root*.

        Args:
            target_root: Directory that becomes the project root.  It must
                not exist yet or be empty.

        Returns:
            The written project.
        """
        rendered = self.preview()
        combo = LanguageBuildCombo(language=self.spec.language, build_tool=self.spec.build_tool)
        project = self.writer.write(rendered, Path(target_root), combo=combo)
        logger.debug("Generated %d files under %s", len(project.files), project.root)
        return project
