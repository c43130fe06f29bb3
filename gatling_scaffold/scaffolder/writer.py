"""Materializes rendered files on disk.

Files are written into a hidden staging directory next to the target and the
finished tree is moved into place in one rename, so an interrupted or failed
write never leaves a half-populated project behind.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from ..errors import DirectoryConflictError, TemplateRenderError
from .models import GeneratedProject, LanguageBuildCombo, RenderedFile

logger = logging.getLogger(__name__)


class ProjectWriter:
    """Writes a rendered template set under a target root."""

    def write(
        self,
        files: Iterable[RenderedFile],
        target_root: str | Path,
        combo: LanguageBuildCombo | None = None,
    ) -> GeneratedProject:
        """Write *files* (in the given order) and move them to *target_root*.

        A missing or empty target root is fine; anything else is refused.

        Raises:
            DirectoryConflictError: *target_root* exists and is a file or a
                non-empty directory.  Nothing is written.
            TemplateRenderError: A rendered path is absolute or escapes the
                target root.  Nothing is written.
            OSError: Writing failed.  The target root is left untouched.
        """
        target = Path(target_root).absolute()
        self.check_target(target)

        files = list(files)
        for rendered in files:
            _check_relative(rendered.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{target.name}.", dir=target.parent))
        logger.debug("Staging %d files in %s", len(files), staging)

        emptied = False
        try:
            written = [_write_file(staging, rendered) for rendered in files]
            # mkdtemp creates the directory as 0700.
            staging.chmod(0o755)
            # Re-check: the target may have been populated while staging.
            self.check_target(target)
            if target.is_dir():
                target.rmdir()
                emptied = True
            os.replace(staging, target)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            if emptied and not target.exists():
                target.mkdir()
            raise

        logger.debug("Moved project into %s", target)
        return GeneratedProject(root=target, files=tuple(written), combo=combo)

    @staticmethod
    def check_target(target: Path) -> None:
        """Raise ``DirectoryConflictError`` unless *target* is absent or empty."""
        if not target.exists():
            return
        if not target.is_dir() or any(target.iterdir()):
            raise DirectoryConflictError(target)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _check_relative(rel_path: str) -> None:
    parts = PurePosixPath(rel_path).parts
    if not parts or rel_path.startswith("/") or ".." in parts:
        raise TemplateRenderError(f"Rendered path {rel_path!r} escapes the project root")


def _write_file(root: Path, rendered: RenderedFile) -> str:
    """Create parent dirs under *root* and write one rendered file."""
    path = root / rendered.path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(rendered.content, encoding="utf-8", newline="\n")
    return rendered.path
