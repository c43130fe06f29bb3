"""Unit tests for ProjectWriter.

Tests cover:
- Writing into a missing or empty target
- Refusing an occupied target without writing anything
- Cleanup of the staging directory on failure, keeping an empty target
- Write order and LF line endings
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from gatling_scaffold.errors import DirectoryConflictError, TemplateRenderError
from gatling_scaffold.scaffolder import ProjectWriter, RenderedFile


@pytest.fixture
def writer() -> ProjectWriter:
    return ProjectWriter()


@pytest.fixture
def files() -> list[RenderedFile]:
    return [
        RenderedFile(path="pom.xml", content="<project/>\n"),
        RenderedFile(path="src/test/java/perf/A.java", content="class A {}\n"),
        RenderedFile(path="README.md", content="# demo\n"),
    ]


def _siblings(path: Path) -> list[str]:
    return sorted(p.name for p in path.parent.iterdir())


class TestWrite:
    @pytest.mark.unit
    def test_writes_into_missing_target(self, writer, files, output_dir):
        project = writer.write(files, output_dir / "demo")
        assert project.root == (output_dir / "demo").absolute()
        assert project.files == ("pom.xml", "src/test/java/perf/A.java", "README.md")
        assert (project.root / "src/test/java/perf/A.java").read_text() == "class A {}\n"

    @pytest.mark.unit
    def test_writes_into_empty_target(self, writer, files, output_dir):
        target = output_dir / "demo"
        target.mkdir()
        project = writer.write(files, target)
        assert sorted(p.name for p in project.root.iterdir()) == ["README.md", "pom.xml", "src"]

    @pytest.mark.unit
    def test_creates_missing_parents(self, writer, files, tmp_path):
        project = writer.write(files, tmp_path / "a" / "b" / "demo")
        assert (project.root / "pom.xml").is_file()

    @pytest.mark.unit
    def test_paths_are_absolute(self, writer, files, output_dir):
        project = writer.write(files, output_dir / "demo")
        assert all(path.is_absolute() and path.is_file() for path in project.paths())

    @pytest.mark.unit
    def test_line_endings_are_lf(self, writer, output_dir):
        project = writer.write(
            [RenderedFile(path="a.txt", content="one\ntwo\n")], output_dir / "demo"
        )
        assert (project.root / "a.txt").read_bytes() == b"one\ntwo\n"

    @pytest.mark.unit
    def test_no_staging_directory_left_behind(self, writer, files, output_dir):
        writer.write(files, output_dir / "demo")
        assert _siblings(output_dir / "demo") == ["demo"]


class TestConflicts:
    @pytest.mark.unit
    def test_non_empty_target_is_refused(self, writer, files, output_dir):
        target = output_dir / "demo"
        target.mkdir()
        (target / "keep.txt").write_text("mine")

        with pytest.raises(DirectoryConflictError) as exc_info:
            writer.write(files, target)

        assert exc_info.value.path == target.absolute()
        assert sorted(p.name for p in target.iterdir()) == ["keep.txt"]
        assert (target / "keep.txt").read_text() == "mine"
        assert _siblings(target) == ["demo"]

    @pytest.mark.unit
    def test_file_target_is_refused(self, writer, files, output_dir):
        target = output_dir / "demo"
        target.write_text("not a directory")
        with pytest.raises(DirectoryConflictError):
            writer.write(files, target)
        assert target.read_text() == "not a directory"


class TestFailureCleanup:
    @pytest.mark.unit
    def test_failed_write_leaves_nothing(self, writer, files, output_dir):
        target = output_dir / "demo"
        with patch(
            "gatling_scaffold.scaffolder.writer._write_file",
            side_effect=[files[0].path, OSError("disk full")],
        ):
            with pytest.raises(OSError, match="disk full"):
                writer.write(files, target)

        assert not target.exists()
        assert list(output_dir.iterdir()) == []

    @pytest.mark.unit
    def test_failed_move_restores_empty_target(self, writer, files, output_dir):
        target = output_dir / "demo"
        target.mkdir()
        with patch(
            "gatling_scaffold.scaffolder.writer.os.replace",
            side_effect=OSError("rename failed"),
        ):
            with pytest.raises(OSError, match="rename failed"):
                writer.write(files, target)

        assert target.is_dir()
        assert list(target.iterdir()) == []
        assert _siblings(target) == ["demo"]


class TestPathChecks:
    @pytest.mark.unit
    @pytest.mark.parametrize("rel_path", ["/etc/passwd", "../escape.txt", "a/../../b"])
    def test_escaping_paths_refused(self, writer, output_dir, rel_path):
        with pytest.raises(TemplateRenderError):
            writer.write([RenderedFile(path=rel_path, content="x")], output_dir / "demo")
        assert list(output_dir.iterdir()) == []
