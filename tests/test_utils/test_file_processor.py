"""
Tests for pngminify.utils.file_processor module.
"""

from pathlib import Path

import pytest

from pngminify.utils.file_processor import FileProcessor


@pytest.mark.unit
class TestFileProcessor:
    """Tests for FileProcessor class."""

    def test_artifact_path_default_suffix(self):
        assert FileProcessor.artifact_path(Path("icons/a.png")) == Path("icons/a-fs8.png")

    def test_artifact_path_keeps_extension_case(self):
        assert FileProcessor.artifact_path("icons/Logo.PNG") == Path("icons/Logo-fs8.PNG")

    def test_artifact_path_custom_suffix(self):
        assert FileProcessor.artifact_path("a.png", "-or8") == Path("a-or8.png")

    def test_artifact_path_with_dots_and_spaces(self):
        assert FileProcessor.artifact_path("my dir/sprite.sheet.png") == Path("my dir/sprite.sheet-fs8.png")

    def test_artifact_size_present(self, make_png):
        source = make_png("a.png", 1000)
        make_png("a-fs8.png", 400)

        assert FileProcessor.artifact_size(source) == 400

    def test_artifact_size_missing(self, make_png):
        source = make_png("a.png", 1000)

        assert FileProcessor.artifact_size(source) is None

    def test_is_artifact(self):
        assert FileProcessor.is_artifact(Path("a-fs8.png"))
        assert not FileProcessor.is_artifact(Path("a.png"))

    def test_collect_pngs_recursive(self, temp_dir, make_png):
        make_png("b.png")
        make_png("a.png")
        make_png("nested/c.png")
        make_png("nested/photo.jpg")
        make_png("a-fs8.png")

        files = FileProcessor.collect_pngs(temp_dir)

        assert files == [temp_dir / "a.png", temp_dir / "b.png", temp_dir / "nested" / "c.png"]

    def test_collect_pngs_top_level_only(self, temp_dir, make_png):
        make_png("a.png")
        make_png("nested/c.png")

        assert FileProcessor.collect_pngs(temp_dir, recursive=False) == [temp_dir / "a.png"]

    def test_collect_pngs_uppercase_extension(self, temp_dir, make_png):
        make_png("ICON.PNG")

        assert FileProcessor.collect_pngs(temp_dir) == [temp_dir / "ICON.PNG"]

    def test_collect_pngs_keeps_artifacts_without_suffix(self, temp_dir, make_png):
        make_png("a.png")
        make_png("a-fs8.png")

        assert len(FileProcessor.collect_pngs(temp_dir, suffix=None)) == 2

    def test_collect_pngs_missing_folder(self, temp_dir):
        with pytest.raises(FileNotFoundError, match="does not exist"):
            FileProcessor.collect_pngs(temp_dir / "missing")
