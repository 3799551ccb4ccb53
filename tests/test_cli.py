"""
Tests for the pngminify command-line host.
"""

from unittest.mock import MagicMock, patch

import pytest

from pngminify.cli import EXIT_CANCELLED, EXIT_CONFIG_ERROR, EXIT_NO_FILES, EXIT_OK, build_parser, main
from pngminify.services.statistics import BatchSummary


@pytest.mark.unit
class TestCliParser:
    """Tests for argument parsing."""

    def test_defaults(self, temp_dir):
        args = build_parser().parse_args([str(temp_dir)])

        assert args.folder == temp_dir
        assert args.tool_path is None
        assert args.quality == 100
        assert args.suffix == "-fs8"
        assert args.recursive is True
        assert args.workers == 1
        assert args.locale == "en"
        assert args.log_file is True

    def test_missing_folder_argument(self, capsys):
        with pytest.raises(SystemExit):
            main([])

        assert "folder" in capsys.readouterr().err


@pytest.mark.unit
class TestCliMain:
    """Tests for main() with the batch machinery mocked."""

    @patch("pngminify.cli.PngquantExecutor.find_pngquant", return_value=None)
    def test_no_tool_found(self, mock_find, temp_dir, capsys):
        result = main([str(temp_dir), "--no-log-file"])

        assert result == EXIT_CONFIG_ERROR
        assert "Path to pngquant is blank!" in capsys.readouterr().out

    def test_invalid_quality(self, temp_dir, capsys):
        result = main([str(temp_dir), "--pngquant-path", "/fake/pngquant", "--quality", "120", "--no-log-file"])

        assert result == EXIT_CONFIG_ERROR
        assert "quality must be between 0 and 100" in capsys.readouterr().out

    @patch("pngminify.cli.ToolVerifier.verify", return_value=False)
    def test_incompatible_tool(self, mock_verify, temp_dir, capsys):
        result = main([str(temp_dir), "--pngquant-path", "/fake/pngquant", "--no-log-file"])

        assert result == EXIT_CONFIG_ERROR
        assert "Compatible pngquant not found" in capsys.readouterr().out

    @patch("pngminify.cli.ToolVerifier.verify", return_value=False)
    def test_incompatible_tool_japanese(self, mock_verify, temp_dir, capsys):
        main([str(temp_dir), "--pngquant-path", "/fake/pngquant", "--locale", "ja", "--no-log-file"])

        assert "互換性のある pngquant が見つかりません" in capsys.readouterr().out

    @patch("pngminify.cli.ToolVerifier.verify", return_value=True)
    def test_no_png_files(self, mock_verify, temp_dir, capsys):
        result = main([str(temp_dir), "--pngquant-path", "/fake/pngquant", "--no-log-file"])

        assert result == EXIT_NO_FILES
        assert "No PNG files found" in capsys.readouterr().out

    @patch("pngminify.cli.ToolVerifier.verify", return_value=True)
    def test_missing_folder(self, mock_verify, temp_dir, capsys):
        result = main([str(temp_dir / "nope"), "--pngquant-path", "/fake/pngquant", "--no-log-file"])

        assert result == EXIT_CONFIG_ERROR
        assert "does not exist" in capsys.readouterr().out

    @patch("pngminify.cli.BatchRunner")
    @patch("pngminify.cli.ToolVerifier.verify", return_value=True)
    def test_runs_batch_and_prints_summary(self, mock_verify, mock_runner_class, temp_dir, make_png, capsys):
        a = make_png("a.png", 1000)
        b = make_png("nested/b.png", 2000)
        mock_runner = MagicMock()
        mock_runner.start.return_value.result.return_value = BatchSummary(
            total_before=3000, total_after=2400, percent_saved=-20.0, file_count=2, compressed_count=1
        )
        mock_runner_class.return_value = mock_runner

        result = main([str(temp_dir), "--pngquant-path", "/fake/pngquant", "--quality", "70", "--no-log-file"])

        assert result == EXIT_OK
        tool_path, files, quality = mock_runner.start.call_args[0]
        assert tool_path == "/fake/pngquant"
        assert files == [a, b]
        assert quality == 70
        out = capsys.readouterr().out
        assert "Running..." in out
        assert "Compression Complete!" in out
        assert "Reduced 0.003 MB to 0.0024 MB (-20.00%)" in out
        mock_runner.shutdown.assert_called_once()
        mock_runner.cancel.assert_not_called()

    @patch("pngminify.cli.BatchRunner")
    @patch("pngminify.cli.ToolVerifier.verify", return_value=True)
    def test_ctrl_c_cancels_batch(self, mock_verify, mock_runner_class, temp_dir, make_png, capsys):
        make_png("a.png", 1000)
        make_png("b.png", 1000)
        mock_runner = MagicMock()
        mock_runner.start.return_value.result.side_effect = [
            KeyboardInterrupt(),
            BatchSummary(total_before=2000, total_after=1600, percent_saved=-20.0, file_count=2, cancelled_count=1),
        ]
        mock_runner_class.return_value = mock_runner

        result = main([str(temp_dir), "--pngquant-path", "/fake/pngquant", "--no-log-file"])

        assert result == EXIT_CANCELLED
        mock_runner.cancel.assert_called_once()
        mock_runner.shutdown.assert_called_once()
        out = capsys.readouterr().out
        assert "Compression cancelled." in out
        assert "Compression Complete!" not in out
        assert "Reduced 0.002 MB to 0.0016 MB (-20.00%)" in out


@pytest.mark.integration
class TestCliEndToEnd:
    """main() driving a fake pngquant script."""

    def test_full_run(self, temp_dir, make_png, fake_pngquant, capsys):
        images = temp_dir / "images"
        make_png("a.png", 1000, directory=images)
        make_png("b.png", 2000, directory=images)
        tool = fake_pngquant(output_sizes={"a.png": 400})

        result = main([str(images), "--pngquant-path", tool, "--quality", "80", "--no-log-file"])

        assert result == EXIT_OK
        out = capsys.readouterr().out
        assert f"[Running] {images / 'a.png'}" in out
        assert f"[Finished] {images / 'b.png'} exit code: 0" in out
        assert "Reduced 0.003 MB to 0.0024 MB (-20.00%)" in out

    def test_writes_log_file(self, temp_dir, make_png, fake_pngquant):
        images = temp_dir / "images"
        make_png("a.png", 1000, directory=images)
        log_dir = temp_dir / "logs"

        main([str(images), "--pngquant-path", fake_pngquant(), "--log-dir", str(log_dir), "--log-level", "DEBUG"])

        content = next(log_dir.glob("pngminify_*.log")).read_text(encoding="utf-8")
        assert "No output for" in content
        assert "[Finished]" in content

    def test_warning_log_level_still_streams_output(self, temp_dir, make_png, fake_pngquant, capsys):
        images = temp_dir / "images"
        make_png("a.png", 1000, directory=images)
        log_dir = temp_dir / "logs"

        result = main(
            [str(images), "--pngquant-path", fake_pngquant(), "--log-dir", str(log_dir), "--log-level", "WARNING"]
        )

        assert result == EXIT_OK
        out = capsys.readouterr().out
        assert f"[Running] {images / 'a.png'}" in out
        assert "processing a.png" in out
        assert f"[Finished] {images / 'a.png'} exit code: 0" in out
        assert not any("[Running]" in path.read_text(encoding="utf-8") for path in log_dir.glob("*.log"))
