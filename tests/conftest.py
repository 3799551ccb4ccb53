"""
Shared pytest fixtures and configuration.
"""

import shutil
import stat
import sys
import tempfile
from pathlib import Path

import pytest

from pngminify.core.config import MinifyConfig
from pngminify.utils.logger import get_logger


FAKE_PNGQUANT_TEMPLATE = '''#!{python}
import os
import sys

BANNER = {banner!r}
OUTPUT_SIZES = {output_sizes!r}
EXIT_CODES = {exit_codes!r}

args = sys.argv[1:]
if not args:
    sys.stderr.write(BANNER + "\\n")
    sys.stderr.write("usage:  pngquant [options] [ncolors] -- pngfile [pngfile ...]\\n")
    sys.exit(1)

source = args[-1]
name = os.path.basename(source)
sys.stdout.write("processing " + name + "\\n")
sys.stdout.flush()
sys.stderr.write(name + ": read " + str(os.path.getsize(source)) + " bytes\\n")
sys.stderr.flush()

if name in OUTPUT_SIZES:
    base, ext = os.path.splitext(source)
    with open(base + "-fs8" + ext, "wb") as out:
        out.write(b"q" * OUTPUT_SIZES[name])

sys.exit(EXIT_CODES.get(name, 0))
'''


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep the singleton logger away from the console and log files between tests."""
    get_logger().configure(enable_console=False, enable_file=False)
    yield
    get_logger().configure(enable_console=False, enable_file=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture
def make_png(temp_dir):
    """Factory writing a placeholder PNG of a given size."""

    def _make_png(name: str = "test_image.png", size: int = 1000, directory: Path = None) -> Path:
        path = (directory or temp_dir) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"0" * size)
        return path

    return _make_png


@pytest.fixture
def fake_pngquant(temp_dir):
    """
    Factory writing an executable stand-in for pngquant.

    Args (of the returned callable):
        output_sizes: file name -> size of the ``-fs8`` file to write
        exit_codes: file name -> exit code (default 0)
        banner: text printed on stderr when run without arguments
    """
    if sys.platform == "win32":
        pytest.skip("fake pngquant script needs a POSIX shebang")

    def _fake_pngquant(output_sizes=None, exit_codes=None, banner="pngquant, 2.17.0 (January 2022), by Kornel"):
        script = temp_dir / "bin" / "pngquant"
        script.parent.mkdir(parents=True, exist_ok=True)
        script.write_text(
            FAKE_PNGQUANT_TEMPLATE.format(
                python=sys.executable,
                banner=banner,
                output_sizes=dict(output_sizes or {}),
                exit_codes=dict(exit_codes or {}),
            ),
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _fake_pngquant


@pytest.fixture
def mock_config():
    """Create a sample MinifyConfig."""
    return MinifyConfig(tool_path="/fake/path/to/pngquant", quality=80)
