from pathlib import Path
from typing import List, Optional, Union

from pngminify.core.config import DEFAULT_ARTIFACT_SUFFIX


PNG_EXTENSIONS = {".png"}


# ============================================================================
# File Processor
# ============================================================================


class FileProcessor:
    """Handles the file-system side of a batch: artifact paths and PNG discovery."""

    @staticmethod
    def artifact_path(source_file: Union[str, Path], suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> Path:
        """
        Determine where pngquant writes its output for a source file.

        pngquant names its output ``<stem><suffix><ext>`` next to the input,
        e.g. ``icons/a.png`` -> ``icons/a-fs8.png``.

        Args:
            source_file: Path to the source PNG
            suffix: Suffix inserted before the extension

        Returns:
            Path to the expected output file
        """
        source_file = Path(source_file)
        return source_file.with_name(source_file.stem + suffix + source_file.suffix)

    @staticmethod
    def artifact_size(source_file: Union[str, Path], suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> Optional[int]:
        """Return the size of the artifact for ``source_file``, or None if it was not written."""
        out_path = FileProcessor.artifact_path(source_file, suffix)
        try:
            return out_path.stat().st_size
        except FileNotFoundError:
            return None

    @staticmethod
    def is_artifact(file_path: Path, suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> bool:
        """Check whether a file looks like pngquant output from an earlier run."""
        return file_path.stem.endswith(suffix)

    @staticmethod
    def collect_pngs(
        folder: Path,
        recursive: bool = True,
        suffix: Optional[str] = DEFAULT_ARTIFACT_SUFFIX,
    ) -> List[Path]:
        """
        Collect PNG files under a folder in a stable order.

        Args:
            folder: Folder to scan
            recursive: Whether to descend into subfolders
            suffix: Artifact suffix; files already ending with it are skipped.
                    Pass None to keep everything.

        Returns:
            Sorted list of PNG paths
        """
        if not folder.is_dir():
            raise FileNotFoundError(f"Target folder does not exist: {folder}")

        candidates = folder.rglob("*") if recursive else folder.iterdir()
        files = [f for f in candidates if f.is_file() and f.suffix.lower() in PNG_EXTENSIONS]
        if suffix:
            files = [f for f in files if not FileProcessor.is_artifact(f, suffix)]
        return sorted(files)
