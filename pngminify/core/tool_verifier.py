import subprocess  # nosec B404
from typing import Optional

from pngminify.core.config import DEFAULT_VERSION_MARKER
from pngminify.core.errors import ConfigurationError, IncompatibleToolError
from pngminify.utils.logger import get_logger


# ============================================================================
# Tool Verifier
# ============================================================================


class ToolVerifier:
    """
    Checks that a binary is a pngquant release this package knows how to drive.

    pngquant prints its usage banner, which starts with the version
    (``pngquant, 2.17.0 (...)``), on stderr when run without arguments.
    Verification launches the binary that way, waits for it to exit and looks
    for the version marker in what it wrote.
    """

    def __init__(self, version_marker: str = DEFAULT_VERSION_MARKER, timeout: float = 10.0):
        self.version_marker = version_marker
        self.timeout = timeout
        self.logger = get_logger()

    def verify(self, path: Optional[str]) -> bool:
        """
        Return True only if ``path`` runs and reports a compatible version.

        Blocks until the launched process exits (or ``timeout`` elapses).
        """
        if not path:
            self.logger.warning("Path to pngquant is blank")
            return False

        banner = self._read_banner(path)
        if banner is None:
            return False

        if self.version_marker not in banner:
            self.logger.warning(f"{path} does not look like a compatible pngquant (no '{self.version_marker}')")
            return False

        self.logger.debug(f"Verified pngquant at {path}")
        return True

    def ensure(self, path: Optional[str]) -> None:
        """
        Like :meth:`verify`, but raise instead of returning False.

        Raises:
            ConfigurationError: If ``path`` is empty
            IncompatibleToolError: If the binary is missing or incompatible
        """
        if not path:
            raise ConfigurationError("Path to pngquant is blank")
        if not self.verify(path):
            raise IncompatibleToolError(path, self.version_marker)

    def _read_banner(self, path: str) -> Optional[str]:
        try:
            result = subprocess.run(  # nosec B603
                [path],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except OSError as error:
            self.logger.warning(f"Could not launch {path}: {error}")
            return None
        except subprocess.TimeoutExpired:
            self.logger.warning(f"{path} did not exit within {self.timeout}s")
            return None

        return result.stderr or ""
