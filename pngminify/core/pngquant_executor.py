import queue
import shutil
import subprocess  # nosec B404
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set, Union

from pngminify.core.errors import ConfigurationError
from pngminify.utils.logger import get_logger


LineSink = Callable[[str], None]


# ============================================================================
# Pngquant Executor
# ============================================================================


class PngquantExecutor:
    """Handles pngquant execution and live output streaming."""

    def __init__(self, tool_path: Optional[str] = None):
        """
        Initialize pngquant executor.

        Args:
            tool_path: Path to pngquant executable. If None, will attempt to find it.
        """
        self.tool_path = tool_path or self.find_pngquant()
        if not self.tool_path:
            raise ConfigurationError(
                "pngquant not found. Please install pngquant and add it to PATH, "
                "or specify the path using --pngquant-path option."
            )
        self.logger = get_logger()
        self._active: Set[subprocess.Popen] = set()
        self._active_lock = threading.Lock()
        self._cancelled = threading.Event()

    @staticmethod
    def find_pngquant() -> Optional[str]:
        """Find pngquant executable in PATH or common locations."""
        tool_path = shutil.which("pngquant")
        if tool_path:
            return tool_path

        common_paths = [
            "/usr/local/bin/pngquant",
            "/opt/homebrew/bin/pngquant",
            r"C:\pngquant\pngquant.exe",
            r"C:\Program Files\pngquant\pngquant.exe",
        ]

        for path in common_paths:
            if Path(path).exists():
                return path

        return None

    @staticmethod
    def build_args(
        source: Union[str, Path], quality: int, verbose: bool = True, skip_if_larger: bool = True
    ) -> List[str]:
        """
        Build pngquant arguments for compressing one file.

        The source goes in as its own argv entry, so paths with spaces need no quoting.
        """
        args: List[str] = []
        if verbose:
            args.append("--verbose")
        args.extend(["--quality", str(quality)])
        if skip_if_larger:
            args.append("--skip-if-larger")
        args.append(str(source))
        return args

    def run_streaming(self, args: List[str], on_line: Optional[LineSink] = None) -> subprocess.CompletedProcess:
        """
        Run pngquant, forwarding each output line as soon as it is written.

        Lines from stdout and stderr are delivered on the calling thread, one at
        a time, so ``on_line`` never needs its own locking. If ``on_line``
        raises, the process is killed before the exception propagates.

        Args:
            args: List of pngquant arguments
            on_line: Callback receiving each line without its trailing newline

        Returns:
            CompletedProcess with the captured stdout/stderr text

        Raises:
            OSError: If the executable cannot be launched
        """
        cmd = [self.tool_path] + args
        self.logger.debug(f"Launching: {' '.join(cmd)}")

        process = self._launch_process(cmd)
        with self._active_lock:
            self._active.add(process)
            stopping = self._cancelled.is_set()
        try:
            if stopping:
                self._stop_process(process)
            captured = self._pump_output(process, on_line)
            returncode = process.wait()
        finally:
            if process.poll() is None:
                self.logger.debug(f"Killing pngquant process {process.pid} left running")
                process.kill()
                process.wait()
            with self._active_lock:
                self._active.discard(process)

        return subprocess.CompletedProcess(
            cmd, returncode, "\n".join(captured["stdout"]), "\n".join(captured["stderr"])
        )

    def cancel(self, grace: float = 5.0) -> None:
        """
        Terminate in-flight processes and any process launched after this call.

        An executor stays cancelled; create a new one for the next batch.
        """
        self._cancelled.set()
        self.terminate(grace)

    def terminate(self, grace: float = 5.0) -> None:
        """Terminate every pngquant process this executor currently has in flight."""
        with self._active_lock:
            processes = list(self._active)

        for process in processes:
            self._stop_process(process, grace)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def active_count(self) -> int:
        with self._active_lock:
            return len(self._active)

    def _stop_process(self, process: subprocess.Popen, grace: float = 5.0) -> None:
        if process.poll() is not None:
            return
        self.logger.debug(f"Terminating pngquant process {process.pid}")
        process.terminate()
        try:
            process.wait(timeout=grace)
        except subprocess.TimeoutExpired:
            process.kill()

    def _launch_process(self, cmd: List[str]) -> subprocess.Popen:
        return subprocess.Popen(  # nosec B603
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )

    def _pump_output(self, process: subprocess.Popen, on_line: Optional[LineSink]) -> Dict[str, List[str]]:
        lines: "queue.Queue" = queue.Queue()
        captured: Dict[str, List[str]] = {"stdout": [], "stderr": []}
        readers = [
            threading.Thread(target=self._read_stream, args=(name, stream, lines), daemon=True)
            for name, stream in (("stdout", process.stdout), ("stderr", process.stderr))
        ]
        for reader in readers:
            reader.start()

        open_streams = len(readers)
        while open_streams:
            name, line = lines.get()
            if line is None:
                open_streams -= 1
                continue
            captured[name].append(line)
            if on_line is not None:
                on_line(line)

        for reader in readers:
            reader.join()
        return captured

    @staticmethod
    def _read_stream(name: str, stream, lines: "queue.Queue") -> None:
        try:
            for raw in iter(stream.readline, ""):
                lines.put((name, raw.rstrip("\r\n")))
        finally:
            stream.close()
            lines.put((name, None))
