import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from pngminify.core.config import MinifyConfig, ParameterValidator
from pngminify.core.errors import BatchInProgressError, ConfigurationError
from pngminify.core.job import CompressionJob
from pngminify.core.pngquant_executor import LineSink, PngquantExecutor
from pngminify.services.statistics import BatchSummary, StatsAggregator
from pngminify.utils.file_processor import FileProcessor
from pngminify.utils.logger import get_logger


JobSource = Union[CompressionJob, str, Path]


# ============================================================================
# Batch Runner
# ============================================================================


class BatchRunner:
    """
    Drives a list of PNG files through pngquant, one subprocess per file.

    By default files are processed strictly in order and every line for file
    N, including its ``[Finished]`` marker, reaches the sink before file N+1
    starts. With ``max_workers > 1`` files run on a bounded thread pool;
    lines are then tagged with the file name and arrive in completion order.
    """

    def __init__(self, config: Optional[MinifyConfig] = None):
        """
        Initialize batch runner.

        Args:
            config: Batch configuration (artifact suffix, flags, worker count)
        """
        self.config = config or MinifyConfig()
        ParameterValidator.validate(self.config)
        self.logger = get_logger()
        self.file_processor = FileProcessor()

        self._state_lock = threading.Lock()
        self._sink_lock = threading.RLock()
        self._cancel_event = threading.Event()
        self._running = False
        self._executor: Optional[PngquantExecutor] = None
        self._jobs: List[CompressionJob] = []
        self._output: List[str] = []
        self._background: Optional[ThreadPoolExecutor] = None

    @property
    def running(self) -> bool:
        """True while a batch is in progress; hosts poll this to block re-entry."""
        with self._state_lock:
            return self._running

    @property
    def jobs(self) -> List[CompressionJob]:
        return list(self._jobs)

    @property
    def output_lines(self) -> List[str]:
        """Every line emitted by the current (or last) batch."""
        with self._sink_lock:
            return list(self._output)

    def run(
        self,
        tool_path: Optional[str],
        jobs: Iterable[JobSource],
        quality: int,
        on_output_line: Optional[LineSink] = None,
    ) -> BatchSummary:
        """
        Compress every file and return the aggregate summary.

        Per-file problems (non-zero exit codes, missing output, a binary that
        cannot be launched) are logged and counted, never raised.

        Args:
            tool_path: Path to the pngquant executable
            jobs: CompressionJobs or paths to PNG files, in processing order
            quality: pngquant quality, 0-100
            on_output_line: Sink called with each log line as it is produced

        Raises:
            ConfigurationError: If ``tool_path`` is empty
            ValueError: If ``quality`` is out of range
            BatchInProgressError: If another batch is still running
        """
        self._check_arguments(tool_path, quality)
        self._begin()
        try:
            return self._execute(tool_path, jobs, quality, on_output_line)
        finally:
            self._finish()

    def start(
        self,
        tool_path: Optional[str],
        jobs: Iterable[JobSource],
        quality: int,
        on_output_line: Optional[LineSink] = None,
    ) -> "Future[BatchSummary]":
        """
        Run the batch on a background thread and return immediately.

        :attr:`running` is already True when this returns. The sink is called
        from the background thread.
        """
        self._check_arguments(tool_path, quality)
        jobs = list(jobs)
        self._begin()
        try:
            if self._background is None:
                self._background = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pngminify-batch")
            return self._background.submit(self._execute_and_finish, tool_path, jobs, quality, on_output_line)
        except RuntimeError:
            self._finish()
            raise

    def cancel(self) -> None:
        """Stop the running batch: kill the in-flight pngquant and skip remaining files."""
        if not self.running:
            return
        self.logger.notice("Cancelling batch")
        self._cancel_event.set()
        executor = self._executor
        if executor is not None:
            executor.cancel()

    def shutdown(self) -> None:
        """Release the background thread used by :meth:`start`."""
        if self._background is not None:
            self._background.shutdown(wait=True)
            self._background = None

    # ------------------------------------------------------------------
    # Batch lifecycle
    # ------------------------------------------------------------------

    def _check_arguments(self, tool_path: Optional[str], quality: int) -> None:
        if not tool_path:
            raise ConfigurationError("Path to pngquant is blank")
        ParameterValidator.validate_quality(quality)

    def _begin(self) -> None:
        with self._state_lock:
            if self._running:
                raise BatchInProgressError("A batch is already running")
            self._running = True
        self._cancel_event.clear()
        with self._sink_lock:
            self._output = []

    def _finish(self) -> None:
        self._executor = None
        with self._state_lock:
            self._running = False

    def _execute_and_finish(self, tool_path, jobs, quality, on_output_line) -> BatchSummary:
        try:
            return self._execute(tool_path, jobs, quality, on_output_line)
        finally:
            self._finish()

    def _execute(
        self,
        tool_path: str,
        jobs: Iterable[JobSource],
        quality: int,
        on_output_line: Optional[LineSink],
    ) -> BatchSummary:
        batch = [job if isinstance(job, CompressionJob) else CompressionJob.from_path(job) for job in jobs]
        self._jobs = batch
        self._executor = PngquantExecutor(tool_path)
        emit = self._make_emitter(on_output_line)

        self.logger.info(f"Compressing {len(batch)} PNG file(s) at quality {quality}")
        if self.config.max_workers > 1 and len(batch) > 1:
            self._run_concurrent(batch, quality, emit)
        else:
            for job in batch:
                self._run_job_unless_cancelled(job, quality, emit, tagged=False)

        summary = StatsAggregator.summarize(batch)
        emit(summary.format())
        self.logger.notice(
            f"Batch finished: {summary.file_count} file(s), {summary.compressed_count} compressed, "
            f"{summary.failed_count} failed, {summary.cancelled_count} cancelled"
        )
        return summary

    def _run_concurrent(self, batch: List[CompressionJob], quality: int, emit: LineSink) -> None:
        workers = min(self.config.max_workers, len(batch))
        self.logger.debug(f"Running batch on {workers} worker(s); output is tagged by file")
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pngminify-job") as pool:
            futures = [pool.submit(self._run_job_unless_cancelled, job, quality, emit, True) for job in batch]
            for future in as_completed(futures):
                future.result()

    # ------------------------------------------------------------------
    # Single job
    # ------------------------------------------------------------------

    def _run_job_unless_cancelled(self, job: CompressionJob, quality: int, emit: LineSink, tagged: bool) -> None:
        if self._cancel_event.is_set():
            job.cancel()
            self.logger.debug(f"Skipped {job.source_path} (batch cancelled)")
            return
        self._run_job(job, quality, emit, tagged)

    def _run_job(self, job: CompressionJob, quality: int, emit: LineSink, tagged: bool) -> None:
        source = job.source_path
        prefix = f"[{source.name}] " if tagged else ""

        def forward(line: str, _prefix: str = prefix) -> None:
            emit(_prefix + line)

        emit(f"[Running] {source}")
        args = self._executor.build_args(source, quality, self.config.verbose, self.config.skip_if_larger)

        try:
            result = self._executor.run_streaming(args, forward)
        except OSError as error:
            job.fail(str(error))
            self.logger.warning(f"Could not launch pngquant for {source}: {error}")
            emit(f"[Finished] {source} launch failed: {error}")
            return

        emit(f"[Finished] {source} exit code: {result.returncode}")
        if result.returncode != 0:
            # A leftover artifact from an earlier run is not this run's output
            self.logger.warning(f"pngquant exited with code {result.returncode} for {source}")
            job.complete(result.returncode, None)
            return

        bytes_after = self.file_processor.artifact_size(source, self.config.artifact_suffix)
        if bytes_after is None:
            self.logger.debug(f"No output for {source}, before {job.bytes_before}")
        else:
            self.logger.debug(f"Found output for {source}, before {job.bytes_before}, after {bytes_after}")
        job.complete(result.returncode, bytes_after)

    def _make_emitter(self, on_output_line: Optional[LineSink]) -> Callable[[str], None]:
        def emit(line: str) -> None:
            with self._sink_lock:
                self._output.append(line)
                if on_output_line is not None:
                    on_output_line(line)

        return emit
