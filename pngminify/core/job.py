from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union


# ============================================================================
# Compression Job
# ============================================================================


class JobStatus(str, Enum):
    PENDING = "pending"
    COMPRESSED = "compressed"
    UNCHANGED = "unchanged"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class CompressionJob:
    """
    One file's trip through pngquant.

    ``bytes_after`` stays None when pngquant wrote no output (for example
    because ``--skip-if-larger`` kicked in); the job then counts as unchanged.
    """

    source_path: Path
    bytes_before: int
    bytes_after: Optional[int] = None
    exit_code: Optional[int] = None
    error: Optional[str] = None
    _done: bool = field(default=False, init=False, repr=False, compare=False)
    _cancelled: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "source_path", Path(self.source_path))
        if self.bytes_before < 0:
            raise ValueError(f"bytes_before must be non-negative, got {self.bytes_before}")

    def __setattr__(self, name, value):
        if name == "source_path" and "source_path" in self.__dict__:
            raise AttributeError("source_path cannot be changed after the job is created")
        super().__setattr__(name, value)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "CompressionJob":
        """Create a job, capturing the source file's current size."""
        source_path = Path(path)
        return cls(source_path=source_path, bytes_before=source_path.stat().st_size)

    @property
    def done(self) -> bool:
        return self._done

    @property
    def effective_size(self) -> int:
        """Size to count in totals: the artifact of a successful run, else the source."""
        if self.bytes_after and self.exit_code == 0:
            return self.bytes_after
        return self.bytes_before

    @property
    def status(self) -> JobStatus:
        if self._cancelled:
            return JobStatus.CANCELLED
        if not self._done:
            return JobStatus.PENDING
        if self.error is not None or self.exit_code != 0:
            return JobStatus.FAILED
        if self.bytes_after:
            return JobStatus.COMPRESSED
        return JobStatus.UNCHANGED

    def complete(self, exit_code: int, bytes_after: Optional[int]) -> None:
        """Record the result of the subprocess run. May only happen once."""
        self._ensure_pending()
        self.exit_code = exit_code
        self.bytes_after = bytes_after
        self._done = True

    def fail(self, error: str) -> None:
        """Record that the subprocess could not be launched."""
        self._ensure_pending()
        self.error = error
        self._done = True

    def cancel(self) -> None:
        """Mark a job that was skipped because the batch was cancelled."""
        self._ensure_pending()
        self._cancelled = True
        self._done = True

    def _ensure_pending(self) -> None:
        if self._done:
            raise RuntimeError(f"Job for {self.source_path} has already completed")
