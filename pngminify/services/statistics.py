from dataclasses import dataclass
from typing import Dict, Iterable, List

from pngminify.core.job import CompressionJob, JobStatus
from pngminify.utils.format import bytes_to_megabytes, format_megabytes, format_percent


# ============================================================================
# Batch Summary
# ============================================================================


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate sizes for one batch, ready for display."""

    total_before: int
    total_after: int
    percent_saved: float
    file_count: int = 0
    compressed_count: int = 0
    failed_count: int = 0
    cancelled_count: int = 0

    @property
    def bytes_saved(self) -> int:
        return self.total_before - self.total_after

    @property
    def mb_before(self) -> float:
        return bytes_to_megabytes(self.total_before)

    @property
    def mb_after(self) -> float:
        return bytes_to_megabytes(self.total_after)

    def format(self) -> str:
        """Human-readable one-liner, e.g. ``Reduced 0.003 MB to 0.0024 MB (-20.00%)``."""
        return (
            f"Reduced {format_megabytes(self.total_before)} to {format_megabytes(self.total_after)} "
            f"({format_percent(self.percent_saved)})"
        )

    def to_dict(self) -> Dict:
        return {
            "total_before": self.total_before,
            "total_after": self.total_after,
            "bytes_saved": self.bytes_saved,
            "percent_saved": self.percent_saved,
            "mb_before": self.mb_before,
            "mb_after": self.mb_after,
            "file_count": self.file_count,
            "compressed_count": self.compressed_count,
            "failed_count": self.failed_count,
            "cancelled_count": self.cancelled_count,
        }


# ============================================================================
# Statistics Aggregator
# ============================================================================


class StatsAggregator:
    """Sums job sizes into a BatchSummary."""

    @staticmethod
    def summarize(jobs: Iterable[CompressionJob]) -> BatchSummary:
        """
        Aggregate a batch.

        Jobs without an artifact count at their original size, never as zero.
        An empty batch (or one made of zero-byte files) reports 0% rather
        than dividing by zero.
        """
        jobs: List[CompressionJob] = list(jobs)
        total_before = sum(job.bytes_before for job in jobs)
        total_after = sum(job.effective_size for job in jobs)

        return BatchSummary(
            total_before=total_before,
            total_after=total_after,
            percent_saved=StatsAggregator.percent_change(total_before, total_after),
            file_count=len(jobs),
            compressed_count=sum(1 for job in jobs if job.status == JobStatus.COMPRESSED),
            failed_count=sum(1 for job in jobs if job.status == JobStatus.FAILED),
            cancelled_count=sum(1 for job in jobs if job.status == JobStatus.CANCELLED),
        )

    @staticmethod
    def percent_change(total_before: int, total_after: int) -> float:
        """Signed change from ``total_before`` to ``total_after`` in percent."""
        if total_before <= 0:
            return 0.0
        return (total_after - total_before) * 100 / total_before
