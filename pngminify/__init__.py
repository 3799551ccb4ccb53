"""
PngMinify - batch PNG compression through pngquant.
"""

__version__ = "0.1.0"

# Package-level exports for convenience
from pngminify.core.batch_runner import BatchRunner
from pngminify.core.config import MinifyConfig, ParameterValidator
from pngminify.core.errors import BatchInProgressError, ConfigurationError, IncompatibleToolError, PngMinifyError
from pngminify.core.job import CompressionJob, JobStatus
from pngminify.core.pngquant_executor import PngquantExecutor
from pngminify.core.tool_verifier import ToolVerifier
from pngminify.services.messages import get_message
from pngminify.services.statistics import BatchSummary, StatsAggregator
from pngminify.utils.file_processor import FileProcessor
from pngminify.utils.format import format_megabytes, format_percent, format_size


__all__ = [
    "BatchRunner",
    "MinifyConfig",
    "ParameterValidator",
    "PngMinifyError",
    "ConfigurationError",
    "IncompatibleToolError",
    "BatchInProgressError",
    "CompressionJob",
    "JobStatus",
    "PngquantExecutor",
    "ToolVerifier",
    "BatchSummary",
    "StatsAggregator",
    "FileProcessor",
    "get_message",
    "format_megabytes",
    "format_percent",
    "format_size",
]
