# ============================================================================
# Exceptions
# ============================================================================


class PngMinifyError(Exception):
    """Base class for errors raised before a batch can start."""


class ConfigurationError(PngMinifyError, ValueError):
    """The tool path or another setting is missing or invalid."""


class IncompatibleToolError(PngMinifyError, RuntimeError):
    """The binary ran but did not report a supported pngquant version."""

    def __init__(self, tool_path: str, marker: str):
        self.tool_path = tool_path
        self.marker = marker
        super().__init__(f"Compatible pngquant not found at {tool_path} (expected '{marker}' in its output)")


class BatchInProgressError(PngMinifyError, RuntimeError):
    """A batch was started while another one is still running."""
