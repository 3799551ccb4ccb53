# ============================================================================
# Utility Functions
# ============================================================================

# pngquant users compare against file managers that report decimal units,
# so every size here uses 1000, not 1024.
BYTES_PER_MB = 1000 * 1000


def bytes_to_megabytes(size_bytes: int) -> float:
    """Convert bytes to decimal megabytes."""
    return size_bytes / BYTES_PER_MB


def format_megabytes(size_bytes: int, precision: int = 4) -> str:
    """
    Format bytes as decimal megabytes with trailing zeros trimmed.

    Examples:
        3000 -> "0.003 MB", 2_500_000 -> "2.5 MB", 0 -> "0 MB"
    """
    value = f"{bytes_to_megabytes(size_bytes):.{precision}f}".rstrip("0").rstrip(".")
    return f"{value} MB"


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable size using decimal units."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(size) < 1000.0:
            return f"{size:.2f} {unit}"
        size /= 1000.0
    return f"{size:.2f} PB"


def format_percent(percent: float) -> str:
    """Format a signed percentage (negative means the batch got smaller)."""
    return f"{percent:+.2f}%" if percent else "0.00%"
