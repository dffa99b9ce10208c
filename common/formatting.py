"""Human-readable formatting helpers shared by the gateway and the CLI."""


def format_size(size_bytes: int) -> str:
    """
    Format a byte count using 1024-based units with one decimal.

    Args:
        size_bytes: Size in bytes (non-negative)

    Returns:
        Formatted string, e.g. "512 B", "1.0 KB", "2.4 MB"
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    kb = size_bytes / 1024.0
    if kb < 1024:
        return f"{kb:.1f} KB"

    mb = kb / 1024.0
    if mb < 1024:
        return f"{mb:.1f} MB"

    gb = mb / 1024.0
    return f"{gb:.1f} GB"
