"""Human-readable byte size formatting."""

SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_size(num_bytes: int) -> str:
    """Format a byte count using 1024-based units.

    The value is divided by 1024 until it drops below 1024 or the largest unit
    (GB) is reached, rounded to two decimals, and printed without trailing zeros.

    Args:
        num_bytes: A non-negative byte count.

    Returns:
        The formatted size, e.g. ``"1.5 KB"``.

    Example:
        >>> format_size(0)
        '0 B'
        >>> format_size(1536)
        '1.5 KB'
        >>> format_size(1024 * 1024)
        '1 MB'
        >>> format_size(1234567)
        '1.18 MB'
    """
    if num_bytes == 0:
        return "0 B"

    value = float(num_bytes)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1

    formatted = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{formatted} {SIZE_UNITS[unit_index]}"
