from __future__ import annotations

UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB")


def human_size(num_bytes: float) -> str:
    """Format a byte count using binary steps, e.g. ``1048576 -> "1.0 MB"``.

    Values below 1 KB print as whole bytes.
    """
    value = float(num_bytes)
    if abs(value) < 1024:
        return f"{int(value)} B"

    unit = UNITS[0]
    for unit in UNITS[1:]:
        value /= 1024.0
        if abs(round(value, 1)) < 1024 or unit == UNITS[-1]:
            break
    return f"{value:.1f} {unit}"
