import math

BYTES_PER_MB = 1024 * 1024


def bytes_to_mb(value: int) -> int:
    """Truncate a byte count to whole megabytes."""
    return int(value) // BYTES_PER_MB


def cpu_percent(cpu_delta_ms: float, elapsed_ms: float, cpu_count: int) -> int:
    """
    Processor time consumed during a wall-clock window, normalized by logical CPUs.

    Args:
        cpu_delta_ms: Processor time consumed in the window (milliseconds)
        elapsed_ms: Length of the window (milliseconds), clamped to >= 1
        cpu_count: Logical processor count, clamped to >= 1

    Returns:
        Floor of the percentage, never negative
    """
    elapsed_ms = max(elapsed_ms, 1.0)
    cpu_count = max(cpu_count, 1)
    value = math.floor(100 * cpu_delta_ms / (cpu_count * elapsed_ms))
    return max(value, 0)


def average(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)
