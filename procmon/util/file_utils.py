import os
import stat
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


def set_read_only(path: Path) -> None:
    """Clear every write bit on the file (FILE_ATTRIBUTE_READONLY on Windows)."""
    mode = os.stat(path).st_mode
    os.chmod(path, stat.S_IMODE(mode) & ~WRITE_BITS)


def clear_read_only(path: Path) -> None:
    """Give the owner write access back."""
    mode = os.stat(path).st_mode
    os.chmod(path, stat.S_IMODE(mode) | stat.S_IWUSR)


def perf_log_name(now: Optional[datetime] = None) -> str:
    """
    Build the output file name, e.g. PerfLog_240101_13-05-09.csv.

    Args:
        now: Timestamp to use (default: current UTC time)
    """
    now = now or datetime.now(timezone.utc)
    return f"PerfLog_{now.strftime('%y%m%d_%H-%M-%S')}.csv"


def is_executable(path: Path) -> bool:
    """
    Return True if the path points to a file this user may launch.

    On Windows only .exe files are accepted, elsewhere the execute bit decides.
    """
    if not path.is_file():
        return False
    if os.name == "nt":
        return path.suffix.lower() == ".exe"
    return os.access(path, os.X_OK)
