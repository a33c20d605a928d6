from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from procmon.models.sample import CSV_HEADER
from procmon.util.log_config import setup_logger

logger = setup_logger(__name__)

MIN_INTERVAL_SECONDS = 1
MAX_INTERVAL_SECONDS = 30
DEFAULT_SETTLE_DELAY = 0.5  # seconds
DEFAULT_LAUNCH_DELAY = 0.5  # seconds
AUTO_SEPARATOR = "auto"
# quote, line breaks, and characters that occur inside timestamps
RESERVED_SEPARATOR_CHARS = "\"\r\n-:"


class ConfigError(ValueError):
    """Raised for configuration or command-line values that cannot be used."""


def clamp_interval(value) -> int:
    """
    Validate an update interval in seconds.

    Args:
        value: Interval as int or numeric string

    Returns:
        The interval, limited to MAX_INTERVAL_SECONDS

    Raises:
        ConfigError: If the value is not an integer or is below 1
    """
    try:
        interval = int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid interval '{value}'. Enter a number greater than 0.") from None
    if interval < MIN_INTERVAL_SECONDS:
        raise ConfigError(f"Invalid interval '{value}'. Enter a number greater than 0.")
    if interval > MAX_INTERVAL_SECONDS:
        logger.warning(f"Input value too high. Limiting to {MAX_INTERVAL_SECONDS} seconds ...")
        return MAX_INTERVAL_SECONDS
    return interval


def validate_separator(value: str) -> str:
    """
    Accept "auto" or a single character that never occurs inside a field.

    Raises:
        ConfigError: If the csv module would have to quote or split fields
    """
    if value == AUTO_SEPARATOR:
        return value
    if len(value) != 1:
        raise ConfigError(f"separator must be a single character or 'auto', got {value!r}")
    if value in RESERVED_SEPARATOR_CHARS or value.isalnum() or value in "".join(CSV_HEADER):
        raise ConfigError(f"separator {value!r} would break CSV records")
    return value


@dataclass
class MonitorConfig:
    executable: Optional[Path] = None
    args: List[str] = field(default_factory=list)
    interval_seconds: Optional[int] = None
    output_dir: Optional[Path] = None
    separator: str = ","
    terminate_existing: bool = True
    settle_delay_seconds: float = DEFAULT_SETTLE_DELAY
    launch_delay_seconds: float = DEFAULT_LAUNCH_DELAY
    log_file: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def interval_millis(self) -> int:
        if self.interval_seconds is None:
            raise ConfigError("Update interval is not set")
        return self.interval_seconds * 1000

    def __str__(self):
        return (f"MonitorConfig(\n"
                f"  executable={self.executable},\n"
                f"  args={self.args},\n"
                f"  interval_seconds={self.interval_seconds},\n"
                f"  output_dir={self.output_dir},\n"
                f"  separator={self.separator!r},\n"
                f"  terminate_existing={self.terminate_existing}\n"
                f")")
