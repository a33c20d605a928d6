"""
Append-only CSV output for monitoring samples.

The file is kept read-only between writes. Every append clears the flag,
writes one row and sets it again. This only deters accidental edits by other
programs; it is not a lock and gives no atomicity.
"""
import csv
import locale
import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from procmon.config.monitor_config import AUTO_SEPARATOR
from procmon.consts.WriteStatus import WriteStatus
from procmon.models.sample import CSV_HEADER, Sample
from procmon.util.file_utils import clear_read_only, perf_log_name, set_read_only
from procmon.util.log_config import setup_logger

logger = setup_logger(__name__)



def resolve_separator(separator: str) -> str:
    """
    Turn the configured separator into the one written to the file.

    "auto" follows the locale: ';' where the decimal point is ',', else ','.
    """
    if separator != AUTO_SEPARATOR:
        return separator
    decimal_point = locale.localeconv().get("decimal_point", ".")
    return ";" if decimal_point == "," else ","


class CsvSink:

    def __init__(self, path: Path, separator: str = ","):
        self.path = Path(path)
        self.separator = resolve_separator(separator)

    @classmethod
    def create(cls, directory: Path, separator: str = ",", now: Optional[datetime] = None) -> 'CsvSink':
        """
        Create a new PerfLog_<timestamp>.csv in directory with the header row.

        Raises:
            OSError: If the file cannot be created or written
        """
        sink = cls(Path(directory) / perf_log_name(now), separator)
        with open(sink.path, "x", newline="", encoding="utf-8") as f:
            csv.writer(f, delimiter=sink.separator, lineterminator="\n").writerow(CSV_HEADER)
        set_read_only(sink.path)
        logger.info(f"Writing Process Data to: {sink.path}")
        return sink

    def append(self, sample: Sample) -> WriteStatus:
        """
        Append one sample.

        Returns:
            CONTINUE on success, PAUSE if the write failed but the file is
            still there (the sample is dropped), FATAL if the file is gone
        """
        try:
            clear_read_only(self.path)
            try:
                self._write_row(sample.to_row())
            finally:
                self._restore_read_only()
        except OSError as e:
            if self._is_missing():
                logger.error(f"Output file not found: {self.path}")
                return WriteStatus.FATAL
            logger.warning(f"Write access denied ({e}). Data collection will be paused until write access is restored.")
            return WriteStatus.PAUSE
        return WriteStatus.CONTINUE

    def _is_missing(self) -> bool:
        """True only if the file or its directory is gone; unreadable counts as present."""
        try:
            os.stat(self.path)
        except (FileNotFoundError, NotADirectoryError):
            return True
        except OSError:
            return False
        return False

    def _write_row(self, row: List[str]) -> None:
        with open(self.path, "a", newline="", encoding="utf-8") as f:
            csv.writer(f, delimiter=self.separator, lineterminator="\n").writerow(row)

    def _restore_read_only(self) -> None:
        try:
            set_read_only(self.path)
        except (FileNotFoundError, NotADirectoryError):
            # Nothing left to protect; append() reports the missing file
            pass
