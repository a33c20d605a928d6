from dataclasses import dataclass
from datetime import datetime
from typing import List

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

CSV_HEADER = [
    "Timestamp (UTC)",
    "CPU Usage (%)",
    "Physical Memory (MB)",
    "Private Memory (MB)",
    "Open Handles",
]


@dataclass(frozen=True)
class AggregateMetrics:
    """Memory and handle totals across all instances sharing a process name"""
    working_set_mb: int = 0
    private_mb: int = 0
    open_handles: int = 0
    instance_count: int = 0


@dataclass(frozen=True)
class Sample:
    """
    One measurement cycle of the monitored process.

    cpu_percent covers the interval that just elapsed; the memory and handle
    fields are a single reading taken right after it.
    """
    timestamp_utc: datetime
    cpu_percent: int
    working_set_mb: int
    private_mb: int
    open_handles: int

    @classmethod
    def build(cls, timestamp_utc: datetime, cpu_percent: int, metrics: AggregateMetrics) -> 'Sample':
        return cls(
            timestamp_utc=timestamp_utc,
            cpu_percent=cpu_percent,
            working_set_mb=metrics.working_set_mb,
            private_mb=metrics.private_mb,
            open_handles=metrics.open_handles,
        )

    def to_row(self) -> List[str]:
        """CSV fields in column order"""
        return [
            self.timestamp_utc.strftime(TIMESTAMP_FORMAT),
            str(self.cpu_percent),
            str(self.working_set_mb),
            str(self.private_mb),
            str(self.open_handles),
        ]
