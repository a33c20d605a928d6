"""Models for process monitor data structures."""

from .sample import AggregateMetrics, Sample, CSV_HEADER
from .monitor_result import MonitorResult

__all__ = ["AggregateMetrics", "Sample", "CSV_HEADER", "MonitorResult"]
