from .process_info_provider import (
    InstanceMetrics, ProcessAccessError, ProcessGoneError, ProcessHandle, ProcessInfoProvider,
)
from .psutil_provider import PsutilProcessHandle, PsutilProvider

__all__ = [
    "InstanceMetrics", "ProcessAccessError", "ProcessGoneError", "ProcessHandle", "ProcessInfoProvider",
    "PsutilProcessHandle", "PsutilProvider",
]
