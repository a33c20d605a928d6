import time
from typing import Callable, Optional

from procmon.service.provider.process_info_provider import ProcessAccessError, ProcessHandle
from procmon.util.cal_utils import cpu_percent
from procmon.util.log_config import setup_logger

logger = setup_logger(__name__)


class CpuSampler:
    """
    Measure CPU usage of a process over one update interval.

    The sleep inside measure_cpu is the only wait in a monitoring cycle, so it
    also paces the heartbeat loop.
    """

    def __init__(
        self,
        cpu_count: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            cpu_count: Logical processor count used for normalization
            clock: Seconds from a monotonic clock
            sleep: Blocking sleep taking seconds
        """
        self.cpu_count = cpu_count
        self.clock = clock
        self.sleep = sleep

    def measure_cpu(self, handle: ProcessHandle, interval_millis: int) -> int:
        """
        Sleep for interval_millis and return the CPU% the process used meanwhile.

        An unreadable processor time gives 0; the full interval is still slept.

        Raises:
            ProcessGoneError: If the process vanished before either reading
        """
        start = self.clock()
        cpu_before = self._read(handle)
        self.sleep(interval_millis / 1000)
        cpu_after = self._read(handle)
        elapsed_ms = (self.clock() - start) * 1000

        if cpu_before is None or cpu_after is None:
            return 0
        if elapsed_ms <= 0:
            logger.debug(f"Clock anomaly: elapsed {elapsed_ms:.3f} ms, clamping to 1 ms")

        return cpu_percent((cpu_after - cpu_before) * 1000, elapsed_ms, self.cpu_count)

    @staticmethod
    def _read(handle: ProcessHandle) -> Optional[float]:
        try:
            return handle.processor_time()
        except ProcessAccessError as e:
            logger.warning(f"CPU usage unavailable: {e}")
            return None
