import time
from datetime import datetime, timezone
from typing import Callable

from procmon.consts.MonitorState import MonitorState, StopReason
from procmon.consts.WriteStatus import WriteStatus
from procmon.models.monitor_result import MonitorResult
from procmon.models.sample import Sample
from procmon.service.aggregator.process_aggregator import ProcessAggregator
from procmon.service.provider.process_info_provider import ProcessGoneError, ProcessHandle
from procmon.service.sampler.cpu_sampler import CpuSampler
from procmon.service.sink.csv_sink import CsvSink
from procmon.util.log_config import setup_logger

logger = setup_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Heartbeat:
    """
    Sample -> aggregate -> append, once per interval, while the process lives.

    Runs on the caller's thread. The sampler's sleep is the only pacing; the
    next cycle starts as soon as the previous append returns.
    """

    def __init__(
        self,
        handle: ProcessHandle,
        sampler: CpuSampler,
        aggregator: ProcessAggregator,
        sink: CsvSink,
        interval_millis: int,
        now: Callable[[], datetime] = utc_now,
    ):
        self.handle = handle
        self.sampler = sampler
        self.aggregator = aggregator
        self.sink = sink
        self.interval_millis = interval_millis
        self.now = now
        self.state = MonitorState.RUNNING
        self.result = MonitorResult(output_file=sink.path)

    def run(self) -> MonitorResult:
        """Loop until the process exits or the output file disappears."""
        started = time.monotonic()
        logger.info(f"Monitoring {self.handle.name} (pid {self.handle.pid}) every {self.interval_millis // 1000}s")

        while self.state == MonitorState.RUNNING:
            if not self.handle.is_alive():
                logger.info("Process has been terminated.")
                self._stop(StopReason.PROCESS_EXITED)
                break
            self.cycle()

        self.result.duration_seconds = time.monotonic() - started
        return self.result

    def cycle(self) -> None:
        """One measurement: may leave the loop RUNNING or move it to STOPPED."""
        try:
            cpu = self.sampler.measure_cpu(self.handle, self.interval_millis)
        except ProcessGoneError:
            # The liveness check at the top of the next cycle stops the loop
            logger.debug(f"Process {self.handle.pid} vanished during sampling, sample dropped")
            return

        timestamp = self.now()
        metrics = self.aggregator.collect(self.handle.name)
        sample = Sample.build(timestamp, cpu, metrics)

        logger.info(f"{timestamp.strftime('%Y-%m-%d %H:%M:%S')}: Writing data ... "
                    f"CPU={sample.cpu_percent}%, "
                    f"Physical={sample.working_set_mb}MB, "
                    f"Private={sample.private_mb}MB, "
                    f"Handles={sample.open_handles} "
                    f"({metrics.instance_count} instance(s))")

        status = self.sink.append(sample)
        if status == WriteStatus.CONTINUE:
            self.result.record_written(sample)
        elif status == WriteStatus.PAUSE:
            self.result.record_skipped()
        else:
            self._stop(StopReason.SINK_MISSING)

    def _stop(self, reason: StopReason) -> None:
        self.state = MonitorState.STOPPED
        self.result.stop_reason = reason
