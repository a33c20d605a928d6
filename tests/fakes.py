from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from procmon.service.provider.process_info_provider import (
    InstanceMetrics,
    ProcessAccessError,
    ProcessGoneError,
    ProcessHandle,
    ProcessInfoProvider,
)

MB = 1024 * 1024
DENIED = "denied"


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self, start: float = 100.0, drift: float = 0.0):
        self.now = start
        self.drift = drift
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds + self.drift


class FakeHandle(ProcessHandle):
    """
    Process that stays alive for `lifetime` liveness checks.

    processor_time() returns the given readings in order; a None reading
    raises ProcessGoneError and a DENIED reading raises ProcessAccessError.
    """

    def __init__(self, name: str = "target.exe", pid: int = 4242, lifetime: int = 1,
                 cpu_readings: Optional[Iterable] = None):
        self._name = name
        self._pid = pid
        self.lifetime = lifetime
        self.alive_checks = 0
        self._readings = list(cpu_readings) if cpu_readings is not None else None
        self._cpu = 0.0

    @property
    def pid(self) -> int:
        return self._pid

    @property
    def name(self) -> str:
        return self._name

    def is_alive(self) -> bool:
        self.alive_checks += 1
        return self.alive_checks <= self.lifetime

    def processor_time(self) -> float:
        if self._readings is None:
            return self._cpu
        value = self._readings.pop(0)
        if value is None:
            raise ProcessGoneError(f"Process {self._pid} is gone")
        if value == DENIED:
            raise ProcessAccessError(f"Not allowed to read pid {self._pid}")
        return value


class FakeProvider(ProcessInfoProvider):

    def __init__(self, processes: Optional[Dict[str, List[InstanceMetrics]]] = None, cores: int = 4):
        self.processes = processes or {}
        self.cores = cores
        self.queries: List[str] = []

    def cpu_count(self) -> int:
        return self.cores

    def instances(self, name: str) -> List[InstanceMetrics]:
        self.queries.append(name)
        return list(self.processes.get(name, []))


def instance(pid: int, working_set_mb: float, private_mb: float, handles: int) -> InstanceMetrics:
    return InstanceMetrics(
        pid=pid,
        working_set_bytes=int(working_set_mb * MB),
        private_bytes=int(private_mb * MB),
        handles=handles,
    )


class TickingNow:
    """UTC timestamps one second apart."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 0, 0, 5, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value
