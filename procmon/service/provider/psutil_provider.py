"""
psutil-backed process access.

All psutil exceptions are handled here; callers only ever see ProcessGoneError
or ProcessAccessError.
"""
import subprocess
from typing import List, Optional

import psutil

from procmon.service.provider.process_info_provider import (
    InstanceMetrics,
    ProcessAccessError,
    ProcessGoneError,
    ProcessHandle,
    ProcessInfoProvider,
)
from procmon.util.log_config import setup_logger

logger = setup_logger(__name__)

IS_WINDOWS = psutil.WINDOWS


class PsutilProcessHandle(ProcessHandle):

    def __init__(self, process: psutil.Process, popen: Optional[subprocess.Popen] = None, name: Optional[str] = None):
        """
        Args:
            process: The process to monitor
            popen: Popen object if this program started the process; used for
                   liveness so an exited but unreaped child counts as exited
            name: Name to use if the process is already gone or its name is unreadable
        """
        self._process = process
        self._popen = popen
        try:
            self._name = process.name()
        except psutil.NoSuchProcess:
            if name is None:
                raise ProcessGoneError(f"Process {process.pid} is gone") from None
            self._name = name
        except psutil.AccessDenied:
            if name is None:
                raise ProcessAccessError(f"Not allowed to read the name of pid {process.pid}") from None
            logger.debug(f"Name of pid {process.pid} not readable, using {name}")
            self._name = name

    @classmethod
    def from_popen(cls, popen: subprocess.Popen, name: Optional[str] = None) -> 'PsutilProcessHandle':
        return cls(psutil.Process(popen.pid), popen=popen, name=name)

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def name(self) -> str:
        return self._name

    def is_alive(self) -> bool:
        if self._popen is not None:
            return self._popen.poll() is None
        try:
            return self._process.is_running() and self._process.status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False
        except psutil.AccessDenied:
            return self._process.is_running()

    def processor_time(self) -> float:
        try:
            times = self._process.cpu_times()
        except (psutil.NoSuchProcess, psutil.ZombieProcess) as e:
            raise ProcessGoneError(f"Process {self.pid} is gone") from e
        except psutil.AccessDenied as e:
            raise ProcessAccessError(f"Not allowed to read CPU times of pid {self.pid}") from e
        return times.user + times.system


class PsutilProvider(ProcessInfoProvider):

    def cpu_count(self) -> int:
        count = psutil.cpu_count(logical=True)
        if not count:
            logger.warning("Could not detect CPU core count, defaulting to 1.")
            return 1
        return count

    def instances(self, name: str) -> List[InstanceMetrics]:
        found = []
        for proc in psutil.process_iter(["name"]):
            if proc.info["name"] != name:
                continue
            try:
                found.append(self._read(proc))
            except psutil.NoSuchProcess:
                # Exited between enumeration and reading
                continue
        return found

    def _read(self, proc: psutil.Process) -> InstanceMetrics:
        try:
            mem = proc.memory_info()
        except psutil.AccessDenied:
            logger.debug(f"Memory info not readable for pid {proc.pid}")
            return InstanceMetrics(pid=proc.pid, working_set_bytes=0, private_bytes=0, handles=self._handles(proc))
        return InstanceMetrics(
            pid=proc.pid,
            working_set_bytes=mem.rss,
            private_bytes=self._private_bytes(proc, mem),
            handles=self._handles(proc),
        )

    @staticmethod
    def _private_bytes(proc: psutil.Process, mem) -> int:
        private = getattr(mem, "private", None)
        if private is not None:
            return private
        try:
            return proc.memory_full_info().uss
        except psutil.AccessDenied:
            logger.debug(f"USS not readable for pid {proc.pid}, using rss - shared")
            return max(mem.rss - getattr(mem, "shared", 0), 0)

    @staticmethod
    def _handles(proc: psutil.Process) -> int:
        try:
            return proc.num_handles() if IS_WINDOWS else proc.num_fds()
        except psutil.AccessDenied:
            logger.debug(f"Handle count not readable for pid {proc.pid}")
            return 0
