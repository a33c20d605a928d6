from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


class ProcessGoneError(RuntimeError):
    """The monitored process disappeared while it was being read."""


class ProcessAccessError(RuntimeError):
    """The OS refused to report on the monitored process."""


@dataclass(frozen=True)
class InstanceMetrics:
    """Raw memory/handle reading of one process instance"""
    pid: int
    working_set_bytes: int
    private_bytes: int
    handles: int


class ProcessHandle(ABC):
    """Opaque reference to the monitored process. Queried, never modified."""

    @property
    @abstractmethod
    def pid(self) -> int:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def is_alive(self) -> bool:
        pass

    @abstractmethod
    def processor_time(self) -> float:
        """
        Cumulative user + system CPU time of the process, in seconds.

        Raises:
            ProcessGoneError: If the process no longer exists
            ProcessAccessError: If the process may not be inspected
        """
        pass


class ProcessInfoProvider(ABC):
    """Platform capability used by the sampler and the aggregator."""

    @abstractmethod
    def cpu_count(self) -> int:
        """Number of logical processors."""
        pass

    @abstractmethod
    def instances(self, name: str) -> List[InstanceMetrics]:
        """
        Read every live process called `name`.

        Processes that vanish while being enumerated are left out.
        """
        pass
