import os
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import psutil

from procmon.service.provider.psutil_provider import PsutilProcessHandle
from procmon.util.log_config import setup_logger

logger = setup_logger(__name__)

TERMINATE_TIMEOUT = 3.0  # seconds to wait before killing survivors


def process_name_for(executable: Path) -> str:
    """Name the OS will report for a process started from executable."""
    return executable.name


def terminate_existing(
    name: str,
    settle_delay: float = 0.5,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Stop every running process called name, then wait settle_delay seconds.

    This process is never included, even if it shares the name.

    Returns:
        Number of processes that were found
    """
    victims: List[psutil.Process] = [
        p for p in psutil.process_iter(["name"])
        if p.info["name"] == name and p.pid != os.getpid()
    ]
    if victims:
        logger.info(f"Found {len(victims)} existing instance(s) of {name}. Terminating ...")
        for proc in victims:
            try:
                proc.terminate()
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied:
                logger.warning(f"Not allowed to terminate pid {proc.pid}")
        _, alive = psutil.wait_procs(victims, timeout=TERMINATE_TIMEOUT)
        for proc in alive:
            try:
                proc.kill()
            except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
                logger.warning(f"Could not kill pid {proc.pid}: {e}")

    sleep(settle_delay)
    return len(victims)


def launch(
    executable: Path,
    args: Optional[Sequence[str]] = None,
    launch_delay: float = 0.5,
    sleep: Callable[[float], None] = time.sleep,
) -> PsutilProcessHandle:
    """
    Start executable and return a handle to the new process.

    Raises:
        OSError: If the executable cannot be started
    """
    logger.info(f"Configuration complete. Launching {process_name_for(executable)} ...")
    popen = psutil.Popen([str(executable), *(args or [])])
    sleep(launch_delay)
    handle = PsutilProcessHandle.from_popen(popen, name=process_name_for(executable))
    logger.info("Initializing performance metrics ...")
    return handle
