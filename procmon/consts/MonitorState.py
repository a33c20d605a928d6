from enum import Enum


class MonitorState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class StopReason(Enum):
    PROCESS_EXITED = "process_exited"
    SINK_MISSING = "sink_missing"
