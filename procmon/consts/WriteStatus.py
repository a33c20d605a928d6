from enum import Enum


class WriteStatus(Enum):
    CONTINUE = "continue"
    PAUSE = "pause"
    FATAL = "fatal"
