"""Launch a process and log its resource usage to CSV until it exits."""

__version__ = "1.0.0"
