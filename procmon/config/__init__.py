"""Configuration module for the process monitor."""

from .monitor_config import MonitorConfig, ConfigError, clamp_interval
from .config_loader import ConfigLoader

__all__ = ["MonitorConfig", "ConfigError", "clamp_interval", "ConfigLoader"]
