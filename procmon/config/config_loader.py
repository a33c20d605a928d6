"""
Configuration loader for the process monitor.

Reads config.yaml from a directory and, when an environment name is given,
merges config_<env>.yaml on top of it.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from procmon.config.monitor_config import MonitorConfig, ConfigError, clamp_interval, validate_separator
from procmon.util.log_config import setup_logger

logger = setup_logger(__name__)

PACKAGED_CONFIG_DIR = Path(__file__).resolve().parent

KNOWN_KEYS = {
    "executable", "args", "interval_seconds", "output_dir", "separator",
    "terminate_existing", "settle_delay_seconds", "launch_delay_seconds",
    "log_file", "log_level",
}


class ConfigLoader:

    def __init__(self, config_path: Optional[Path] = None, env: str = None):
        # An environment name alone selects from the packaged config files
        if config_path is None and env:
            config_path = PACKAGED_CONFIG_DIR
        self.config_path = config_path
        self.env = env
        self.config_data = self._load_config()

    def _read_yaml(self, file: Path) -> Dict[str, Any]:
        with open(file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{file} must contain a mapping at the top level")
        return data

    def _load_config(self) -> MonitorConfig:
        """
        Load and parse monitor configuration from YAML files.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            MonitorConfig: defaults for any key the files leave out
        """
        data: Dict[str, Any] = {}
        if self.config_path is not None:
            base_config_file = self.config_path / "config.yaml"
            if base_config_file.is_file():
                data = self._read_yaml(base_config_file)
            else:
                logger.debug(f"No config file at {base_config_file}, using defaults")

            if self.env:
                env_config_file = self.config_path / f"config_{self.env}.yaml"
                if not env_config_file.is_file():
                    raise ConfigError(f"Environment config not found: {env_config_file}")
                # dict.update() will overwrite existing keys
                data.update(self._read_yaml(env_config_file))

        unknown = set(data) - KNOWN_KEYS
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        return self.from_dict(data)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> MonitorConfig:
        config = MonitorConfig()

        if data.get("executable"):
            config.executable = Path(data["executable"])
        if data.get("args"):
            config.args = [str(a) for a in data["args"]]
        if data.get("interval_seconds") is not None:
            config.interval_seconds = clamp_interval(data["interval_seconds"])
        if data.get("output_dir"):
            config.output_dir = Path(data["output_dir"])
        if data.get("log_file"):
            config.log_file = Path(data["log_file"])

        config.separator = str(data.get("separator", config.separator))
        config.terminate_existing = bool(data.get("terminate_existing", config.terminate_existing))
        config.settle_delay_seconds = float(data.get("settle_delay_seconds", config.settle_delay_seconds))
        config.launch_delay_seconds = float(data.get("launch_delay_seconds", config.launch_delay_seconds))
        config.log_level = str(data.get("log_level", config.log_level)).upper()

        validate_separator(config.separator)
        return config
