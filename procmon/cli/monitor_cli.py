#!/usr/bin/env python3
"""
Command-line interface and interactive prompts for the process monitor.

Values missing from both the command line and the config file are asked for
on stdin, re-prompting until they are valid.
"""
import argparse
from pathlib import Path
from typing import Callable, Optional

from procmon.config.monitor_config import ConfigError, MonitorConfig, clamp_interval, validate_separator
from procmon.service.sink.csv_sink import CsvSink
from procmon.util.file_utils import is_executable

InputFn = Callable[[str], str]


def build_monitor_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="procmon",
        description="Launch an executable and log its CPU, memory and handle usage to CSV until it exits",
    )
    ap.add_argument("--exe", type=str, default=None,
                    help="Path to the executable to launch and monitor")
    ap.add_argument("--interval", type=str, default=None,
                    help="Update interval in seconds (1-30, larger values are limited to 30)")
    ap.add_argument("--output-dir", type=str, default=None,
                    help="Directory for the PerfLog_<timestamp>.csv output file")
    ap.add_argument("--separator", type=str, default=None,
                    help="CSV field separator, or 'auto' to follow the locale (default: ',')")
    ap.add_argument("--keep-existing", action="store_true",
                    help="Do not terminate running instances of the executable before launching")
    ap.add_argument("--config", type=str, default=None,
                    help="Directory containing config.yaml")
    ap.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev', 'prod'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    ap.add_argument("--summary", type=str, default=None,
                    help="If set, write the end-of-run summary as JSON to this path")
    ap.add_argument("--log-file", type=str, default=None,
                    help="Also write a detailed log to this file")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="Enable debug logging")
    ap.add_argument("args", nargs=argparse.REMAINDER,
                    help="Arguments passed to the executable (after --)")
    return ap


def parse_monitor_args(argv=None) -> argparse.Namespace:
    args = build_monitor_parser().parse_args(argv)
    if args.args and args.args[0] == "--":
        args.args = args.args[1:]
    return args


def apply_args(config: MonitorConfig, args: argparse.Namespace) -> MonitorConfig:
    """
    Override config values with the ones given on the command line.

    Raises:
        ConfigError: If a given value is invalid
    """
    if args.exe:
        config.executable = Path(args.exe)
    if args.args:
        config.args = list(args.args)
    if args.interval is not None:
        config.interval_seconds = clamp_interval(args.interval)
    if args.output_dir:
        config.output_dir = Path(args.output_dir)
    if args.separator:
        config.separator = validate_separator(args.separator)
    if args.keep_existing:
        config.terminate_existing = False
    if args.log_file:
        config.log_file = Path(args.log_file)
    if args.verbose:
        config.log_level = "DEBUG"
    return config


def validate_executable(path: Path) -> Path:
    if not path.exists():
        raise ConfigError("File not found.")
    if not is_executable(path):
        raise ConfigError("File must be executable.")
    return path


def prompt_executable(input_fn: InputFn = input) -> Path:
    """Ask for the executable until an existing, executable file is given."""
    while True:
        raw = input_fn("Enter a file path:\n").strip().strip('"')
        try:
            path = validate_executable(Path(raw))
        except ConfigError as e:
            print(f"{e}\n")
            continue
        print(f"Selected File Path: {path}\n")
        return path


def prompt_interval(input_fn: InputFn = input) -> int:
    """Ask for the update interval until a positive integer is given."""
    while True:
        raw = input_fn("Specify an update interval in seconds:\n")
        try:
            interval = clamp_interval(raw)
        except ConfigError:
            print("Invalid input. Enter a number greater than 0.\n")
            continue
        print(f"Update Interval is {interval} {'seconds' if interval > 1 else 'second'}.\n")
        return interval


def create_sink(directory: Path, separator: str) -> CsvSink:
    """
    Create the output file in directory.

    Raises:
        ConfigError: If the directory does not exist
        OSError: If the file cannot be written
    """
    if not directory.is_dir():
        raise ConfigError("Directory not found.")
    return CsvSink.create(directory, separator)


def prompt_output_sink(separator: str, input_fn: InputFn = input) -> CsvSink:
    """Ask for the output directory until the output file could be created there."""
    while True:
        raw = input_fn("Specify Output Directory:\n").strip().strip('"')
        try:
            return create_sink(Path(raw), separator)
        except ConfigError as e:
            print(f"{e}\n")
        except OSError:
            print("Write access denied.\n")


def resolve_inputs(config: MonitorConfig, input_fn: Optional[InputFn] = None) -> CsvSink:
    """
    Fill in executable and interval, then create the output sink.

    Values already present in config are validated instead of prompted for.

    Raises:
        ConfigError: If a configured value is invalid
        OSError: If the configured output directory is not writable
    """
    input_fn = input_fn or input
    if config.executable is None:
        config.executable = prompt_executable(input_fn)
    else:
        validate_executable(config.executable)

    if config.interval_seconds is None:
        config.interval_seconds = prompt_interval(input_fn)

    if config.output_dir is None:
        sink = prompt_output_sink(config.separator, input_fn)
        config.output_dir = sink.path.parent
        return sink
    return create_sink(config.output_dir, config.separator)
