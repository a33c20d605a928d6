"""
Process monitor entry point.

Launches an executable, samples it every interval until it exits, and writes
the samples to a read-only CSV file.

    python -m procmon --exe /usr/bin/gedit --interval 5 --output-dir ./logs
"""
import logging
import sys
from pathlib import Path

from procmon.cli.monitor_cli import apply_args, parse_monitor_args, resolve_inputs
from procmon.config.config_loader import ConfigLoader
from procmon.config.monitor_config import ConfigError
from procmon.consts.MonitorState import StopReason
from procmon.models.monitor_result import MonitorResult
from procmon.service.aggregator.process_aggregator import ProcessAggregator
from procmon.service.heartbeat.heartbeat import Heartbeat
from procmon.service.launcher.process_launcher import launch, process_name_for, terminate_existing
from procmon.service.provider.psutil_provider import PsutilProvider
from procmon.service.sampler.cpu_sampler import CpuSampler
from procmon.util.log_config import configure_logging, setup_logger

logger = setup_logger("procmon.main")

EXIT_OK = 0
EXIT_SINK_MISSING = 1
EXIT_BAD_INPUT = 2


def main(argv=None) -> int:
    args = parse_monitor_args(argv)

    logger.info("Initialising Process Monitor ...")
    try:
        config = ConfigLoader(Path(args.config) if args.config else None, env=args.env).config_data
        config = apply_args(config, args)
        configure_logging(getattr(logging, config.log_level, logging.INFO), config.log_file)
        sink = resolve_inputs(config)
    except ConfigError as e:
        logger.error(f"Initialisation failed: {e}")
        return EXIT_BAD_INPUT
    except OSError as e:
        logger.error(f"Initialisation failed: write access denied ({e})")
        return EXIT_BAD_INPUT

    logger.debug(str(config))

    name = process_name_for(config.executable)
    if config.terminate_existing:
        terminate_existing(name, settle_delay=config.settle_delay_seconds)

    try:
        handle = launch(config.executable, config.args, launch_delay=config.launch_delay_seconds)
    except OSError as e:
        logger.error(f"Could not launch {config.executable}: {e}")
        return EXIT_BAD_INPUT

    provider = PsutilProvider()
    heartbeat = Heartbeat(
        handle=handle,
        sampler=CpuSampler(provider.cpu_count()),
        aggregator=ProcessAggregator(provider),
        sink=sink,
        interval_millis=config.interval_millis,
    )
    try:
        result: MonitorResult = heartbeat.run()
    except KeyboardInterrupt:
        logger.warning(f"Interrupted; monitoring stopped after {heartbeat.result.samples_written} sample(s). "
                       f"Data so far is in {sink.path}")
        raise
    result.print_summary()
    if args.summary:
        result.save_to_file(Path(args.summary))
        logger.info(f"Summary written to {args.summary}")

    if result.stop_reason == StopReason.SINK_MISSING:
        return EXIT_SINK_MISSING
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
