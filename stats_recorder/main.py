# stats-recorder/stats_recorder/main.py
import argparse
import logging
import os
import signal
import sys
import threading
from datetime import datetime

from stats_recorder import config
from stats_recorder.utils.docker_stats import StatsMonitor, get_container_name
from stats_recorder.utils.recorder import StatsRecorder
from stats_recorder.utils.stats_sheet import StatsSheet

logger = logging.getLogger(__name__)

STOP_SIGNALS = ("SIGINT", "SIGTERM", "SIGTSTP")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Record a Docker container's resource usage to a spreadsheet.")
    parser.add_argument("--container-id", required=True, help="ID of the Docker container to monitor")
    parser.add_argument("--container-name", default="", help="Name of the Docker container to monitor")
    parser.add_argument("--interval", type=float, default=config.STATS_INTERVAL, help="Seconds between polls")
    parser.add_argument("--output-dir", default=config.STATS_OUTPUT_DIR, help="Directory for the stats file")
    parser.add_argument("--format", dest="output_format", choices=config.OUTPUT_FORMATS,
                        default=config.STATS_OUTPUT_FORMAT, help="Output file format")
    parser.add_argument("--log-level", type=str.upper, choices=config.LOG_LEVELS,
                        default=config.LOG_LEVEL, help="Logging level")
    args = parser.parse_args(argv)

    # argparse does not check defaults against choices, and these come from the environment
    if not args.container_id.strip():
        parser.error("Please provide a container ID using the --container-id flag.")
    if args.output_format not in config.OUTPUT_FORMATS:
        parser.error(f"Invalid output format {args.output_format!r} (choose from {', '.join(config.OUTPUT_FORMATS)})")
    if args.log_level not in config.LOG_LEVELS:
        parser.error(f"Invalid log level {args.log_level!r} (choose from {', '.join(config.LOG_LEVELS)})")
    args.container_id = args.container_id.strip()
    return args


def build_output_path(output_dir, container_name, output_format, now=None):
    now = now or datetime.now()
    file_name = f"{now.strftime('%Y%m%d-%H%M%S')}-{container_name}-stats.{output_format}"
    return os.path.join(output_dir, file_name)


def install_signal_handlers(stop_event):
    def handle(signum, frame):
        if not stop_event.is_set():
            logger.info(f"Signal {signal.Signals(signum).name} received. Saving and exiting...")
        stop_event.set()

    for name in STOP_SIGNALS:
        # SIGTSTP (Ctrl + Z) does not exist on Windows
        signum = getattr(signal, name, None)
        if signum is not None:
            signal.signal(signum, handle)


def run(args, stop_event=None, monitor=None):
    stop_event = stop_event or threading.Event()

    container_name = args.container_name
    if not container_name:
        container_name = get_container_name(args.container_id) or args.container_id
    output_path = build_output_path(args.output_dir, container_name, args.output_format)

    sheet = StatsSheet(sheet_name=config.STATS_SHEET_NAME)
    recorder = StatsRecorder(args.container_id, sheet, timezone=config.STATS_TIMEZONE or None)
    monitor = monitor or StatsMonitor(
        interval=args.interval, docker_bin=config.DOCKER_BIN, timeout=config.STATS_POLL_TIMEOUT
    )

    logger.info(f"Monitoring container {args.container_id} ({container_name}), writing to {output_path}")
    monitor.start()
    recorder_thread = recorder.consume_in_background(monitor.stream, stop_event)

    while not stop_event.is_set() and recorder_thread.is_alive():
        stop_event.wait(0.5)

    stop_event.set()
    monitor.stop(timeout=config.STATS_STOP_TIMEOUT)
    recorder_thread.join(config.STATS_STOP_TIMEOUT)
    if recorder_thread.is_alive():
        logger.warning(f"Stats recorder did not stop within {config.STATS_STOP_TIMEOUT}s")
    else:
        recorder.drain(monitor.stream)

    try:
        sheet.save(output_path)
    except Exception as e:
        logger.error(f"Error saving stats file: {str(e)}")
        logger.exception("Full traceback:")
        return 1

    logger.info(f"Stats file saved successfully: {output_path}")
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s - %(message)s')

    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    return run(args, stop_event=stop_event)


if __name__ == "__main__":
    sys.exit(main())
