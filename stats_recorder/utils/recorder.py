# stats-recorder/stats_recorder/utils/recorder.py
import logging
import queue
import threading
from datetime import datetime

import pytz

from stats_recorder.utils.units import UnitConversionError, convert_to_mb, parse_percent, split_pair

logger = logging.getLogger(__name__)

SHORT_ID_LENGTH = 12


class StatsRecorder:
    def __init__(self, container_id, sheet, timezone=None):
        if not container_id or not container_id.strip():
            raise ValueError("A container ID is required")
        self.container_id = container_id.strip()
        self.sheet = sheet
        self.tz = pytz.timezone(timezone) if timezone else None
        self.stream_failed = False

    def matches(self, stat):
        if self.container_id in (stat.get("Container"), stat.get("Name"), stat.get("ID")):
            return True
        # docker stats reports the 12 character short id, a full id given on the command line starts with it
        stat_id = stat.get("ID") or ""
        return len(stat_id) >= SHORT_ID_LENGTH and self.container_id.startswith(stat_id)

    def timestamp(self):
        if self.tz is not None:
            now = datetime.now(self.tz)
        else:
            now = datetime.now().astimezone()
        return now.isoformat(timespec="seconds")

    def build_row(self, stat):
        try:
            cpu_usage = parse_percent(stat.get("CPUPerc"))
        except UnitConversionError as e:
            logger.error(f"Error converting CPU usage value: {str(e)}")
            cpu_usage = 0.0

        try:
            memory_used, _ = split_pair(stat.get("MemUsage"))
            memory = convert_to_mb(memory_used)
        except UnitConversionError as e:
            logger.error(f"Error converting memory value: {str(e)}")
            return None

        try:
            block_read, block_write = split_pair(stat.get("BlockIO"))
        except UnitConversionError as e:
            logger.error(f"Error converting block IO value: {str(e)}")
            return None

        try:
            block_read_mb = convert_to_mb(block_read)
        except UnitConversionError as e:
            logger.error(f"Error converting block IO read value: {str(e)}")
            return None

        try:
            block_write_mb = convert_to_mb(block_write)
        except UnitConversionError as e:
            logger.error(f"Error converting block IO write value: {str(e)}")
            return None

        return [self.timestamp(), cpu_usage, memory, block_read_mb, block_write_mb]

    def record(self, stat):
        if not self.matches(stat):
            return None
        row = self.build_row(stat)
        if row is None:
            return None
        logger.info(row)
        self.sheet.append_row(row)
        return row

    def record_result(self, result):
        """Record one poll. Returns False when the result carries a stream error."""
        if result.get("error") is not None:
            logger.error(f"Error streaming stats: {str(result['error'])}")
            self.stream_failed = True
            return False

        matching = [stat for stat in result.get("stats", []) if self.matches(stat)]
        if len(matching) > 1:
            names = ", ".join(str(stat.get("Name")) for stat in matching)
            logger.error(f"Container {self.container_id} matches several containers ({names}), sample skipped")
            return True

        for stat in matching:
            self.record(stat)
        return True

    def drain(self, stream):
        # Results polled before shutdown still belong in the sheet
        while not self.stream_failed:
            try:
                result = stream.get_nowait()
            except queue.Empty:
                return
            self.record_result(result)

    def consume(self, stream, stop_event, poll_timeout=0.5):
        """Record results from ``stream`` until ``stop_event`` is set or the stream reports an error."""
        while not stop_event.is_set():
            try:
                result = stream.get(timeout=poll_timeout)
            except queue.Empty:
                continue

            if not self.record_result(result):
                return

        self.drain(stream)

    def consume_in_background(self, stream, stop_event):
        thread = threading.Thread(
            target=self.consume, args=(stream, stop_event), name="stats-recorder", daemon=True
        )
        thread.start()
        return thread
