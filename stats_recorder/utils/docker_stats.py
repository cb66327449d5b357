# stats-recorder/stats_recorder/utils/docker_stats.py
import docker
import json
import logging
import queue
import subprocess
import threading

logger = logging.getLogger(__name__)

STATS_FORMAT = "{{json .}}"


class StatsStreamError(Exception):
    pass


def get_container_name(container_id):
    try:
        client = docker.from_env()
        container = client.containers.get(container_id)
        return container.name
    except docker.errors.NotFound:
        logger.error(f"Container {container_id} not found")
    except docker.errors.DockerException as e:
        logger.error(f"Error looking up container {container_id}: {str(e)}")
    return None


def get_container_stats(docker_bin="docker", timeout=None):
    """Run one ``docker stats`` poll and return a list of stat records.

    Every record is the decoded ``{{json .}}`` line for one running container,
    e.g. ``{"Container": "a1b2c3", "CPUPerc": "0.53%", "MemUsage": "12MiB / 1.9GiB",
    "BlockIO": "1.2MB / 0B", ...}``.
    """
    cmd = [docker_bin, "stats", "--no-stream", "--format", STATS_FORMAT]
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise StatsStreamError(f"docker stats did not answer within {timeout}s") from e
    except OSError as e:
        raise StatsStreamError(f"Failed to run {docker_bin}: {str(e)}") from e

    if proc.returncode != 0:
        raise StatsStreamError(
            f"docker stats failed with return code {proc.returncode}: {proc.stderr.strip()}"
        )

    stats = []
    for line in proc.stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            stats.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise StatsStreamError(f"Invalid stats line {line!r}: {str(e)}") from e
    return stats


class StatsMonitor:
    """Polls docker stats on a background thread and publishes results on ``stream``."""

    def __init__(self, interval=1.0, docker_bin="docker", timeout=30.0):
        self.interval = interval
        self.docker_bin = docker_bin
        self.timeout = timeout
        self.stream = queue.Queue()
        self._stop_event = threading.Event()
        self._thread = None

    def start(self):
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="stats-monitor", daemon=True)
        self._thread.start()
        logger.info(f"Stats monitor started (interval: {self.interval}s)")

    def stop(self, timeout=None):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                # Daemon thread, left behind with its poll still running
                logger.warning(f"Stats monitor did not stop within {timeout}s")
            self._thread = None
        logger.info("Stats monitor stopped")

    def poll(self):
        try:
            return {"stats": get_container_stats(self.docker_bin, timeout=self.timeout), "error": None}
        except StatsStreamError as e:
            return {"stats": [], "error": e}

    def _run(self):
        while not self._stop_event.is_set():
            self.stream.put(self.poll())
            self._stop_event.wait(self.interval)
