"""
Pytest configuration and shared fixtures
"""
import subprocess

import pytest

from stats_recorder.utils.stats_sheet import StatsSheet


@pytest.fixture
def stat_record():
    """One decoded `docker stats --format "{{json .}}"` line"""
    return {
        "BlockIO": "12.3MB / 930kB",
        "CPUPerc": "1.50%",
        "Container": "a1b2c3d4e5f6",
        "ID": "a1b2c3d4e5f6",
        "MemPerc": "6.45%",
        "MemUsage": "512MiB / 7.656GiB",
        "Name": "pgvector_db",
        "NetIO": "1.2kB / 0B",
        "PIDs": "12",
    }


@pytest.fixture
def other_record():
    return {
        "BlockIO": "0B / 0B",
        "CPUPerc": "0.00%",
        "Container": "ffffffffffff",
        "ID": "ffffffffffff",
        "MemPerc": "0.10%",
        "MemUsage": "1MiB / 7.656GiB",
        "Name": "redis",
        "NetIO": "0B / 0B",
        "PIDs": "4",
    }


@pytest.fixture
def sheet():
    return StatsSheet()


@pytest.fixture
def completed_process():
    def _make(stdout="", stderr="", returncode=0):
        return subprocess.CompletedProcess(args=["docker"], returncode=returncode, stdout=stdout, stderr=stderr)
    return _make
