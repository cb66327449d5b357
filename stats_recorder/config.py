# stats-recorder/stats_recorder/config.py
import os
from dotenv import load_dotenv

load_dotenv()

STATS_INTERVAL = float(os.getenv("STATS_INTERVAL", "1.0"))
# Upper bound on one docker stats call and on waiting for the worker threads at shutdown
STATS_POLL_TIMEOUT = float(os.getenv("STATS_POLL_TIMEOUT", "30"))
STATS_STOP_TIMEOUT = float(os.getenv("STATS_STOP_TIMEOUT", "5"))
STATS_OUTPUT_DIR = os.getenv("STATS_OUTPUT_DIR", ".")
STATS_OUTPUT_FORMAT = os.getenv("STATS_OUTPUT_FORMAT", "xlsx").lower()
# Empty means local time
STATS_TIMEZONE = os.getenv("STATS_TIMEZONE", "")
STATS_SHEET_NAME = os.getenv("STATS_SHEET_NAME", "Sheet1")
DOCKER_BIN = os.getenv("DOCKER_BIN", "docker")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

OUTPUT_FORMATS = ("xlsx", "csv")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
