# stats-recorder/stats_recorder/utils/stats_sheet.py
import logging
import os
import pandas as pd

logger = logging.getLogger(__name__)

HEADERS = ["Timestamp", "CPU Usage (%)", "Memory (MB)", "Block IO Read (MB)", "Block IO Write (MB)"]


class StatsSheet:
    """In-memory rows under a fixed header, written to a file only by ``save``."""

    def __init__(self, sheet_name="Sheet1", headers=None):
        self.sheet_name = sheet_name
        self.headers = list(headers or HEADERS)
        self.rows = []

    def __len__(self):
        return len(self.rows)

    def append_row(self, row):
        if len(row) != len(self.headers):
            raise ValueError(f"Expected {len(self.headers)} cells but got {len(row)}")
        self.rows.append(list(row))

    def to_dataframe(self):
        return pd.DataFrame(self.rows, columns=self.headers)

    def save(self, path):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        df = self.to_dataframe()
        if path.lower().endswith(".csv"):
            df.to_csv(path, index=False)
        else:
            df.to_excel(path, sheet_name=self.sheet_name, index=False, engine="openpyxl")
        logger.info(f"Saved {len(df)} rows to {path}")
        return path
