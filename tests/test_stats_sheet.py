import pandas as pd
import pytest

from stats_recorder.utils.stats_sheet import HEADERS, StatsSheet


def test_append_row(sheet):
    sheet.append_row(["2024-01-01T00:00:00+00:00", 1.5, 512.0, 12.0, 0.9])
    assert len(sheet) == 1
    assert sheet.rows[0][2] == 512.0


def test_append_row_wrong_width(sheet):
    with pytest.raises(ValueError):
        sheet.append_row([1, 2, 3])
    assert len(sheet) == 0


def test_save_xlsx(sheet, tmp_path):
    sheet.append_row(["2024-01-01T00:00:00+00:00", 1.5, 512.0, 12.0, 0.9])
    sheet.append_row(["2024-01-01T00:00:01+00:00", 2.5, 513.0, 12.5, 1.0])
    path = str(tmp_path / "out" / "stats.xlsx")

    sheet.save(path)

    df = pd.read_excel(path, sheet_name="Sheet1")
    assert list(df.columns) == HEADERS
    assert len(df) == 2
    assert df["Memory (MB)"].tolist() == [512.0, 513.0]
    assert df["Timestamp"].iloc[1] == "2024-01-01T00:00:01+00:00"


def test_save_empty_sheet_keeps_header(tmp_path):
    path = str(tmp_path / "empty.xlsx")
    StatsSheet(sheet_name="stats").save(path)

    df = pd.read_excel(path, sheet_name="stats")
    assert list(df.columns) == HEADERS
    assert df.empty


def test_save_csv(sheet, tmp_path):
    sheet.append_row(["2024-01-01T00:00:00+00:00", 1.5, 512.0, 12.0, 0.9])
    path = str(tmp_path / "stats.csv")

    sheet.save(path)

    df = pd.read_csv(path)
    assert list(df.columns) == HEADERS
    assert df["CPU Usage (%)"].iloc[0] == 1.5
