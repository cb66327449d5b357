# stats-recorder/stats_recorder/utils/units.py

# Longest suffix first so "GiB" is not taken for "B".
# Decimal and binary prefixes share the 1024 ratio, same as the runtime's display mixes them.
UNIT_TO_MB = [
    ("TiB", 1024 * 1024),
    ("TB", 1024 * 1024),
    ("GiB", 1024),
    ("GB", 1024),
    ("MiB", 1),
    ("MB", 1),
    ("KiB", 1 / 1024),
    ("kB", 1 / 1024),
    ("KB", 1 / 1024),
    ("B", 1 / (1024 * 1024)),
]


class UnitConversionError(ValueError):
    pass


def convert_to_mb(value_str):
    """Convert a size string such as "2GiB", "500MB" or "930kB" to MB.

    A value without a known unit is read as a plain number already in MB.
    """
    if value_str is None:
        raise UnitConversionError("Cannot convert empty value to MB")

    value_str = value_str.strip()
    factor = 1
    for unit, unit_factor in UNIT_TO_MB:
        if value_str.endswith(unit):
            value_str = value_str[:-len(unit)].strip()
            factor = unit_factor
            break

    try:
        value = float(value_str)
    except ValueError:
        raise UnitConversionError(f"Cannot convert {value_str!r} to MB")

    return value * factor


def parse_percent(value_str):
    if value_str is None:
        raise UnitConversionError("Cannot parse empty percentage")
    cleaned = value_str.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1].strip()
    try:
        return float(cleaned)
    except ValueError:
        raise UnitConversionError(f"Cannot parse percentage {value_str!r}")


def split_pair(value_str):
    # "12.3MiB / 1.9GiB" -> ("12.3MiB", "1.9GiB")
    if value_str is None or "/" not in value_str:
        raise UnitConversionError(f"Expected '<a> / <b>' but got {value_str!r}")
    first, second = value_str.split("/", 1)
    return first.strip(), second.strip()
