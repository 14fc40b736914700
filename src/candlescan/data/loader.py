"""
Candle file loading.

Reads candle series from local files into oldest-first Candle lists:
- JSON list of {time, open, high, low, close} mappings
- JSON Twelve Data time series payload ({"values": [...]}, newest first)
- CSV with a time,open,high,low,close header

Bars are not rejected for bad geometry; malformed ones are logged and kept.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from ..models.market_data import Candle


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("time", "open", "high", "low", "close")
VENDOR_FIELDS = ("datetime", "open", "high", "low", "close")


def _check_fields(row: Dict[str, Any], position: int, fields=REQUIRED_FIELDS) -> None:
    if not isinstance(row, dict):
        raise ValueError(f"Candle {position} must be a mapping, got {type(row).__name__}")
    missing = [name for name in fields if row.get(name) in (None, "")]
    if missing:
        raise ValueError(f"Candle {position} is missing fields: {', '.join(missing)}")


def parse_candles(payload: Any) -> List[Candle]:
    """
    Convert a decoded JSON payload into an oldest-first candle list.

    Args:
        payload: List of candle mappings or a Twelve Data response

    Returns:
        Candle list ordered oldest to newest
    """
    if isinstance(payload, dict):
        if payload.get("status") == "error":
            raise ValueError(f"Market data error payload: {payload.get('message', 'unknown error')}")
        if "values" not in payload:
            raise ValueError("JSON object payload must contain a 'values' list")
        values = payload["values"]
        if not isinstance(values, list):
            raise ValueError(f"'values' must be a list, got {type(values).__name__}")
        for position, row in enumerate(values):
            _check_fields(row, position, VENDOR_FIELDS)
        # Vendor returns newest first
        return [Candle.from_twelve_data(row) for row in reversed(values)]

    if not isinstance(payload, list):
        raise ValueError(f"Unsupported candle payload type: {type(payload).__name__}")

    candles = []
    for position, row in enumerate(payload):
        _check_fields(row, position)
        candles.append(Candle(
            time=int(row["time"]),
            open=row["open"],
            high=row["high"],
            low=row["low"],
            close=row["close"],
        ))
    return candles


def read_csv_candles(path: Path) -> List[Candle]:
    """Read a CSV candle file with a time,open,high,low,close header."""
    candles = []
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for position, row in enumerate(reader):
            _check_fields(row, position)
            candles.append(Candle(
                time=int(float(row["time"])),
                open=row["open"],
                high=row["high"],
                low=row["low"],
                close=row["close"],
            ))
    return candles


def load_candles(path: Union[str, Path]) -> List[Candle]:
    """
    Load a candle series from a JSON or CSV file.

    Args:
        path: File path with a .json or .csv suffix

    Returns:
        Candle list ordered oldest to newest
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            candles = parse_candles(json.load(f))
    elif suffix == ".csv":
        candles = read_csv_candles(path)
    else:
        raise ValueError(f"Unsupported candle file type: {path.suffix or '<none>'}")

    for candle in candles:
        if not candle.is_well_formed:
            logger.warning(f"Malformed candle at time {candle.time}: {candle.to_dict()}")

    logger.info(f"Loaded {len(candles)} candles from {path}")
    return candles
