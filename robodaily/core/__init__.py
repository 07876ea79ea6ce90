"""Core utilities for RoboDaily."""

from .dates import (
    DATE_FORMAT,
    EPOCH,
    now_utc,
    parse_timestamp,
    today,
)
from .io import load_json, save_json

__all__ = [
    # I/O
    "load_json",
    "save_json",
    # Dates
    "today",
    "now_utc",
    "parse_timestamp",
    "DATE_FORMAT",
    "EPOCH",
]
