"""Conversion of fundamentus' pt-BR formatted numbers.

The site prints ``12,5`` for 12.5, ``6,45%`` for percentages and
``2.500.000,00`` for traded volume. Everything here returns ``math.nan`` on
bad input instead of raising, so callers can treat a failure as a per-field
signal.
"""

from __future__ import annotations

import math
import re

from .config import PERCENT_INDICATORS

# plain ASCII decimals only; float() alone would also take "1_0", "1e3" or "١٢"
_DECIMAL = re.compile(r"[+-]?\d+(\.\d+)?", re.ASCII)


def parse_decimal(text: str | None, thousands: bool = False) -> float:
    if text is None:
        return math.nan
    raw = str(text).strip()
    if raw.endswith("%"):
        raw = raw[:-1].rstrip()
    if thousands:
        raw = raw.replace(".", "")
    raw = raw.replace(",", ".")
    if not _DECIMAL.fullmatch(raw):
        return math.nan
    num = float(raw)
    if not math.isfinite(num):
        return math.nan
    return num


def is_parse_failure(value: float) -> bool:
    return math.isnan(value)


def format_indicator(indicator: str, text: str | None) -> str:
    raw = (text or "").strip()
    if not raw:
        return "-"
    if indicator in PERCENT_INDICATORS and not raw.endswith("%"):
        return f"{raw}%"
    return raw
