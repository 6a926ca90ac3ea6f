from __future__ import annotations

import logging
from dataclasses import fields
from datetime import datetime
from pathlib import Path
from typing import Callable

import pandas as pd

from .cache_store import load_fresh_ranking, load_ranking, save_ranking, utc_now
from .classifier import CLASSIFIED_INDICATORS, classify_text
from .config import CACHE_DIR, LEADERS_COUNT, PERCENT_INDICATORS
from .fundamentus import fetch_fundamentals
from .models import FundamentalRecord
from .parsing import format_indicator
from .scoring import rank

logger = logging.getLogger(__name__)

RECORD_COLUMNS = [f.name for f in fields(FundamentalRecord)]


def records_to_frame(records: list[FundamentalRecord]) -> pd.DataFrame:
    if not records:
        return pd.DataFrame(columns=["rank", *RECORD_COLUMNS])
    df = pd.DataFrame([r.to_dict() for r in records], columns=RECORD_COLUMNS)
    df.insert(0, "rank", range(1, len(df) + 1))
    return df


def _cell_text(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def record_from_row(row: pd.Series | dict) -> FundamentalRecord:
    data = {k: _cell_text(v) for k, v in dict(row).items() if k in RECORD_COLUMNS and k != "score"}
    score = dict(row).get("score")
    data["score"] = None if score is None or pd.isna(score) else int(score)
    return FundamentalRecord.from_dict(data)


def build_ranking(records: list[FundamentalRecord] | None = None) -> pd.DataFrame:
    if records is None:
        records = fetch_fundamentals()
    ranked = rank(records)
    if ranked:
        logger.info("ranked %d stocks, top score %d", len(ranked), ranked[0].score)
    return records_to_frame(ranked)


def load_or_build_ranking(
    force_refresh: bool = False,
    builder: Callable[[], pd.DataFrame] = build_ranking,
    clock: Callable[[], datetime] = utc_now,
    cache_dir: Path = CACHE_DIR,
) -> tuple[pd.DataFrame, datetime | None, bool]:
    """Return ``(frame, inserted_at, from_cache)``.

    Today's cached ranking wins unless ``force_refresh``; a failed scrape falls
    back to whatever ranking is cached, however old.
    """
    if not force_refresh:
        cached = load_fresh_ranking(clock=clock, cache_dir=cache_dir)
        if cached is not None and not cached.frame.empty:
            return cached.frame, cached.inserted_at, True

    fresh = builder()
    if not fresh.empty:
        inserted_at = save_ranking(fresh, inserted_at=clock(), cache_dir=cache_dir)
        return fresh, inserted_at, False

    stale = load_ranking(cache_dir)
    if stale is not None and not stale.frame.empty:
        logger.warning("scrape returned nothing, serving ranking cached at %s", stale.inserted_at.isoformat())
        return stale.frame, stale.inserted_at, True
    return fresh, None, False


def leaders_frame(df: pd.DataFrame, n: int = LEADERS_COUNT) -> pd.DataFrame:
    """Top ``n`` rows of a ``build_ranking`` frame, which is already in rank order."""
    return df.head(n).reset_index(drop=True)


def band_frame(df: pd.DataFrame) -> pd.DataFrame:
    cols = [c for c in CLASSIFIED_INDICATORS if c in df.columns]
    return pd.DataFrame(
        {col: [classify_text(col, value).value for value in df[col]] for col in cols},
        index=df.index,
    )


def display_frame(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    for col in PERCENT_INDICATORS:
        if col in out.columns:
            out[col] = [format_indicator(col, _cell_text(v)) for v in out[col]]
    return out


def apply_filters(df: pd.DataFrame, filters: dict) -> pd.DataFrame:
    out = df.copy()
    if out.empty:
        return out

    min_score = filters.get("min_score")
    if min_score:
        out = out[out["score"].fillna(0) >= int(min_score)]

    keyword = (filters.get("keyword") or "").strip().lower()
    if keyword:
        out = out[out["symbol"].str.lower().str.contains(keyword, na=False, regex=False)]

    return out
