from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable
from zoneinfo import ZoneInfo

import pandas as pd

from .config import CACHE_DIR, CACHE_VERSION, MARKET_TZ

logger = logging.getLogger(__name__)


@dataclass
class CachedRanking:
    frame: pd.DataFrame
    inserted_at: datetime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _frame_path(cache_dir: Path) -> Path:
    return cache_dir / f"ranking_{CACHE_VERSION}.pkl"


def _meta_path(cache_dir: Path) -> Path:
    return cache_dir / "cache_meta.json"


def save_ranking(df: pd.DataFrame, inserted_at: datetime | None = None, cache_dir: Path = CACHE_DIR) -> datetime:
    inserted_at = inserted_at or utc_now()
    cache_dir.mkdir(parents=True, exist_ok=True)
    df.to_pickle(_frame_path(cache_dir))
    meta = {"inserted_at_utc": inserted_at.astimezone(timezone.utc).isoformat(), "rows": int(len(df))}
    _meta_path(cache_dir).write_text(json.dumps(meta, ensure_ascii=False, indent=2), encoding="utf-8")
    return inserted_at


def load_meta(cache_dir: Path = CACHE_DIR) -> dict:
    path = _meta_path(cache_dir)
    if not path.exists():
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("unreadable cache meta %s: %s", path, exc)
        return {}


def load_ranking(cache_dir: Path = CACHE_DIR) -> CachedRanking | None:
    path = _frame_path(cache_dir)
    stamp = load_meta(cache_dir).get("inserted_at_utc")
    if not path.exists() or not stamp:
        return None
    try:
        frame = pd.read_pickle(path)
        inserted_at = datetime.fromisoformat(stamp)
    except Exception as exc:
        logger.warning("discarding unreadable ranking cache: %s", exc)
        return None
    if inserted_at.tzinfo is None:
        inserted_at = inserted_at.replace(tzinfo=timezone.utc)
    return CachedRanking(frame=frame, inserted_at=inserted_at)


def is_same_day(inserted_at: datetime, now: datetime, tz: str = MARKET_TZ) -> bool:
    zone = ZoneInfo(tz)
    return inserted_at.astimezone(zone).date() == now.astimezone(zone).date()


def load_fresh_ranking(clock: Callable[[], datetime] = utc_now, cache_dir: Path = CACHE_DIR) -> CachedRanking | None:
    """Return the cached ranking only if it was stored on the current market day."""
    cached = load_ranking(cache_dir)
    if cached is None:
        return None
    if not is_same_day(cached.inserted_at, clock()):
        logger.info("ranking cache from %s is stale", cached.inserted_at.isoformat())
        return None
    return cached
