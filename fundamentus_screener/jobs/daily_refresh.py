from __future__ import annotations

import logging

from fundamentus_screener.cache_store import save_ranking
from fundamentus_screener.config import configure_logging
from fundamentus_screener.screens import build_ranking

logger = logging.getLogger(__name__)


def main() -> int:
    configure_logging()
    df = build_ranking()
    if df.empty:
        logger.error("fundamentus returned no rows, cache left untouched")
        return 1
    inserted_at = save_ranking(df)
    logger.info("cached %d ranked stocks at %s", len(df), inserted_at.isoformat())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
