from __future__ import annotations

import logging
from typing import Iterable

from .config import LEADERS_COUNT, LIQ_2M_MIN
from .models import FundamentalRecord, ScoreRule
from .parsing import is_parse_failure, parse_decimal

logger = logging.getLogger(__name__)

SCORED_FIELDS = (
    "pl",
    "pvp",
    "roe",
    "div_yield",
    "div_bruta",
    "cresc_rec",
    "marg_liq",
    "roic",
    "liq_corr",
    "liq_2m",
)

MAX_SCORE = 100

SCORE_RULES: tuple[ScoreRule, ...] = (
    ScoreRule("pl", lambda v: v <= 15, 10, "P/L <= 15"),
    ScoreRule("pvp", lambda v: v <= 1, 10, "P/VP <= 1"),
    ScoreRule("roe", lambda v: v >= 15, 10, "ROE >= 15%"),
    ScoreRule("div_yield", lambda v: v >= 6, 10, "DY >= 6%"),
    ScoreRule("div_bruta", lambda v: v <= 1, 10, "Dív.Bruta/PL <= 1"),
    ScoreRule("cresc_rec", lambda v: 10 <= v <= 20, 10, "Cresc.Rec. entre 10% e 20%"),
    ScoreRule("marg_liq", lambda v: 10 <= v <= 20, 10, "Marg.Líq. entre 10% e 20%"),
    ScoreRule("roic", lambda v: v >= 15, 10, "ROIC >= 15%"),
    ScoreRule("liq_corr", lambda v: v >= 2, 10, "Liq.Corrente >= 2"),
    ScoreRule("liq_2m", lambda v: v >= LIQ_2M_MIN, 10, "Liq.2 meses >= 1 milhão"),
    # partial credit
    ScoreRule("pl", lambda v: 15 < v <= 25, 5, "P/L entre 15 e 25"),
    ScoreRule("pvp", lambda v: 1 < v <= 3, 5, "P/VP entre 1 e 3"),
    ScoreRule("roe", lambda v: 10 <= v < 15, 5, "ROE entre 10% e 15%"),
    ScoreRule("div_yield", lambda v: 4 <= v < 6, 5, "DY entre 4% e 6%"),
    ScoreRule("div_bruta", lambda v: 1 < v <= 2, 5, "Dív.Bruta/PL entre 1 e 2"),
    ScoreRule("roic", lambda v: 10 <= v < 15, 5, "ROIC entre 10% e 15%"),
    ScoreRule("liq_corr", lambda v: 1 <= v < 2, 5, "Liq.Corrente entre 1 e 2"),
)


def parse_scored_fields(record: FundamentalRecord) -> dict[str, float] | None:
    """Parse the ten scored fields, or ``None`` if any of them is not a number."""
    values: dict[str, float] = {}
    for name in SCORED_FIELDS:
        value = parse_decimal(getattr(record, name), thousands=name == "liq_2m")
        if is_parse_failure(value):
            logger.debug("%s: unparseable %s=%r", record.symbol, name, getattr(record, name))
            return None
        values[name] = value
    return values


def score_breakdown(record: FundamentalRecord) -> list[ScoreRule]:
    values = parse_scored_fields(record)
    if values is None:
        return []
    return [rule for rule in SCORE_RULES if rule.predicate(values[rule.field])]


def score(record: FundamentalRecord) -> int:
    """Composite 0-100 score. A record with any unparseable field scores 0."""
    try:
        total = sum(rule.points for rule in score_breakdown(record))
    except Exception:
        logger.exception("scoring failed for %r", getattr(record, "symbol", record))
        return 0
    return max(0, min(MAX_SCORE, total))


def rank(records: Iterable[FundamentalRecord]) -> list[FundamentalRecord]:
    scored = [record.with_score(score(record)) for record in records]
    return sorted(scored, key=lambda r: r.score, reverse=True)


def leaders(ranked: list[FundamentalRecord], n: int = LEADERS_COUNT) -> list[FundamentalRecord]:
    return list(ranked[:n])
