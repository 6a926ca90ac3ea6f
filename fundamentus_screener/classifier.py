from __future__ import annotations

import math

from .models import Band, IndicatorThreshold
from .parsing import parse_decimal

INDICATOR_THRESHOLDS: dict[str, IndicatorThreshold] = {
    "pl": IndicatorThreshold(favorable=15.0, neutral=25.0, higher_is_better=False),
    "pvp": IndicatorThreshold(favorable=1.0, neutral=3.0, higher_is_better=False),
    "roe": IndicatorThreshold(favorable=15.0, neutral=10.0, higher_is_better=True),
    "div_yield": IndicatorThreshold(favorable=6.0, neutral=4.0, higher_is_better=True),
    "div_bruta": IndicatorThreshold(favorable=0.0, neutral=1.0, higher_is_better=False),
    "cresc_rec": IndicatorThreshold(favorable=20.0, neutral=10.0, higher_is_better=True),
    "marg_liq": IndicatorThreshold(favorable=20.0, neutral=10.0, higher_is_better=True),
    "roic": IndicatorThreshold(favorable=15.0, neutral=10.0, higher_is_better=True),
    "liq_corr": IndicatorThreshold(favorable=2.0, neutral=1.0, higher_is_better=True),
}

CLASSIFIED_INDICATORS = tuple(INDICATOR_THRESHOLDS)


def classify(indicator: str, value: float) -> Band:
    rule = INDICATOR_THRESHOLDS.get(indicator)
    if rule is None:
        return Band.UNCLASSIFIED
    try:
        num = float(value)
    except (TypeError, ValueError):
        return Band.UNCLASSIFIED
    if math.isnan(num):
        return Band.UNCLASSIFIED

    if rule.higher_is_better:
        if num >= rule.favorable:
            return Band.FAVORABLE
        if num >= rule.neutral:
            return Band.NEUTRAL
        return Band.UNFAVORABLE

    if num <= rule.favorable:
        return Band.FAVORABLE
    if num <= rule.neutral:
        return Band.NEUTRAL
    return Band.UNFAVORABLE


def classify_text(indicator: str, text: str | None) -> Band:
    return classify(indicator, parse_decimal(text, thousands=indicator == "liq_2m"))
