from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Callable


class Band(str, Enum):
    FAVORABLE = "favorable"
    NEUTRAL = "neutral"
    UNFAVORABLE = "unfavorable"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class FundamentalRecord:
    symbol: str
    price: str = ""
    pl: str = ""
    pvp: str = ""
    roe: str = ""
    div_yield: str = ""
    div_bruta: str = ""
    cresc_rec: str = ""
    marg_liq: str = ""
    roic: str = ""
    liq_corr: str = ""
    liq_2m: str = ""
    psr: str = ""
    p_ativo: str = ""
    p_cap_giro: str = ""
    p_ebit: str = ""
    p_ativ_circ_liq: str = ""
    ev_ebit: str = ""
    ev_ebitda: str = ""
    marg_ebit: str = ""
    patri_liq: str = ""
    score: int | None = None

    def with_score(self, score: int) -> FundamentalRecord:
        return replace(self, score=score)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> FundamentalRecord:
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        return cls(**kwargs)


@dataclass(frozen=True)
class IndicatorThreshold:
    """Band limits for one indicator.

    With ``higher_is_better`` a value at or above ``favorable`` is favorable and
    at or above ``neutral`` is neutral; otherwise the comparisons flip to "at or
    below". Anything past ``neutral`` is unfavorable.
    """

    favorable: float
    neutral: float
    higher_is_better: bool


@dataclass(frozen=True)
class ScoreRule:
    field: str
    predicate: Callable[[float], bool]
    points: int
    description: str = ""


@dataclass
class AnalysisMetric:
    name: str
    value: str
    evaluation: str


@dataclass
class MetricCategory:
    category: str
    metrics: list[AnalysisMetric] = field(default_factory=list)


@dataclass
class Recommendation:
    verdict: str
    reasoning: list[str] = field(default_factory=list)


@dataclass
class StructuredAnalysis:
    overview: str
    positive_points: list[str] = field(default_factory=list)
    negative_points: list[str] = field(default_factory=list)
    key_metrics: list[MetricCategory] = field(default_factory=list)
    recommendation: Recommendation = field(default_factory=lambda: Recommendation(verdict="NEUTRO"))
