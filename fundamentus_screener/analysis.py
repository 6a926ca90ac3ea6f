"""Narrative and structured stock analysis through the Anthropic Messages API.

The flow is two calls: a free-text analysis of the record's indicators, then a
second call that rewrites that text as JSON, which is parsed into a
``StructuredAnalysis`` for display.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

import anthropic

from .config import ANALYSIS_MAX_TOKENS, ANALYSIS_MODEL, ANTHROPIC_API_KEY
from .models import (
    AnalysisMetric,
    Band,
    FundamentalRecord,
    MetricCategory,
    Recommendation,
    StructuredAnalysis,
)
from .parsing import format_indicator

logger = logging.getLogger(__name__)

ANALYSIS_STEPS = [
    "Analisando saúde financeira...",
    "Avaliando múltiplos...",
    "Calculando rentabilidade...",
    "Verificando dividendos...",
    "Analisando endividamento...",
    "Identificando pontos fortes e fracos...",
    "Avaliando riscos e oportunidades...",
    "Elaborando recomendação final...",
]

STRUCTURING_STEP = "Estruturando análise..."

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


class AnalysisError(RuntimeError):
    pass


def _client(client: Any = None) -> Any:
    if client is not None:
        return client
    if not ANTHROPIC_API_KEY:
        raise AnalysisError("ANTHROPIC_API_KEY não configurada.")
    return anthropic.Anthropic(api_key=ANTHROPIC_API_KEY)


def _complete(prompt: str, client: Any = None) -> str:
    api = _client(client)
    try:
        response = api.messages.create(
            model=ANALYSIS_MODEL,
            max_tokens=ANALYSIS_MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
    except anthropic.APIError as exc:
        logger.warning("anthropic request failed: %s", exc)
        raise AnalysisError(f"Falha na chamada ao modelo: {exc}") from exc

    text = "\n".join(
        block.text for block in getattr(response, "content", None) or [] if getattr(block, "text", None)
    ).strip()
    if not text:
        raise AnalysisError("Resposta vazia do modelo.")
    return text


def _fmt(record: FundamentalRecord, name: str) -> str:
    return format_indicator(name, getattr(record, name))


def build_deep_analysis_prompt(record: FundamentalRecord) -> str:
    return f"""Analise detalhadamente a ação {record.symbol} com base nos seguintes indicadores fundamentalistas:

P/L: {_fmt(record, "pl")}
P/VP: {_fmt(record, "pvp")}
ROE: {_fmt(record, "roe")}
Dividend Yield: {_fmt(record, "div_yield")}
Dívida Bruta/Patrimônio: {_fmt(record, "div_bruta")}
Crescimento da Receita (5 anos): {_fmt(record, "cresc_rec")}
Margem Líquida: {_fmt(record, "marg_liq")}
ROIC: {_fmt(record, "roic")}

Forneça:
1. Visão geral da saúde financeira
2. Análise dos múltiplos (P/L e P/VP)
3. Análise da rentabilidade (ROE, Margem Líquida e ROIC)
4. Análise da distribuição de dividendos
5. Análise do endividamento
6. Pontos fortes e fracos
7. Riscos e oportunidades
8. Recomendação final (Compra/Venda/Neutro)

Seja objetivo e use dados concretos em sua análise."""


def build_structure_prompt(raw_analysis: str, symbol: str) -> str:
    return f"""Analise o seguinte texto sobre a ação {symbol} e estruture uma resposta em formato JSON:

{raw_analysis}

Forneça a resposta APENAS no seguinte formato JSON, sem texto adicional:
{{
  "overview": "Resumo geral em um parágrafo",
  "positivePoints": ["Lista de pontos positivos"],
  "negativePoints": ["Lista de pontos de atenção"],
  "keyMetrics": [
    {{
      "category": "Nome da categoria",
      "metrics": [
        {{"name": "Nome do indicador", "value": "Valor", "evaluation": "Positivo/Neutro/Negativo"}}
      ]
    }}
  ],
  "recommendation": {{
    "verdict": "COMPRA/VENDA/NEUTRO",
    "reasoning": ["Lista de justificativas"]
  }}
}}"""


def request_deep_analysis(record: FundamentalRecord, client: Any = None) -> str:
    logger.info("requesting deep analysis for %s", record.symbol)
    return _complete(build_deep_analysis_prompt(record), client)


def extract_json_object(text: str) -> dict:
    match = _JSON_BLOCK.search(text or "")
    if match is None:
        raise AnalysisError("Nenhum JSON encontrado na resposta.")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise AnalysisError("JSON inválido na resposta.") from exc
    if not isinstance(payload, dict):
        raise AnalysisError("JSON da resposta não é um objeto.")
    return payload


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def parse_structured_analysis(payload: dict) -> StructuredAnalysis:
    categories = []
    for raw_cat in payload.get("keyMetrics") or []:
        if not isinstance(raw_cat, dict):
            continue
        metrics = [
            AnalysisMetric(
                name=_text(m.get("name")),
                value=str(m.get("value", "")),
                evaluation=_text(m.get("evaluation"), "Neutro"),
            )
            for m in raw_cat.get("metrics") or []
            if isinstance(m, dict)
        ]
        categories.append(MetricCategory(category=_text(raw_cat.get("category")), metrics=metrics))

    raw_rec = payload.get("recommendation")
    raw_rec = raw_rec if isinstance(raw_rec, dict) else {}
    return StructuredAnalysis(
        overview=_text(payload.get("overview")),
        positive_points=_str_list(payload.get("positivePoints")),
        negative_points=_str_list(payload.get("negativePoints")),
        key_metrics=categories,
        recommendation=Recommendation(
            verdict=_text(raw_rec.get("verdict"), "NEUTRO"),
            reasoning=_str_list(raw_rec.get("reasoning")),
        ),
    )


def structure_analysis(raw_analysis: str, symbol: str, client: Any = None) -> StructuredAnalysis:
    if not raw_analysis or not raw_analysis.strip():
        raise AnalysisError("Análise inválida ou vazia.")
    text = _complete(build_structure_prompt(raw_analysis, symbol), client)
    return parse_structured_analysis(extract_json_object(text))


def run_deep_analysis(
    record: FundamentalRecord,
    client: Any = None,
    on_step: Callable[[str], None] | None = None,
) -> tuple[str, StructuredAnalysis]:
    """Narrative call then structuring call; ``on_step`` gets a status line before each."""
    notify = on_step or (lambda _: None)
    for step in ANALYSIS_STEPS:
        notify(step)
    raw = request_deep_analysis(record, client)
    notify(STRUCTURING_STEP)
    return raw, structure_analysis(raw, record.symbol, client)


def evaluation_band(evaluation: str) -> Band:
    text = (evaluation or "").lower()
    if "positivo" in text:
        return Band.FAVORABLE
    if "negativo" in text:
        return Band.UNFAVORABLE
    return Band.NEUTRAL


def verdict_band(verdict: str) -> Band:
    text = (verdict or "").upper()
    if "COMPRA" in text:
        return Band.FAVORABLE
    if "VENDA" in text:
        return Band.UNFAVORABLE
    return Band.NEUTRAL
