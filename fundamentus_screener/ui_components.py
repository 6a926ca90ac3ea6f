from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from .analysis import evaluation_band, verdict_band
from .config import INDICATOR_LABELS, LEADERS_COUNT
from .models import FundamentalRecord, StructuredAnalysis
from .parsing import format_indicator, parse_decimal
from .scoring import MAX_SCORE, score_breakdown
from .screens import band_frame, display_frame
from .ui_theme import LEADER_COLORS, badge_html, band_css

TABLE_COLUMNS = [
    "rank",
    "symbol",
    "price",
    "pl",
    "pvp",
    "roe",
    "div_yield",
    "div_bruta",
    "cresc_rec",
    "marg_liq",
    "roic",
    "liq_corr",
    "score",
]

COLUMN_LABELS = {"rank": "#", "symbol": "Papel", "price": "Cotação", "score": "Score", **INDICATOR_LABELS}

DETAIL_BARS = ["roe", "div_yield", "pl", "marg_liq", "roic"]


def render_login(check) -> bool:
    if st.session_state.get("authenticated"):
        return True

    st.markdown('<div class="hero"><h2 style="margin:0">Login</h2></div>', unsafe_allow_html=True)
    with st.form("login"):
        username = st.text_input("Usuário")
        password = st.text_input("Senha", type="password")
        submitted = st.form_submit_button("Entrar")
    if submitted:
        if check(username, password):
            st.session_state["authenticated"] = True
            st.rerun()
        st.error("Usuário ou senha incorretos")
    return False


def render_hero(updated_at: str, df: pd.DataFrame) -> None:
    scores = df["score"].dropna().astype(float) if not df.empty else pd.Series(dtype=float)
    med = float(scores.median()) if not scores.empty else float("nan")
    zero_share = float((scores == 0).mean() * 100.0) if not scores.empty else 0.0
    st.markdown(
        f"""
<div class="hero">
  <h2 style="margin:0">Melhores Investimentos</h2>
  <p style="margin:.3rem 0 0 0">Fundamentus | Última atualização: {updated_at}</p>
</div>
""",
        unsafe_allow_html=True,
    )

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Ações avaliadas", len(df))
    c2.metric("Score máximo", "-" if scores.empty else f"{int(scores.max())}/{MAX_SCORE}")
    c3.metric("Score mediano", "-" if np.isnan(med) else f"{med:.0f}")
    c4.metric("Sem score (dados incompletos)", f"{zero_share:.1f}%")


def render_filters(df: pd.DataFrame) -> dict:
    st.sidebar.subheader("Filtros")
    keyword = st.sidebar.text_input("Buscar papel", value="")
    min_score = st.sidebar.slider("Score mínimo", 0, MAX_SCORE, 0, 5)
    return {"keyword": keyword, "min_score": min_score}


def render_leaders(leaders: pd.DataFrame) -> None:
    st.subheader(f"Top {LEADERS_COUNT} Ações")
    if leaders.empty:
        st.info("Nenhuma ação ranqueada.")
        return
    for pos, row in enumerate(leaders.itertuples(index=False), start=1):
        st.markdown(
            f"""
<div class="leader-row">
  <b>{pos}. {row.symbol}</b>
  <span>R$ {row.price} &nbsp;|&nbsp; Score: {row.score}</span>
</div>
""",
            unsafe_allow_html=True,
        )


def render_leaders_chart(history: pd.DataFrame) -> None:
    st.subheader("Desempenho das Top Ações (12 meses)")
    if history.empty:
        st.info("Histórico de preços indisponível.")
        return
    fig = px.line(
        history,
        x="date",
        y="price",
        color="symbol",
        color_discrete_sequence=LEADER_COLORS,
    )
    fig.update_layout(
        height=520,
        margin=dict(t=16, b=12, l=12, r=12),
        xaxis_title="Data",
        yaxis_title="Preço (R$)",
        yaxis_tickprefix="R$ ",
        legend=dict(orientation="h", yanchor="bottom", y=1.0, xanchor="left", x=0),
    )
    st.plotly_chart(fig, use_container_width=True)


def _table_styles(view: pd.DataFrame) -> pd.DataFrame:
    styles = pd.DataFrame("", index=view.index, columns=view.columns)
    bands = band_frame(view)
    for col in bands.columns:
        styles[col] = bands[col].map(band_css)
    return styles


def render_fundamentals_table(df: pd.DataFrame) -> None:
    st.subheader("Dados Fundamentalistas")
    if df.empty:
        st.info("Nenhuma ação corresponde aos filtros.")
        return
    view = df[[c for c in TABLE_COLUMNS if c in df.columns]].reset_index(drop=True)
    styles = _table_styles(view).rename(columns=COLUMN_LABELS)
    styled = display_frame(view).rename(columns=COLUMN_LABELS).style.apply(lambda _: styles, axis=None)
    st.dataframe(styled, use_container_width=True, hide_index=True, height=560)
    st.download_button(
        "CSV download",
        data=df.to_csv(index=False).encode("utf-8-sig"),
        file_name="fundamentus_ranking.csv",
        mime="text/csv",
    )


def render_stock_detail(record: FundamentalRecord, history: pd.DataFrame) -> None:
    st.subheader(f"{record.symbol} | R$ {record.price}")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Score", "-" if record.score is None else record.score)
    c2.metric("P/L", record.pl or "-")
    c3.metric("P/VP", record.pvp or "-")
    c4.metric("Div.Yield", format_indicator("div_yield", record.div_yield))

    left, right = st.columns(2)
    with left:
        if history.empty:
            st.info("Histórico de preços indisponível.")
        else:
            fig = px.line(history, x="date", y="price", title="Evolução do Preço (12 meses)")
            fig.update_traces(line_color=LEADER_COLORS[0], fill="tozeroy")
            fig.update_layout(height=380, margin=dict(t=40, b=12, l=12, r=12), yaxis_tickprefix="R$ ")
            st.plotly_chart(fig, use_container_width=True)
    with right:
        values = [parse_decimal(getattr(record, name)) for name in DETAIL_BARS]
        fig = go.Figure(
            go.Bar(
                x=[INDICATOR_LABELS[name] for name in DETAIL_BARS],
                y=[None if np.isnan(v) else v for v in values],
                marker_color=LEADER_COLORS,
            )
        )
        fig.update_layout(height=380, margin=dict(t=40, b=12, l=12, r=12), title="Indicadores")
        st.plotly_chart(fig, use_container_width=True)

    rules = score_breakdown(record)
    if rules:
        st.caption("Critérios atendidos: " + " | ".join(f"{r.description} (+{r.points})" for r in rules))
    else:
        st.caption("Nenhum critério atendido ou dados incompletos.")


def render_structured_analysis(analysis: StructuredAnalysis) -> None:
    st.subheader("Análise Estruturada")
    st.write(analysis.overview)

    good, bad = st.columns(2)
    with good:
        st.markdown("**Pontos Positivos**")
        for point in analysis.positive_points:
            st.markdown(f"- {point}")
    with bad:
        st.markdown("**Pontos de Atenção**")
        for point in analysis.negative_points:
            st.markdown(f"- {point}")

    for category in analysis.key_metrics:
        st.markdown(f"**{category.category}**")
        for metric in category.metrics:
            st.markdown(
                f"{metric.name}: {metric.value} | {badge_html(metric.evaluation, evaluation_band(metric.evaluation))}",
                unsafe_allow_html=True,
            )

    verdict = analysis.recommendation.verdict
    st.markdown(
        f"### Recomendação: {badge_html(verdict, verdict_band(verdict))}",
        unsafe_allow_html=True,
    )
    for reason in analysis.recommendation.reasoning:
        st.markdown(f"- {reason}")
