from __future__ import annotations

from zoneinfo import ZoneInfo

import streamlit as st

from fundamentus_screener.analysis import AnalysisError, run_deep_analysis
from fundamentus_screener.auth import check_credentials, login_required
from fundamentus_screener.config import MARKET_TZ, configure_logging
from fundamentus_screener.market_data import fetch_leaders_history, fetch_price_history
from fundamentus_screener.screens import apply_filters, leaders_frame, load_or_build_ranking, record_from_row
from fundamentus_screener.ui_components import (
    render_filters,
    render_fundamentals_table,
    render_hero,
    render_leaders,
    render_leaders_chart,
    render_login,
    render_stock_detail,
    render_structured_analysis,
)
from fundamentus_screener.ui_theme import inject_theme


@st.cache_data(show_spinner=False, ttl=60 * 30)
def _price_history(symbol: str):
    return fetch_price_history(symbol)


@st.cache_data(show_spinner=False, ttl=60 * 30)
def _leaders_history(symbols: tuple[str, ...]):
    return fetch_leaders_history(list(symbols))


def _render_deep_analysis(record) -> None:
    key = f"analysis::{record.symbol}"
    if st.button("Busca Profunda", key=f"deep::{record.symbol}"):
        with st.status("Analisando...", expanded=True) as status:
            try:
                raw, structured = run_deep_analysis(record, on_step=st.write)
            except AnalysisError as exc:
                status.update(label="Erro na análise", state="error")
                st.error(f"Erro na análise: {exc}. Por favor, tente novamente.")
                return
            status.update(label="Análise concluída", state="complete", expanded=False)
        st.session_state[key] = (raw, structured)

    saved = st.session_state.get(key)
    if saved is None:
        return
    raw, structured = saved
    with st.expander("Análise completa", expanded=False):
        st.markdown(raw)
    render_structured_analysis(structured)


def main() -> None:
    configure_logging()
    st.set_page_config(page_title="Melhores Investimentos", layout="wide")
    st.markdown(inject_theme(), unsafe_allow_html=True)

    if login_required() and not render_login(check_credentials):
        return

    if login_required() and st.sidebar.button("Sair"):
        st.session_state.pop("authenticated", None)
        st.rerun()

    force_refresh = st.sidebar.button("Atualizar dados")
    with st.spinner("Carregando dados do Fundamentus..."):
        df, inserted_at, from_cache = load_or_build_ranking(force_refresh=force_refresh)

    if df.empty:
        st.error("Erro ao carregar dados. Verifique a conexão com o Fundamentus.")
        return

    updated_at = "N/A" if inserted_at is None else inserted_at.astimezone(ZoneInfo(MARKET_TZ)).strftime("%d/%m/%Y %H:%M")
    if from_cache:
        updated_at = f"{updated_at} (cache)"

    filters = render_filters(df)
    filtered = apply_filters(df, filters)
    leaders = leaders_frame(df)

    render_hero(updated_at, df)
    left, right = st.columns([1, 2])
    with left:
        render_leaders(leaders)
    with right:
        with st.spinner("Carregando histórico..."):
            history = _leaders_history(tuple(leaders["symbol"]))
        render_leaders_chart(history)

    render_fundamentals_table(filtered)

    st.divider()
    symbols = filtered["symbol"].tolist()
    if not symbols:
        return
    selected = st.selectbox("Detalhes da ação", options=symbols, index=0)
    record = record_from_row(filtered[filtered["symbol"] == selected].iloc[0])
    render_stock_detail(record, _price_history(record.symbol))
    _render_deep_analysis(record)


if __name__ == "__main__":
    main()
