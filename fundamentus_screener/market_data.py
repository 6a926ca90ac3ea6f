from __future__ import annotations

import logging

import pandas as pd
import yfinance as yf

from .config import HISTORY_PERIOD, YAHOO_SUFFIX

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = ["date", "price"]


def yahoo_symbol(symbol: str) -> str:
    symbol = (symbol or "").strip().upper()
    if not symbol or symbol.endswith(YAHOO_SUFFIX):
        return symbol
    return f"{symbol}{YAHOO_SUFFIX}"


def _safe_history(ticker: yf.Ticker, period: str, interval: str) -> pd.DataFrame:
    try:
        out = ticker.history(period=period, interval=interval, auto_adjust=False)
    except Exception as exc:
        logger.warning("history lookup failed for %s: %s", getattr(ticker, "ticker", "?"), exc)
        return pd.DataFrame()
    return out if isinstance(out, pd.DataFrame) else pd.DataFrame()


def _close_series_to_frame(history: pd.DataFrame) -> pd.DataFrame:
    if history is None or history.empty or "Close" not in history.columns:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    if not isinstance(history.index, pd.DatetimeIndex):
        return pd.DataFrame(columns=HISTORY_COLUMNS)

    close = pd.to_numeric(history["Close"], errors="coerce").dropna()
    index = close.index.tz_localize(None) if close.index.tz is not None else close.index
    return pd.DataFrame({"date": index, "price": close.astype(float).to_numpy()}).reset_index(drop=True)


def fetch_price_history(symbol: str, period: str = HISTORY_PERIOD, ticker_factory=yf.Ticker) -> pd.DataFrame:
    ysym = yahoo_symbol(symbol)
    if not ysym:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    history = _safe_history(ticker_factory(ysym), period=period, interval="1d")
    return _close_series_to_frame(history)


def fetch_leaders_history(symbols: list[str], period: str = HISTORY_PERIOD, ticker_factory=yf.Ticker) -> pd.DataFrame:
    frames = []
    for symbol in symbols:
        frame = fetch_price_history(symbol, period=period, ticker_factory=ticker_factory)
        if frame.empty:
            continue
        frames.append(frame.assign(symbol=symbol))
    if not frames:
        return pd.DataFrame(columns=["symbol", *HISTORY_COLUMNS])
    return pd.concat(frames, ignore_index=True)[["symbol", *HISTORY_COLUMNS]]
