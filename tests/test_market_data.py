from __future__ import annotations

import pandas as pd

from fundamentus_screener.market_data import fetch_leaders_history, fetch_price_history, yahoo_symbol


class _DummyTicker:
    histories: dict[str, pd.DataFrame] = {}

    def __init__(self, symbol: str):
        self.ticker = symbol

    def history(self, period: str, interval: str, auto_adjust: bool):
        if self.ticker not in self.histories:
            raise ValueError("no data")
        return self.histories[self.ticker]


def _history(prices: list[float]) -> pd.DataFrame:
    idx = pd.date_range("2025-01-02", periods=len(prices), freq="B", tz="America/Sao_Paulo")
    return pd.DataFrame({"Close": prices, "Volume": [100] * len(prices)}, index=idx)


def test_yahoo_symbol_adds_sa_suffix():
    assert yahoo_symbol("petr4") == "PETR4.SA"
    assert yahoo_symbol("PETR4.SA") == "PETR4.SA"
    assert yahoo_symbol("") == ""


def test_fetch_price_history_returns_date_price(monkeypatch):
    monkeypatch.setattr(_DummyTicker, "histories", {"WEGE3.SA": _history([50.0, 51.5, float("nan"), 52.0])})

    df = fetch_price_history("WEGE3", ticker_factory=_DummyTicker)

    assert df.columns.tolist() == ["date", "price"]
    assert df["price"].tolist() == [50.0, 51.5, 52.0]
    assert df["date"].dt.tz is None


def test_fetch_price_history_failure_is_empty(monkeypatch):
    monkeypatch.setattr(_DummyTicker, "histories", {})
    df = fetch_price_history("XXXX3", ticker_factory=_DummyTicker)
    assert df.empty
    assert df.columns.tolist() == ["date", "price"]


def test_fetch_leaders_history_long_form(monkeypatch):
    monkeypatch.setattr(
        _DummyTicker,
        "histories",
        {"AAAA3.SA": _history([1.0, 2.0]), "BBBB4.SA": _history([3.0])},
    )

    df = fetch_leaders_history(["AAAA3", "MISSING3", "BBBB4"], ticker_factory=_DummyTicker)

    assert df.columns.tolist() == ["symbol", "date", "price"]
    assert df["symbol"].tolist() == ["AAAA3", "AAAA3", "BBBB4"]
