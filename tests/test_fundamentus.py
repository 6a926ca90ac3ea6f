from __future__ import annotations

import requests

from fundamentus_screener import fundamentus
from fundamentus_screener.fundamentus import fetch_fundamentals, parse_fundamentals_table

HEADER = "".join(f"<th>{h}</th>" for h in ["Papel", "Cotação", "P/L"])

ROW_A = [
    "WEGE3", "52,30", "30,12", "9,10", "4,81", "1,63%", "2,95", "11,30", "22,53", "-8,47",
    "22,41", "19,84", "21,37%", "15,48%", "1,73", "28,10%", "30,22%", "245.678.123,00",
    "23.480.000.000,00", "0,27", "18,04%",
]
ROW_B = [
    "BBAS3", "27,90", "4,10", "0,81", "0,00", "9,85%", "0,06", "0,00", "0,00", "0,00",
    "0,00", "0,00", "0,00%", "16,80%", "0,00", "0,00%", "19,80%", "310.555.000,00",
    "190.000.000.000,00", "0,00", "17,20%",
]


def _html(*rows: list[str]) -> str:
    body = "".join("<tr>" + "".join(f"<td>{c}</td>" for c in row) + "</tr>" for row in rows)
    return f"<html><body><table><tr>{HEADER}</tr>{body}</table></body></html>"


def test_parse_maps_columns_positionally():
    records = parse_fundamentals_table(_html(ROW_A, ROW_B))

    assert [r.symbol for r in records] == ["WEGE3", "BBAS3"]
    wege = records[0]
    assert wege.price == "52,30"
    assert wege.pl == "30,12"
    assert wege.div_yield == "1,63%"
    assert wege.marg_liq == "15,48%"
    assert wege.roe == "30,22%"
    assert wege.liq_2m == "245.678.123,00"
    assert wege.div_bruta == "0,27"
    assert wege.cresc_rec == "18,04%"
    assert wege.score is None


def test_parse_skips_short_and_empty_rows():
    short = ["XXXX3", "1,00"]
    blank = [""] + ROW_A[1:]
    records = parse_fundamentals_table(_html(short, blank, ROW_B))
    assert [r.symbol for r in records] == ["BBAS3"]


def test_parse_without_table():
    assert parse_fundamentals_table("") == []
    assert parse_fundamentals_table("<html><p>manutenção</p></html>") == []


class _Response:
    def __init__(self, text: str, status: int = 200):
        self.text = text
        self.status = status

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status}")


class _Session:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers, timeout))
        if self.exc:
            raise self.exc
        return self.response


def test_fetch_sends_user_agent():
    session = _Session(response=_Response(_html(ROW_A)))
    records = fetch_fundamentals(session=session)
    assert [r.symbol for r in records] == ["WEGE3"]
    url, headers, timeout = session.calls[0]
    assert url == fundamentus.FUNDAMENTUS_URL
    assert "Mozilla" in headers["User-Agent"]
    assert timeout


def test_fetch_failures_yield_empty_list():
    assert fetch_fundamentals(session=_Session(exc=requests.ConnectionError("down"))) == []
    assert fetch_fundamentals(session=_Session(response=_Response("", status=503))) == []
