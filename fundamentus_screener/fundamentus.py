from __future__ import annotations

import logging

import requests
from bs4 import BeautifulSoup

from .config import FUNDAMENTUS_COLUMNS, FUNDAMENTUS_URL, REQUEST_TIMEOUT_SECONDS, USER_AGENT
from .models import FundamentalRecord

logger = logging.getLogger(__name__)


def fetch_fundamentals_html(url: str = FUNDAMENTUS_URL, session: requests.Session | None = None) -> str:
    http = session or requests
    try:
        resp = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=REQUEST_TIMEOUT_SECONDS)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("fundamentus request failed: %s", exc)
        return ""
    return resp.text


def parse_fundamentals_table(html: str) -> list[FundamentalRecord]:
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table")
    if table is None:
        logger.warning("no table found in fundamentus page")
        return []

    records: list[FundamentalRecord] = []
    for row in table.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) < len(FUNDAMENTUS_COLUMNS):
            continue
        values = [cell.get_text(strip=True) for cell in cells[: len(FUNDAMENTUS_COLUMNS)]]
        data = dict(zip(FUNDAMENTUS_COLUMNS, values))
        if not data["symbol"]:
            continue
        records.append(FundamentalRecord.from_dict(data))
    return records


def fetch_fundamentals(session: requests.Session | None = None) -> list[FundamentalRecord]:
    records = parse_fundamentals_table(fetch_fundamentals_html(session=session))
    logger.info("fetched %d rows from fundamentus", len(records))
    return records
