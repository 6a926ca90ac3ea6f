import logging
import os
from pathlib import Path

FUNDAMENTUS_URL = os.getenv("FUNDAMENTUS_URL", "https://www.fundamentus.com.br/resultado.php")
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "20"))

# Positional layout of the fundamentus result table.
FUNDAMENTUS_COLUMNS = (
    "symbol",
    "price",
    "pl",
    "pvp",
    "psr",
    "div_yield",
    "p_ativo",
    "p_cap_giro",
    "p_ebit",
    "p_ativ_circ_liq",
    "ev_ebit",
    "ev_ebitda",
    "marg_ebit",
    "marg_liq",
    "liq_corr",
    "roic",
    "roe",
    "liq_2m",
    "patri_liq",
    "div_bruta",
    "cresc_rec",
)

INDICATOR_LABELS = {
    "pl": "P/L",
    "pvp": "P/VP",
    "roe": "ROE",
    "div_yield": "Div.Yield",
    "div_bruta": "Dív.Bruta/PL",
    "cresc_rec": "Cresc.Rec.5a",
    "marg_liq": "Marg.Líquida",
    "roic": "ROIC",
    "liq_corr": "Liq.Corrente",
    "liq_2m": "Liq.2 meses",
}

PERCENT_INDICATORS = {"roe", "div_yield", "cresc_rec", "marg_liq", "roic"}

LEADERS_COUNT = 5
LIQ_2M_MIN = 1_000_000.0

MARKET_TZ = "America/Sao_Paulo"
YAHOO_SUFFIX = ".SA"
HISTORY_PERIOD = "1y"

CACHE_DIR = Path(os.getenv("CACHE_DIR", "data_cache"))
CACHE_VERSION = "v1"

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
ANALYSIS_MODEL = os.getenv("ANALYSIS_MODEL", "claude-sonnet-4-20250514")
ANALYSIS_MAX_TOKENS = 4000

DASHBOARD_USERNAME = os.getenv("DASHBOARD_USERNAME", "admin")
DASHBOARD_PASSWORD = os.getenv("DASHBOARD_PASSWORD", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
