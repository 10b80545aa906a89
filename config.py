import logging
import os

from dotenv import load_dotenv

load_dotenv()

# -----------------------------
# Storage
# -----------------------------
DB_FILE = os.getenv("BUDGET_DB_FILE", "budget.duckdb")

# -----------------------------
# Logging
# -----------------------------
LOG_FILE = os.getenv("BUDGET_LOG_FILE", "budget.log")
LOG_LEVEL = os.getenv("BUDGET_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# -----------------------------
# Display / forecasting knobs
# -----------------------------
CURRENCY = os.getenv("BUDGET_CURRENCY", "USD")
FORECAST_MONTHS = int(os.getenv("BUDGET_FORECAST_MONTHS", "6"))
HISTORY_MONTHS = int(os.getenv("BUDGET_HISTORY_MONTHS", "6"))
UPCOMING_DAYS = int(os.getenv("BUDGET_UPCOMING_DAYS", "7"))
LOGS_PER_PAGE = int(os.getenv("BUDGET_LOGS_PER_PAGE", "50"))


def configure_logging():
    logging.basicConfig(
        filename=LOG_FILE,
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
    )
