# core/config.py
import os

CATALOG_BASE_URL = os.getenv(
    "CATALOG_BASE_URL", "https://65e178bfa8583365b31672f8.mockapi.io"
).rstrip("/")

# Seconds; 0 or negative means wait forever.
_timeout_raw = float(os.getenv("CATALOG_TIMEOUT", "30"))
CATALOG_TIMEOUT = _timeout_raw if _timeout_raw > 0 else None

CATALOG_USER_AGENT = os.getenv("CATALOG_USER_AGENT", "toy-catalog/0.1")

DB_PATH = os.getenv("DB_PATH", os.path.join("data", "toy_catalog.sqlite3"))
SAVED_ITEMS_KEY = os.getenv("SAVED_ITEMS_KEY", "savedItems")
