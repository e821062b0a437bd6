"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Storage ───────────────────────────────────────────────
# 'local' keeps JSON documents on disk, 'postgres' uses the database below.
STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "local").strip().lower()
LOCAL_STORAGE_DIR: str = os.getenv("LOCAL_STORAGE_DIR", ".ledgerwise")

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "ledgerwise")
DB_USER: str = os.getenv("DB_USER", "ledgerwise_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Currency ──────────────────────────────────────────────
DEFAULT_CURRENCY: str = "USD"
