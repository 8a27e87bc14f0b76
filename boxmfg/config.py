# boxmfg/config.py

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# === Storage ===
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///db.sqlite")
# Switch to an in-memory database when DATABASE_URL can't be reached
STORAGE_FALLBACK = _env_bool("STORAGE_FALLBACK", "true")

# === Logging ===
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# === HTTP ===
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if o.strip()
]

# === Pagination ===
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
