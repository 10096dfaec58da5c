"""
config.py
---------
Central configuration module. Loads environment variables from the .env
file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Database ──────────────────────────────────────────────
DATABASE_URL: str = os.getenv("DATABASE_URL", "")
DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() in ("1", "true", "yes")

# ── API ───────────────────────────────────────────────────
API_URL: str = os.getenv("API_URL", "/api").rstrip("/")
API_TOKEN: str = os.getenv("API_TOKEN", "")

_raw_origins = os.getenv("CORS_ORIGINS", "*")
CORS_ORIGINS: list[str] = [o.strip() for o in _raw_origins.split(",") if o.strip()]

# ── External services ─────────────────────────────────────
PLAYERS_API_URL: str = os.getenv("PLAYERS_API_URL", "").rstrip("/")
INSTALLER_API_URL: str = os.getenv("INSTALLER_API_URL", "").rstrip("/")
HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "5.0"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
