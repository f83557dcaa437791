"""Runtime configuration read from the environment (and `.env`, if present)."""
import os
from pathlib import Path

from dotenv import load_dotenv

PACKAGE_DIR = Path(__file__).resolve().parent
PROJECT_DIR = PACKAGE_DIR.parent

load_dotenv(PROJECT_DIR / ".env")

# Storage
DATA_DIR = Path(os.getenv("DATA_DIR", str(PACKAGE_DIR / "data")))
CATALOG_PATH = Path(os.getenv("CATALOG_PATH", str(DATA_DIR / "presets.json")))
CHARACTERS_PATH = Path(os.getenv("CHARACTERS_PATH", str(DATA_DIR / "characters.json")))

# Frontend assets (served only if the directory exists)
STATIC_DIR = Path(os.getenv("STATIC_DIR", str(PACKAGE_DIR / "public")))

# HTTP / runtime
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()] or ["*"]

# Audit trail of character mutations
AUDIT_LOG_ENABLED = os.getenv("AUDIT_LOG", "1") in ("1", "true", "True")
AUDIT_LOG_DIR = Path(os.getenv("AUDIT_LOG_DIR", str(PROJECT_DIR / "logs")))
