"""
Configuration, loaded from .env and never hardcoded.

Only the command-line runner and logging setup read these values; the
``inplay`` engine package takes everything as arguments.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ── Logging ──────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"

# ── Exports ──────────────────────────────────────────────────────────
DATA_DIR = Path(os.getenv("DATA_DIR", "data"))
DOMINANCE_CSV = DATA_DIR / "dominance.csv"
