"""Configuration management for Trackamate.

This module centralizes all configuration values including paths,
the account API location, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in trackamate/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("TRACKAMATE_DATA_DIR", _PROJECT_ROOT / "data"))

# Expense ledger database
DB_PATH = Path(
    os.getenv("TRACKAMATE_DB_PATH", DATA_DIR / "ledger.db")
).resolve()

# Session token and recurring item files
SESSION_PATH = Path(
    os.getenv("TRACKAMATE_SESSION_PATH", DATA_DIR / "session.json")
).resolve()
ITEMS_PATH = Path(
    os.getenv("TRACKAMATE_ITEMS_PATH", DATA_DIR / "recurring_items.json")
).resolve()

# Remote account API
API_BASE_URL = os.getenv("TRACKAMATE_API_BASE", "http://127.0.0.1:5000").rstrip("/")
API_TIMEOUT = float(os.getenv("TRACKAMATE_API_TIMEOUT", "20"))


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, DB_PATH.parent, SESSION_PATH.parent, ITEMS_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)
