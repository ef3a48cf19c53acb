"""Lightweight persistent store for the signed-in session token."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .config import SESSION_PATH

logger = logging.getLogger(__name__)

TOKEN_KEY = 'trackamate_token'


class SessionStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or SESSION_PATH)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open('w', encoding='utf-8') as handle:
            json.dump(data, handle, indent=2, sort_keys=True)

    def get_token(self) -> Optional[str]:
        token = self._read().get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def save_session(self, token: str) -> None:
        if not isinstance(token, str) or not token.strip():
            raise ValueError("session token must be a non-empty string")
        data = self._read()
        data[TOKEN_KEY] = token.strip()
        self._write(data)
        logger.info("Session saved")

    def clear_session(self) -> None:
        data = self._read()
        if data.pop(TOKEN_KEY, None) is not None:
            self._write(data)
            logger.info("Session cleared")

    def is_logged_in(self) -> bool:
        return self.get_token() is not None
