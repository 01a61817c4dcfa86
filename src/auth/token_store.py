"""Persisted bearer token.

The token lives as a single string under a fixed key in a small JSON file,
so a CLI invocation can pick up the session of the previous one.

Usage:
    store = TokenStore()
    store.set(token)
    store.get()       # -> token or None
    store.remove()
"""

from __future__ import annotations

import base64
import json
import logging
import time
from pathlib import Path
from typing import Optional

from src.common.config import AuthSettings, settings

logger = logging.getLogger(__name__)


class TokenStore:
    """JSON-file backed token storage."""

    def __init__(self, path: Path | None = None, key: str | None = None):
        auth: AuthSettings = settings.auth
        self.path = path or auth.token_path
        self.key = key or auth.token_key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable token file: %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self) -> Optional[str]:
        """Return the stored token, or None."""
        token = self._read().get(self.key)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        data = self._read()
        data[self.key] = token
        self._write(data)

    def remove(self) -> None:
        """Drop the token; other keys in the file are left alone."""
        data = self._read()
        if self.key not in data:
            return
        del data[self.key]
        self._write(data)


def _decode_segment(segment: str) -> dict:
    padded = segment + "=" * (-len(segment) % 4)
    return json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))


def is_token_valid(token: Optional[str], now: Optional[float] = None) -> bool:
    """Check a JWT's ``exp`` claim against the clock.

    The signature is not verified; the server remains the authority. A
    missing token, a malformed token or a token without ``exp`` is invalid.
    """
    if not token:
        return False
    try:
        payload = _decode_segment(token.split(".")[1])
        exp = float(payload["exp"])
    except (IndexError, KeyError, TypeError, ValueError):
        return False
    return exp > (now if now is not None else time.time())
