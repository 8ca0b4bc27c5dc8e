"""
Client-side key-value storage.

A small persistent store shared by every session in the process, the
counterpart of a browser's localStorage. The session token lives under
TOKEN_KEY and is read by anything that needs to call the API as the user.
"""

import json
import logging
import threading
from pathlib import Path

import streamlit as st

from app.settings import client_storage_path

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class ClientStorage:
    """JSON-file backed string store."""

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning("Client storage at %s is not valid JSON; starting empty", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str, default=None):
        with self._lock:
            return self._read().get(key, default)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)


@st.cache_resource
def get_client_storage() -> ClientStorage:
    """Return the process-wide storage instance."""
    return ClientStorage(client_storage_path())
