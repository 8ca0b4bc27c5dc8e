"""
Configuration lookup.

Values come from os.environ (after loading .env) first, then from
st.secrets (Streamlit Cloud), then from the given default.
"""

import os
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_STORAGE_PATH = ".client_storage.json"
IDENTIFIER_FIELDS = ("email", "username")

_MISSING = object()


def get_setting(name: str, default=_MISSING) -> str:
    """Read from os.environ first, then fall back to st.secrets, then the default."""
    val = os.environ.get(name)
    if val:
        return val
    try:
        if st.secrets.load_if_toml_exists():
            return st.secrets[name]
    except (KeyError, FileNotFoundError):
        pass
    if default is _MISSING:
        raise KeyError(f"Missing setting: {name}. Set it in .env or Streamlit Cloud Secrets.")
    return default


def api_base_url() -> str:
    return get_setting("AUTH_API_URL", DEFAULT_API_URL).rstrip("/")


def registration_identifier() -> str:
    """Which field identifies a new account: 'email' or 'username'."""
    value = get_setting("REGISTER_IDENTIFIER", "email").strip().lower()
    if value not in IDENTIFIER_FIELDS:
        raise ValueError(f"REGISTER_IDENTIFIER must be one of {IDENTIFIER_FIELDS}, got {value!r}")
    return value


def registration_requires_nic() -> bool:
    return str(get_setting("REGISTER_REQUIRE_NIC", "false")).strip().lower() in ("1", "true", "yes", "on")


def client_storage_path() -> str:
    return get_setting("CLIENT_STORAGE_PATH", DEFAULT_STORAGE_PATH)


def log_level() -> str:
    return get_setting("LOG_LEVEL", "INFO").upper()
