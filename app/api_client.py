"""
HTTP client for the auth API.

Uses @st.cache_resource for a singleton httpx.Client shared across
sessions. No timeout is configured: a submission waits for the server.
"""

import httpx
import streamlit as st

from app.settings import api_base_url

LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"


def create_client(base_url: str) -> httpx.Client:
    return httpx.Client(
        base_url=base_url,
        headers={"Content-Type": "application/json"},
        timeout=None,
    )


@st.cache_resource
def _init_client() -> httpx.Client:
    return create_client(api_base_url())


def get_api_client() -> httpx.Client:
    """Return the shared API client."""
    return _init_client()
