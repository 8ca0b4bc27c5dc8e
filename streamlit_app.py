"""
NIC Login Portal: Main Entrypoint

One page, two screens: login and registration. A single session flag
decides which one is drawn; each screen gets a callback to switch to the
other.

Usage:
    streamlit run streamlit_app.py
"""

import logging

import streamlit as st

st.set_page_config(
    page_title="NIC Login Portal",
    layout="centered",
)

from app.settings import log_level
from app.pages import login, register

SHOW_LOGIN_KEY = "show_login"
FORM_KEYS = (login.FORM_KEY, register.FORM_KEY)

logging.basicConfig(
    level=log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def _set_screen(show_login: bool):
    """Flip the screen and drop both form instances so the next one starts empty."""
    st.session_state[SHOW_LOGIN_KEY] = show_login
    for key in FORM_KEYS:
        st.session_state.pop(key, None)


def switch_to_login():
    _set_screen(True)


def switch_to_register():
    _set_screen(False)


def main():
    if SHOW_LOGIN_KEY not in st.session_state:
        st.session_state[SHOW_LOGIN_KEY] = True

    if st.session_state[SHOW_LOGIN_KEY]:
        login.render(on_switch_to_register=switch_to_register)
    else:
        register.render(on_switch_to_login=switch_to_login)


if __name__ == "__main__":
    main()
