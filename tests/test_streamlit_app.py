import json

import pytest
import streamlit as st
from pytest_httpx import HTTPXMock
from streamlit.testing.v1 import AppTest

from app.storage import ClientStorage, TOKEN_KEY
from app.validation import NIC_NEW_FORMAT, PASSWORDS_DO_NOT_MATCH

# resolved relative to this file
APP_SCRIPT = "../streamlit_app.py"
API_URL = "http://auth.test"
SIGNED_IN = "You are signed in."


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "client_storage.json"


@pytest.fixture
def app(monkeypatch, storage_path) -> AppTest:
    monkeypatch.setenv("CLIENT_STORAGE_PATH", str(storage_path))
    monkeypatch.setenv("AUTH_API_URL", API_URL)
    monkeypatch.setenv("REGISTER_IDENTIFIER", "email")
    monkeypatch.delenv("REGISTER_REQUIRE_NIC", raising=False)
    # storage and API client are cached per process; rebuild them from this env
    st.cache_resource.clear()
    return _open_session()


def _open_session() -> AppTest:
    at = AppTest.from_file(APP_SCRIPT, default_timeout=30)
    at.run()
    assert not at.exception
    return at


def _captions(at: AppTest) -> list[str]:
    return [c.value for c in at.caption]


def _infos(at: AppTest) -> list[str]:
    return [i.value for i in at.info]


def _state_value(at: AppTest, key: str):
    try:
        return at.session_state[key]
    except KeyError:
        return ""


def test_starts_on_login(app: AppTest) -> None:
    assert app.session_state["show_login"] is True
    assert app.title[0].value == "Login"


def test_toggle_between_screens(app: AppTest) -> None:
    app.button(key="go_register").click().run()
    assert app.session_state["show_login"] is False
    assert app.title[0].value == "Sign Up"

    app.button(key="go_login").click().run()
    assert app.session_state["show_login"] is True
    assert app.title[0].value == "Login"


def test_nic_error_disables_login(app: AppTest) -> None:
    app.text_input(key="login_nicNumber").input("12345").run()

    assert any(NIC_NEW_FORMAT in caption for caption in _captions(app))
    assert app.button(key="login_submit").disabled

    app.text_input(key="login_nicNumber").input("123456789V").run()

    assert not any(NIC_NEW_FORMAT in caption for caption in _captions(app))
    assert not app.button(key="login_submit").disabled


def test_registration_password_mismatch_is_reported(app: AppTest) -> None:
    app.button(key="go_register").click().run()
    app.text_input(key="register_email").input("amal@example.lk")
    app.text_input(key="register_password").input("secret1")
    app.text_input(key="register_confirmPassword").input("secret2")
    app.button(key="register_submit").click().run()

    assert not app.exception
    assert any(PASSWORDS_DO_NOT_MATCH in caption for caption in _captions(app))
    assert app.title[0].value == "Sign Up"


def test_successful_registration_returns_to_login(app: AppTest, httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_response(
        method="POST",
        url=f"{API_URL}/api/auth/register",
        status_code=201,
        json={"message": "User registered successfully"},
    )

    app.button(key="go_register").click().run()
    app.text_input(key="register_email").input("amal@example.lk")
    app.text_input(key="register_password").input("secret1")
    app.text_input(key="register_confirmPassword").input("secret1")
    app.button(key="register_submit").click().run()

    assert not app.exception
    assert json.loads(httpx_mock.get_request().content) == {"email": "amal@example.lk", "password": "secret1"}
    assert app.session_state["show_login"] is True
    assert app.title[0].value == "Login"
    for key in ("register_email", "register_password", "register_confirmPassword"):
        assert _state_value(app, key) == ""


def test_signed_in_state_belongs_to_one_visitor(app: AppTest, storage_path, httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_response(
        method="POST",
        url=f"{API_URL}/api/auth/login",
        json={"message": "Login successful", "token": "alice-token"},
    )
    storage = ClientStorage(storage_path)

    alice = app
    alice.text_input(key="login_username").input("alice")
    alice.text_input(key="login_password").input("secret1")
    alice.text_input(key="login_nicNumber").input("200012345678")
    alice.button(key="login_submit").click().run()

    assert not alice.exception
    assert SIGNED_IN in _infos(alice)
    assert storage.get(TOKEN_KEY) == "alice-token"

    bob = _open_session()

    assert SIGNED_IN not in _infos(bob)
    assert "login_logout" not in [b.key for b in bob.button]
    assert storage.get(TOKEN_KEY) == "alice-token"

    alice.button(key="login_logout").click().run()

    assert SIGNED_IN not in _infos(alice)
    assert storage.get(TOKEN_KEY) is None
