"""
Authentication helpers: sign-in, sign-up, sign-out and token lookup.

sign_in and sign_up talk to the auth API and always return a result dict
({"success": bool, ...}) instead of raising, so the forms only have to
render what comes back. The session token is written to the shared client
storage; whether the current visitor is signed in lives in st.session_state.
"""

import logging

import httpx
import streamlit as st
from pydantic import ValidationError

from app.api_client import LOGIN_PATH, REGISTER_PATH, get_api_client
from app.models import LoginRequest, LoginResponse, MessageResponse, RegisterRequest
from app.storage import TOKEN_KEY, get_client_storage

logger = logging.getLogger(__name__)

NETWORK_ERROR = "Network error. Please try again."
LOGIN_FAILED = "Login failed"
REGISTRATION_FAILED = "Registration failed"
LOGIN_SUCCEEDED = "Login successful!"
REGISTRATION_SUCCEEDED = "Registration successful! You can now login."


class _NoResponse(Exception):
    """The request produced no usable response."""


def _post(client: httpx.Client, path: str, body: dict):
    """POST a JSON body. Returns (response, decoded JSON)."""
    try:
        response = client.post(path, json=body)
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Request to %s failed: %s", path, e)
        raise _NoResponse() from e
    logger.info("POST %s -> %s", path, response.status_code)
    return response, data if isinstance(data, dict) else {}


def _parse(model, data: dict):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Unexpected %s body: %s", model.__name__, e)
        return model()


def sign_in(username: str, password: str, nic_number: str, client: httpx.Client = None) -> dict:
    """Sign in with username, password and NIC. Does not store the token."""
    client = client or get_api_client()
    body = LoginRequest(username=username, password=password, nicNumber=nic_number)
    logger.info("Sending login request for %s", username)
    try:
        response, data = _post(client, LOGIN_PATH, body.model_dump())
    except _NoResponse:
        return {"success": False, "error": NETWORK_ERROR}

    result = _parse(LoginResponse, data)
    if response.is_success and result.token:
        return {"success": True, "token": result.token, "message": result.message or LOGIN_SUCCEEDED}
    if response.is_success:
        logger.warning("Login for %s returned %s without a token", username, response.status_code)
    return {"success": False, "error": result.message or LOGIN_FAILED}


def sign_up(payload: dict, client: httpx.Client = None) -> dict:
    """
    Register a new account.

    payload holds the identifier (email or username), password and,
    when collected, nicNumber. The endpoint answers with a message only.
    """
    client = client or get_api_client()
    body = RegisterRequest(**payload)
    logger.info("Sending registration request for %s", body.email or body.username)
    try:
        response, data = _post(client, REGISTER_PATH, body.model_dump(exclude_none=True))
    except _NoResponse:
        return {"success": False, "error": NETWORK_ERROR}

    if response.is_success:
        result = _parse(LoginResponse, data)
        outcome = {"success": True, "message": REGISTRATION_SUCCEEDED}
        if result.token:
            outcome["token"] = result.token
        return outcome
    result = _parse(MessageResponse, data)
    return {"success": False, "error": result.message or REGISTRATION_FAILED}


def _session(session):
    return st.session_state if session is None else session


def remember_session(token: str, session=None) -> None:
    """Mark this visitor as signed in with the given token."""
    session = _session(session)
    session["access_token"] = token
    session["authenticated"] = True


def sign_out(storage=None, session=None) -> None:
    """
    Sign this visitor out.

    The shared client storage is only cleared when it still holds this
    visitor's token, so one visitor cannot drop another's session.
    """
    session = _session(session)
    token = session.pop("access_token", None)
    session.pop("authenticated", None)
    if not token:
        return
    storage = storage or get_client_storage()
    if storage.get(TOKEN_KEY) == token:
        storage.remove(TOKEN_KEY)


def get_token(session=None) -> str:
    return _session(session).get("access_token", "")


def is_authenticated(session=None) -> bool:
    return _session(session).get("authenticated", False)
