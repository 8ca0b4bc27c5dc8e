"""
Registration screen.

Collects an email (or username), password and confirmation, plus the NIC
when REGISTER_REQUIRE_NIC is set. After a successful registration the
fields are cleared and the view switches back to login two seconds later.
"""

import time

import streamlit as st
from app.auth import sign_up
from app.forms import FIELD_LABELS, RegistrationForm
from app.settings import registration_identifier, registration_requires_nic

FORM_KEY = "register_form"
PENDING_SWITCH_KEY = "register_pending_switch"


def _widget_key(name: str) -> str:
    return f"register_{name}"


def _schedule(delay: float, callback):
    """Run callback after delay, once the success message has been drawn."""
    st.session_state[PENDING_SWITCH_KEY] = (delay, callback)


def _get_form(on_switch_to_login) -> RegistrationForm:
    if FORM_KEY not in st.session_state:
        st.session_state[FORM_KEY] = RegistrationForm(
            identifier=registration_identifier(),
            require_nic=registration_requires_nic(),
            on_switch_to_login=on_switch_to_login,
            schedule=_schedule,
        )
    return st.session_state[FORM_KEY]


def _on_edit(name: str):
    form = st.session_state[FORM_KEY]
    form.edit(name, st.session_state[_widget_key(name)])


def _on_submit():
    form = st.session_state[FORM_KEY]
    for name in form.fields:
        form.values[name] = st.session_state.get(_widget_key(name), "")
    with st.spinner("Signing up..."):
        form.submit(sign_up)
    # fields may have been cleared on success
    for name in form.fields:
        st.session_state[_widget_key(name)] = form.values[name]


def _run_pending_switch():
    pending = st.session_state.pop(PENDING_SWITCH_KEY, None)
    if not pending:
        return
    delay, callback = pending
    time.sleep(delay)
    callback()
    st.rerun()


def render(on_switch_to_login):
    st.title("Sign Up")
    st.caption("Create your account")

    form = _get_form(on_switch_to_login)

    if form.state.error:
        st.error(form.state.error)
    if form.state.success:
        st.success(form.state.success)

    for name in form.fields:
        st.text_input(
            FIELD_LABELS[name],
            key=_widget_key(name),
            type="password" if name in ("password", "confirmPassword") else "default",
            on_change=_on_edit,
            args=(name,),
        )
        if form.field_errors.get(name):
            st.caption(f":red[{form.field_errors[name]}]")

    st.button(
        "Sign Up",
        key="register_submit",
        on_click=_on_submit,
        disabled=not form.can_submit(),
        use_container_width=True,
    )

    st.write("Already have an account?")
    st.button("Login", key="go_login", on_click=on_switch_to_login)

    _run_pending_switch()
