"""
Login screen.

Username + password + NIC. The NIC is checked on every change and the
Login button stays disabled while the NIC has an error or a request is
in flight. On success the session token goes to the shared client
storage, and this visitor is marked signed in through st.session_state.
"""

import streamlit as st
from app.auth import sign_in, sign_out, is_authenticated, remember_session
from app.forms import LoginForm, Status

FORM_KEY = "login_form"


def _widget_key(name: str) -> str:
    return f"login_{name}"


def _get_form() -> LoginForm:
    if FORM_KEY not in st.session_state:
        st.session_state[FORM_KEY] = LoginForm()
    return st.session_state[FORM_KEY]


def _on_edit(name: str):
    form = _get_form()
    form.edit(name, st.session_state[_widget_key(name)])


def _on_submit():
    form = _get_form()
    for name in form.fields:
        form.values[name] = st.session_state.get(_widget_key(name), "")
    with st.spinner("Loading..."):
        form.submit(lambda body: sign_in(body["username"], body["password"], body["nicNumber"]))
    if form.state.status is Status.SUCCEEDED:
        remember_session(form.token)


def _on_sign_out():
    sign_out()
    st.session_state.pop(FORM_KEY, None)


def render(on_switch_to_register):
    st.title("Login")
    st.caption("Please sign in to continue")

    form = _get_form()

    if is_authenticated():
        st.info("You are signed in.")
        st.button("Logout", on_click=_on_sign_out, key="login_logout")

    if form.state.error:
        st.error(form.state.error)
    if form.state.success:
        st.success(form.state.success)

    st.text_input("Username", key=_widget_key("username"),
                  on_change=_on_edit, args=("username",))
    st.text_input("Password", type="password", key=_widget_key("password"),
                  on_change=_on_edit, args=("password",))
    st.text_input("NIC Number", key=_widget_key("nicNumber"), placeholder="123456789V or 200012345678",
                  on_change=_on_edit, args=("nicNumber",))

    for name in form.fields:
        if form.field_errors.get(name):
            st.caption(f":red[{form.field_errors[name]}]")

    st.button(
        "Login",
        key="login_submit",
        on_click=_on_submit,
        disabled=not form.can_submit(),
        use_container_width=True,
    )

    st.write("Don't have an account?")
    st.button("Register", key="go_register", on_click=on_switch_to_register)
