"""Login and registration pages."""

from __future__ import annotations

import streamlit as st

from app.state.session import Page, set_page
from cosmicwatch.errors import AuthenticationFailed, RemoteUnavailable
from cosmicwatch.fetchers.auth import AuthClient


def render_login(auth: AuthClient) -> bool:
    """Render the login form. Returns True once a session has been established."""

    st.header("Welcome back")
    st.caption("Sign in to track near-earth objects.")
    with st.form("login_form"):
        email = st.text_input("Email", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Sign in", key="login_submit")

    if st.button("Create an account", key="goto_register"):
        set_page(st, Page.REGISTER)
        st.rerun()

    if not submitted:
        return False
    if not email.strip() or not password:
        st.warning("Enter both email and password.")
        return False
    try:
        auth.login(email, password)
    except AuthenticationFailed as exc:
        st.error(f"Login failed: {exc}")
        return False
    except RemoteUnavailable as exc:
        st.error(f"Auth service unavailable: {exc}")
        return False
    set_page(st, Page.DASHBOARD)
    st.success("Signed in")
    return True


def render_register(auth: AuthClient) -> bool:
    """Render the registration form. Returns True when the account was created."""

    st.header("Join Cosmic Watch")
    with st.form("register_form"):
        email = st.text_input("Email", key="register_email")
        password = st.text_input("Password", type="password", key="register_password")
        confirm = st.text_input("Confirm password", type="password", key="register_confirm")
        submitted = st.form_submit_button("Register", key="register_submit")

    if st.button("Back to sign in", key="goto_login"):
        set_page(st, Page.LOGIN)
        st.rerun()

    if not submitted:
        return False
    if not email.strip() or not password:
        st.warning("Enter both email and password.")
        return False
    if password != confirm:
        st.warning("Passwords do not match.")
        return False
    try:
        auth.register(email, password)
    except AuthenticationFailed as exc:
        st.error(f"Registration failed: {exc}")
        return False
    except RemoteUnavailable as exc:
        st.error(f"Auth service unavailable: {exc}")
        return False
    set_page(st, Page.LOGIN)
    st.success("Account created. You can sign in now.")
    return True


__all__ = ["render_login", "render_register"]
