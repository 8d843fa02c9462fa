"""Main Streamlit entry point."""

from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from app.state.session import (
    Page,
    StreamlitSessionProvider,
    get_dashboard_state,
    get_page,
    set_page,
)
from app.ui.auth import render_login, render_register
from app.ui.dashboard import render_dashboard
from cosmicwatch.config import AppConfig, configure_logging, load_config
from cosmicwatch.fetchers.auth import AuthClient
from cosmicwatch.fetchers.store import HttpAsteroidStore
from cosmicwatch.session import FileSessionProvider, SessionProvider
from cosmicwatch.watchlist import WatchlistReconciler


@dataclass(slots=True)
class Services:
    store: HttpAsteroidStore
    auth: AuthClient
    reconciler: WatchlistReconciler
    sessions: SessionProvider


def build_services(config: AppConfig, sessions: SessionProvider) -> Services:
    store = HttpAsteroidStore(config.api_base_url, timeout=config.timeout_seconds)
    auth = AuthClient(config.auth_base_url, sessions, timeout=config.timeout_seconds)
    return Services(
        store=store,
        auth=auth,
        reconciler=WatchlistReconciler(store, sessions),
        sessions=sessions,
    )


def make_session_provider(config: AppConfig) -> SessionProvider:
    """Per-browser sessions by default; a shared JSON file for single-user local runs."""

    if config.session_backend == "file":
        return FileSessionProvider(config.session_path)
    return StreamlitSessionProvider(st)


@st.cache_resource(show_spinner=False)
def _cached_services(
    api_base_url: str,
    auth_base_url: str,
    timeout_seconds: float,
    session_backend: str,
    session_path: str,
) -> Services:
    config = AppConfig(
        app_version="",
        api_base_url=api_base_url,
        auth_base_url=auth_base_url,
        timeout_seconds=timeout_seconds,
        session_backend=session_backend,
        session_path=session_path,
    )
    return build_services(config, make_session_provider(config))


def shared_services(config: AppConfig) -> Services:
    """One set of HTTP clients per process, rebuilt only when the endpoints change."""

    return _cached_services(
        config.api_base_url,
        config.auth_base_url,
        config.timeout_seconds,
        config.session_backend,
        config.session_path,
    )


def resolve_page(requested: Page, signed_in: bool) -> Page:
    """Signed-in users always land on the dashboard; others never do."""

    if signed_in:
        return Page.DASHBOARD
    if requested is Page.DASHBOARD:
        return Page.LOGIN
    return requested


def run_app() -> None:
    config = load_config()
    configure_logging(config.log_level)
    st.set_page_config(page_title="Cosmic Watch", layout="wide")

    services = shared_services(config)
    page = resolve_page(get_page(st), services.sessions.current_user() is not None)
    set_page(st, page)
    st.sidebar.caption(f"Version {config.app_version}")

    if page is Page.DASHBOARD:
        render_dashboard(
            get_dashboard_state(st),
            services.store,
            services.reconciler,
            services.auth,
            config.settings,
        )
    elif page is Page.REGISTER:
        render_register(services.auth)
    elif render_login(services.auth):
        st.rerun()


__all__ = [
    "Services",
    "build_services",
    "make_session_provider",
    "resolve_page",
    "run_app",
    "shared_services",
]
