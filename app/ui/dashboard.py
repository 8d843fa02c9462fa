"""Asteroid feed, alerts and watchlist dashboard."""

from __future__ import annotations

from typing import Any

import streamlit as st

from app.state.session import DashboardState, Page, set_page
from cosmicwatch.dashboard import (
    ViewMode,
    details_url,
    load_dashboard,
    refresh_dashboard,
    visible_records,
)
from cosmicwatch.errors import InvalidRecord, RemoteUnavailable, Unauthenticated
from cosmicwatch.fetchers.auth import AuthClient
from cosmicwatch.fetchers.store import AsteroidStore
from cosmicwatch.formatting import (
    format_date,
    format_diameter,
    format_distance,
    format_velocity,
    hazard_label,
    risk_badge,
)
from cosmicwatch.models import AsteroidRecord
from cosmicwatch.watchlist import WatchlistReconciler


def _load(state: DashboardState, store: AsteroidStore, reconciler: WatchlistReconciler) -> None:
    try:
        state.data = load_dashboard(store, reconciler)
        state.last_error = None
    except RemoteUnavailable as exc:
        state.last_error = str(exc)
        st.error("Failed to load orbital data")


def _refresh(
    state: DashboardState,
    store: AsteroidStore,
    reconciler: WatchlistReconciler,
    *,
    hazard_notice: bool = True,
) -> None:
    try:
        state.data = refresh_dashboard(store, reconciler)
    except RemoteUnavailable as exc:
        state.last_error = str(exc)
        st.error("Synchronization failed")
        return
    state.last_error = None
    st.success("System synchronized")
    hazards = state.data.hazardous_count()
    if hazard_notice and hazards:
        st.warning(f"Warning: {hazards} hazardous objects detected!")


def _toggle(state: DashboardState, reconciler: WatchlistReconciler, record: AsteroidRecord) -> None:
    was_listed = record.id in state.watchlist
    try:
        state.set_watchlist(reconciler.toggle(state.watchlist, record))
    except Unauthenticated:
        st.warning("Sign in to manage your watchlist.")
        return
    except (RemoteUnavailable, InvalidRecord):
        st.error("Failed to update watchlist")
        return
    if was_listed:
        st.success(f"{record.name} removed from watchlist")
    else:
        st.success(f"{record.name} added to watchlist")


def _render_alerts(state: DashboardState, limit: int) -> None:
    if state.data is None or not state.data.alerts:
        return
    st.subheader("Close approach alerts")
    for alert in state.data.alerts[:limit]:
        st.warning(
            f"{alert.name}: {format_distance(alert.closest_approach_km)}"
            f" on {format_date(alert.closest_approach_date)}"
        )


def _render_card(
    state: DashboardState,
    reconciler: WatchlistReconciler,
    record: AsteroidRecord,
    *,
    signed_in: bool,
) -> None:
    with st.container(border=True):
        title = record.name
        badge = risk_badge(record)
        if badge:
            title = f"{title} · {badge}"
        if record.hazardous:
            title = f"{title} · Hazardous"
        st.markdown(f"**{title}**")
        diameter_col, distance_col, date_col = st.columns(3)
        diameter_col.metric("Diameter", format_diameter(record.diameter_m))
        distance_col.metric("Miss distance", format_distance(record.closest_approach_km))
        date_col.metric("Approach", format_date(record.closest_approach_date))

        listed = record.id in state.watchlist
        watch_col, details_col = st.columns(2)
        label = "Remove from watchlist" if listed else "Add to watchlist"
        # Runs before the rerun so the label and the list already reflect the change.
        watch_col.button(
            label,
            key=f"watch_{record.id}",
            disabled=not signed_in,
            on_click=_toggle,
            args=(state, reconciler, record),
        )
        if details_col.button("Details", key=f"details_{record.id}"):
            state.selected_id = record.id


def _render_details(state: DashboardState) -> None:
    record = state.selected()
    if record is None:
        return
    st.subheader(record.name)
    st.caption(f"Object ID: {record.id}")
    st.write(f"Estimated diameter: {format_diameter(record.diameter_m)}")
    st.write(f"Potentially hazardous: {hazard_label(record)}")
    st.write(f"Miss distance: {format_distance(record.closest_approach_km)}")
    st.write(f"Relative velocity: {format_velocity(record.relative_velocity_kph)}")
    st.write(f"Close approach date: {format_date(record.closest_approach_date)}")
    url = details_url(record)
    if url:
        st.link_button("View on NASA JPL", url)
    else:
        st.info("NASA data link unavailable")
    if st.button("Close details", key="details_close"):
        state.selected_id = None


def render_dashboard(
    state: DashboardState,
    store: AsteroidStore,
    reconciler: WatchlistReconciler,
    auth: AuthClient,
    settings: dict[str, Any] | None = None,
) -> None:
    settings = settings or {}
    dashboard_settings = settings.get("dashboard", {}) or {}
    signed_in = auth.current_user() is not None

    st.title("Cosmic Watch")
    view_col, refresh_col, logout_col = st.columns(3)
    view_label = "Show all" if state.view_mode is ViewMode.WATCHLIST else "Watchlist"
    if view_col.button(view_label, key="toggle_view"):
        state.toggle_view()
    refresh_clicked = refresh_col.button("Refresh", key="refresh")
    if logout_col.button("Logout", key="logout"):
        auth.logout()
        state.data = None
        state.selected_id = None
        set_page(st, Page.LOGIN)
        st.rerun()

    if refresh_clicked:
        _refresh(
            state,
            store,
            reconciler,
            hazard_notice=bool(dashboard_settings.get("hazard_notice", True)),
        )
    elif not state.loaded:
        _load(state, store, reconciler)
    if state.data is None:
        return

    _render_alerts(state, int(dashboard_settings.get("alerts_shown", 5)))

    state.filter_text = st.text_input("Search asteroids", key="asteroid_filter")
    heading = "Asteroid Feed" if state.view_mode is ViewMode.ALL else "My Watchlist"
    records = visible_records(state.data, state.view_mode, state.filter_text)
    st.subheader(heading)
    st.caption(f"{len(records)} objects detected")
    # Widget keys are derived from ids, so each id is rendered once.
    rendered: set[str] = set()
    for record in records:
        if record.id in rendered:
            continue
        rendered.add(record.id)
        _render_card(state, reconciler, record, signed_in=signed_in)

    _render_details(state)


__all__ = ["render_dashboard"]
