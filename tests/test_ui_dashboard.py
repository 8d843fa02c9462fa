from __future__ import annotations

from typing import Any

from streamlit.testing.v1 import AppTest

from app.state.session import PAGE_KEY, DashboardState, Page
from cosmicwatch.dashboard import ViewMode
from cosmicwatch.errors import RemoteUnavailable
from cosmicwatch.models import UserSession
from cosmicwatch.session import InMemorySessionProvider
from cosmicwatch.watchlist import WatchlistReconciler


class _FakeStore:
    def __init__(self) -> None:
        self.added: list[dict[str, Any]] = []
        self.removed: list[str] = []
        self.fail_writes = False
        self.fail_reads = False
        self.remote_watchlist: list[dict[str, Any]] = []
        self.watchlist_calls = 0

    def get_feed(self) -> list[Any]:
        if self.fail_reads:
            raise RemoteUnavailable("feed", "offline")
        return [
            {
                "id": "A1",
                "name": "99942 Apophis",
                "estimated_diameter": {"meters": {"estimated_diameter_max": 340.5}},
                "close_approach_data": [
                    {"miss_distance": {"kilometers": "31000"}, "close_approach_date": "2029-04-13"}
                ],
                "is_potentially_hazardous_asteroid": True,
            },
            {"id": "E3", "name": "433 Eros", "diameter_m": 16840.0},
        ]

    def get_alerts(self) -> list[Any]:
        return [{"name": "99942 Apophis", "closest_approach_date": "2029-04-13"}]

    def fetch_fresh(self) -> Any:
        return {}

    def get_watchlist(self, token: str) -> list[Any]:
        self.watchlist_calls += 1
        return list(self.remote_watchlist)

    def add_to_watchlist(self, token: str, asteroid: dict[str, Any]) -> Any:
        if self.fail_writes:
            raise RemoteUnavailable("watchlist-add", "offline")
        self.added.append(asteroid)
        return {"message": "added"}

    def remove_from_watchlist(self, token: str, asteroid_id: str) -> Any:
        self.removed.append(asteroid_id)
        return {"message": "removed"}


class _FakeAuth:
    def __init__(self, sessions: InMemorySessionProvider) -> None:
        self.sessions = sessions
        self.logged_out = False

    def current_user(self):
        return self.sessions.current_user()

    def logout(self) -> None:
        self.logged_out = True
        self.sessions.clear()


def _render_dashboard_app(state, store, reconciler, auth) -> None:
    from app.ui.dashboard import render_dashboard as _render

    _render(state, store, reconciler, auth)


def _render_with_streamlit_session(store, auth_factory) -> None:
    import streamlit as st

    from app.state.session import StreamlitSessionProvider, get_dashboard_state
    from app.ui.dashboard import render_dashboard as _render
    from cosmicwatch.models import UserSession as _UserSession
    from cosmicwatch.watchlist import WatchlistReconciler as _Reconciler

    sessions = StreamlitSessionProvider(st)
    if sessions.current_user() is None:
        sessions.persist(_UserSession(token="tok"))
    _render(get_dashboard_state(st), store, _Reconciler(store, sessions), auth_factory(sessions))


def _setup() -> tuple[DashboardState, _FakeStore, WatchlistReconciler, _FakeAuth]:
    sessions = InMemorySessionProvider(UserSession(token="tok", email="a@b.io"))
    store = _FakeStore()
    return DashboardState(), store, WatchlistReconciler(store, sessions), _FakeAuth(sessions)


def test_dashboard_renders_feed_and_alerts() -> None:
    state, store, reconciler, auth = _setup()

    at = AppTest.from_function(_render_dashboard_app, args=(state, store, reconciler, auth)).run()

    assert not at.exception
    assert state.loaded
    assert [record.id for record in state.data.asteroids] == ["A1", "E3"]
    assert any("99942 Apophis" in warning.value for warning in at.warning)
    assert at.button(key="watch_A1").label == "Add to watchlist"


def test_dashboard_adds_to_watchlist() -> None:
    state, store, reconciler, auth = _setup()
    at = AppTest.from_function(_render_dashboard_app, args=(state, store, reconciler, auth)).run()

    at.button(key="watch_A1").click().run()

    assert not at.exception
    assert [item["id"] for item in store.added] == ["A1"]
    assert "A1" in state.watchlist
    assert at.success[0].value == "99942 Apophis added to watchlist"
    assert at.button(key="watch_A1").label == "Remove from watchlist"


def test_dashboard_keeps_watchlist_when_store_fails() -> None:
    state, store, reconciler, auth = _setup()
    store.fail_writes = True
    at = AppTest.from_function(_render_dashboard_app, args=(state, store, reconciler, auth)).run()

    at.button(key="watch_A1").click().run()

    assert "A1" not in state.watchlist
    assert at.error[0].value == "Failed to update watchlist"


def test_dashboard_filters_and_switches_view() -> None:
    state, store, reconciler, auth = _setup()
    at = AppTest.from_function(_render_dashboard_app, args=(state, store, reconciler, auth)).run()

    at.text_input(key="asteroid_filter").input("eros").run()
    assert state.filter_text == "eros"
    assert at.caption[-1].value == "1 objects detected"

    at.button(key="toggle_view").click().run()
    assert state.view_mode is ViewMode.WATCHLIST
    assert any(header.value == "My Watchlist" for header in at.subheader)


def test_dashboard_reports_load_failure() -> None:
    state, store, reconciler, auth = _setup()
    store.fail_reads = True

    at = AppTest.from_function(_render_dashboard_app, args=(state, store, reconciler, auth)).run()

    assert not state.loaded
    assert at.error[0].value == "Failed to load orbital data"


def test_dashboard_logout_clears_session_and_selection() -> None:
    state, store, reconciler, auth = _setup()
    at = AppTest.from_function(_render_dashboard_app, args=(state, store, reconciler, auth)).run()
    at.button(key="details_A1").click().run()
    assert state.selected_id == "A1"

    at.button(key="logout").click().run()

    assert auth.logged_out
    assert auth.current_user() is None
    assert state.selected_id is None
    assert at.session_state[PAGE_KEY] == Page.LOGIN.value


def test_dashboard_removal_drops_card_from_watchlist_view() -> None:
    state, store, reconciler, auth = _setup()
    store.remote_watchlist = [{"id": "E3", "name": "433 Eros", "diameter_m": 16840.0}]
    at = AppTest.from_function(_render_dashboard_app, args=(state, store, reconciler, auth)).run()
    at.button(key="toggle_view").click().run()
    assert at.button(key="watch_E3").label == "Remove from watchlist"

    at.button(key="watch_E3").click().run()

    assert store.removed == ["E3"]
    assert "E3" not in state.watchlist
    assert at.caption[-1].value == "0 objects detected"
    assert not any(button.key == "watch_E3" for button in at.button)


def test_dashboard_loads_watchlist_for_streamlit_session() -> None:
    store = _FakeStore()
    store.remote_watchlist = [{"id": "A1", "name": "99942 Apophis"}]

    at = AppTest.from_function(_render_with_streamlit_session, args=(store, _FakeAuth)).run()

    assert not at.exception
    assert store.watchlist_calls == 1
    assert at.button(key="watch_A1").label == "Remove from watchlist"
