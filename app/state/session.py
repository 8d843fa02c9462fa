"""Streamlit-backed session provider and per-user dashboard state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cosmicwatch.dashboard import DashboardData, ViewMode
from cosmicwatch.models import AsteroidRecord, UserSession
from cosmicwatch.watchlist import Watchlist


class Page(str, Enum):
    """Pages reachable without a URL router."""

    LOGIN = "login"
    REGISTER = "register"
    DASHBOARD = "dashboard"


@dataclass(slots=True)
class DashboardState:
    """Session-scoped dashboard state stored inside Streamlit's session_state."""

    data: DashboardData | None = None
    view_mode: ViewMode = ViewMode.ALL
    filter_text: str = ""
    selected_id: str | None = None
    last_error: str | None = None
    notices: list[str] = field(default_factory=list)

    @property
    def loaded(self) -> bool:
        return self.data is not None

    @property
    def watchlist(self) -> Watchlist:
        return self.data.watchlist if self.data is not None else Watchlist()

    def set_watchlist(self, watchlist: Watchlist) -> None:
        if self.data is None:
            self.data = DashboardData(watchlist=watchlist)
        else:
            self.data.watchlist = watchlist

    def toggle_view(self) -> ViewMode:
        self.view_mode = ViewMode.WATCHLIST if self.view_mode is ViewMode.ALL else ViewMode.ALL
        return self.view_mode

    def selected(self) -> AsteroidRecord | None:
        if self.data is None or self.selected_id is None:
            return None
        for record in [*self.data.asteroids, *self.data.watchlist.records()]:
            if record.id == self.selected_id:
                return record
        return None


USER_KEY = "cosmic_watch_user"
PAGE_KEY = "cosmic_watch_page"
DASHBOARD_KEY = "cosmic_watch_dashboard"


class StreamlitSessionProvider:
    """Keeps the authenticated user in ``st.session_state``."""

    def __init__(self, st_module) -> None:
        self._st = st_module

    def current_user(self) -> UserSession | None:
        user = self._st.session_state.get(USER_KEY)
        return user if isinstance(user, UserSession) else None

    def persist(self, user: UserSession) -> None:
        self._st.session_state[USER_KEY] = user

    def clear(self) -> None:
        self._st.session_state.pop(USER_KEY, None)
        self._st.session_state.pop(DASHBOARD_KEY, None)


def get_dashboard_state(st_module) -> DashboardState:
    """Retrieve or initialize the dashboard state from Streamlit."""

    state = st_module.session_state.get(DASHBOARD_KEY)
    if not isinstance(state, DashboardState):
        state = DashboardState()
        st_module.session_state[DASHBOARD_KEY] = state
    return state


def get_page(st_module) -> Page:
    value = st_module.session_state.get(PAGE_KEY, Page.LOGIN.value)
    try:
        return Page(value)
    except ValueError:
        return Page.LOGIN


def set_page(st_module, page: Page) -> None:
    st_module.session_state[PAGE_KEY] = page.value


__all__ = [
    "DASHBOARD_KEY",
    "DashboardState",
    "PAGE_KEY",
    "Page",
    "StreamlitSessionProvider",
    "USER_KEY",
    "get_dashboard_state",
    "get_page",
    "set_page",
]
