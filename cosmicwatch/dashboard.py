"""Dashboard loading, refresh and list views."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum

from cosmicwatch.fetchers.store import AsteroidStore
from cosmicwatch.models import AlertRecord, AsteroidRecord
from cosmicwatch.normalize import normalize_alerts, normalize_many
from cosmicwatch.watchlist import Watchlist, WatchlistReconciler

_LOGGER = logging.getLogger(__name__)


class ViewMode(str, Enum):
    ALL = "all"
    WATCHLIST = "watchlist"


@dataclass(slots=True)
class DashboardData:
    asteroids: list[AsteroidRecord] = field(default_factory=list)
    alerts: list[AlertRecord] = field(default_factory=list)
    watchlist: Watchlist = field(default_factory=Watchlist)
    skipped: list[int] = field(default_factory=list)

    def hazardous_count(self) -> int:
        return len(hazardous_records(self.asteroids))


def load_dashboard(store: AsteroidStore, reconciler: WatchlistReconciler) -> DashboardData:
    """Fetch feed, alerts and watchlist in parallel and wait for all three.

    The first failure (in feed, alerts, watchlist order) is re-raised after
    every read has settled; nothing is cached on failure. The session is
    read on the calling thread, since Streamlit session state is not
    visible to pool workers.
    """

    user = reconciler.sessions.current_user()
    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="cosmicwatch-load") as pool:
        feed_future = pool.submit(store.get_feed)
        alerts_future = pool.submit(store.get_alerts)
        watchlist_future = pool.submit(reconciler.load_for, user)
    feed = feed_future.result()
    alerts = alerts_future.result()
    watchlist = watchlist_future.result()

    batch = normalize_many(feed)
    if batch.skipped:
        _LOGGER.warning("Skipped %d feed records without an id", len(batch.skipped))
    return DashboardData(
        asteroids=batch.records,
        alerts=normalize_alerts(alerts),
        watchlist=watchlist,
        skipped=batch.skipped,
    )


def refresh_dashboard(store: AsteroidStore, reconciler: WatchlistReconciler) -> DashboardData:
    """Ask the backend to resync with NASA, then reload.

    The reload only runs once the resync has succeeded.
    """

    store.fetch_fresh()
    return load_dashboard(store, reconciler)


def filter_by_name(records: Iterable[AsteroidRecord], text: str | None) -> list[AsteroidRecord]:
    needle = (text or "").strip().lower()
    if not needle:
        return list(records)
    return [record for record in records if needle in (record.name or "").lower()]


def hazardous_records(records: Iterable[AsteroidRecord]) -> list[AsteroidRecord]:
    return [record for record in records if record.hazardous]


def visible_records(
    data: DashboardData,
    mode: ViewMode = ViewMode.ALL,
    text: str | None = None,
) -> list[AsteroidRecord]:
    source = data.asteroids if ViewMode(mode) is ViewMode.ALL else data.watchlist.records()
    return filter_by_name(source, text)


def details_url(record: AsteroidRecord) -> str | None:
    return record.reference_url


__all__ = [
    "DashboardData",
    "ViewMode",
    "details_url",
    "filter_by_name",
    "hazardous_records",
    "load_dashboard",
    "refresh_dashboard",
    "visible_records",
]
