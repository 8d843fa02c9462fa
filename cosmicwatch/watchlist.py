"""Client-held watchlist kept consistent with the remote store by write-through."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from cosmicwatch.errors import InvalidRecord, Unauthenticated
from cosmicwatch.fetchers.store import AsteroidStore
from cosmicwatch.models import AsteroidRecord, UserSession, WatchlistEntry
from cosmicwatch.normalize import resolve_id, to_watchlist_entry
from cosmicwatch.session import SessionProvider

_LOGGER = logging.getLogger(__name__)


class Watchlist:
    """Immutable set of watchlisted asteroids keyed by canonical string id.

    Iteration follows display order: entries are appended on add and
    filtered out on remove. Mutations return a new ``Watchlist``.
    """

    __slots__ = ("_entries", "_order")

    def __init__(self, entries: Iterable[WatchlistEntry] = ()) -> None:
        self._entries: dict[str, WatchlistEntry] = {}
        self._order: list[str] = []
        for entry in entries:
            if entry.id in self._entries:
                continue
            self._entries[entry.id] = entry
            self._order.append(entry.id)

    def __contains__(self, asteroid_id: object) -> bool:
        return asteroid_id is not None and str(asteroid_id) in self._entries

    def __iter__(self) -> Iterator[WatchlistEntry]:
        for asteroid_id in self._order:
            yield self._entries[asteroid_id]

    def __len__(self) -> int:
        return len(self._order)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Watchlist):
            return NotImplemented
        return self._order == other._order

    def __repr__(self) -> str:
        return f"Watchlist({self._order!r})"

    def ids(self) -> list[str]:
        return list(self._order)

    def get(self, asteroid_id: str) -> WatchlistEntry | None:
        return self._entries.get(str(asteroid_id))

    def records(self) -> list[AsteroidRecord]:
        return [entry.record for entry in self]

    def with_entry(self, entry: WatchlistEntry) -> Watchlist:
        if entry.id in self._entries:
            return self
        return Watchlist([*self, entry])

    def without(self, asteroid_id: str) -> Watchlist:
        key = str(asteroid_id)
        return Watchlist(entry for entry in self if entry.id != key)


EMPTY_WATCHLIST = Watchlist()


def contains(watchlist: Watchlist, asteroid_id: Any) -> bool:
    """Membership check used while rendering; never contacts the store."""

    return asteroid_id in watchlist


class WatchlistReconciler:
    """Applies watchlist changes locally only after the remote store confirms them."""

    def __init__(self, store: AsteroidStore, sessions: SessionProvider) -> None:
        self.store = store
        self.sessions = sessions

    def load(self) -> Watchlist:
        return self.load_for(self.sessions.current_user())

    def load_for(self, user: UserSession | None) -> Watchlist:
        """Fetch the remote watchlist for an already resolved ``user``."""

        if user is None:
            return EMPTY_WATCHLIST
        entries: list[WatchlistEntry] = []
        for index, raw in enumerate(self.store.get_watchlist(user.token)):
            try:
                entries.append(to_watchlist_entry(raw))
            except InvalidRecord as exc:
                _LOGGER.warning("Skipping watchlist entry %d: %s", index, exc)
        return Watchlist(entries)

    contains = staticmethod(contains)

    def toggle(
        self,
        watchlist: Watchlist,
        asteroid: Mapping[str, Any] | AsteroidRecord,
    ) -> Watchlist:
        """Add ``asteroid`` if absent, remove it if present.

        The returned watchlist reflects the change only once the store call has
        succeeded; on failure the exception propagates and ``watchlist`` is
        left as it was.
        """

        asteroid_id = resolve_id(asteroid)
        if asteroid_id is None:
            raise InvalidRecord("cannot toggle an asteroid without an id", record=asteroid)
        user = self.sessions.current_user()
        if user is None:
            raise Unauthenticated("sign in to change the watchlist")

        if asteroid_id in watchlist:
            self.store.remove_from_watchlist(user.token, asteroid_id)
            _LOGGER.info("Removed %s from watchlist", asteroid_id)
            return watchlist.without(asteroid_id)

        payload = asteroid.payload if isinstance(asteroid, AsteroidRecord) else dict(asteroid)
        response = self.store.add_to_watchlist(user.token, payload)
        entry = to_watchlist_entry(asteroid, _response_fields(response, asteroid_id))
        _LOGGER.info("Added %s to watchlist", asteroid_id)
        return watchlist.with_entry(entry)


def _response_fields(response: Any, asteroid_id: str) -> dict[str, Any]:
    # The store may echo the stored asteroid; only merge it when it is the same one.
    if not isinstance(response, Mapping):
        return {}
    echoed = response.get("asteroid")
    if not isinstance(echoed, Mapping):
        return {}
    if resolve_id(echoed) not in (None, asteroid_id):
        return {}
    return dict(echoed)


__all__ = ["EMPTY_WATCHLIST", "Watchlist", "WatchlistReconciler", "contains"]
