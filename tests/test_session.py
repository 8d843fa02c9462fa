from __future__ import annotations

import json

import pytest

from cosmicwatch.models import UserSession
from cosmicwatch.session import FileSessionProvider, InMemorySessionProvider


def test_in_memory_provider_round_trip() -> None:
    provider = InMemorySessionProvider()
    assert provider.current_user() is None

    user = UserSession(token="t1", email="a@b.io")
    provider.persist(user)
    assert provider.current_user() is user

    provider.clear()
    assert provider.current_user() is None


def test_file_provider_round_trip(tmp_path) -> None:
    path = tmp_path / "nested" / "session.json"
    provider = FileSessionProvider(path)
    assert provider.current_user() is None

    provider.persist(UserSession(token="t1", email="a@b.io", user_id="u1", payload={"name": "Ada"}))

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["token"] == "t1"
    assert stored["name"] == "Ada"
    restored = FileSessionProvider(path).current_user()
    assert restored is not None
    assert restored.token == "t1"
    assert restored.email == "a@b.io"
    assert restored.user_id == "u1"

    provider.clear()
    assert not path.exists()
    provider.clear()


@pytest.mark.parametrize("content", ["{not json", "[]", '{"email": "a@b.io"}', '{"token": ""}'])
def test_file_provider_ignores_unreadable_sessions(tmp_path, content: str) -> None:
    path = tmp_path / "session.json"
    path.write_text(content, encoding="utf-8")

    assert FileSessionProvider(path).current_user() is None


def test_user_session_from_dict_requires_token() -> None:
    with pytest.raises(ValueError):
        UserSession.from_dict({"email": "a@b.io"})
