from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from user_api.entities import User
from user_api.errors import UserNotFoundError
from user_api.user_store import InMemoryUserStore

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = T0):
        self.now = start

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)

    def __call__(self) -> datetime:
        return self.now


def _candidate(name: str = "Test User", email: str = "test@example.com", user_id: int = 0) -> User:
    return User(id=user_id, name=name, email=email, created_at=T0 - timedelta(days=365))


def test_seeded_users_have_fixed_ids_and_past_timestamps():
    store = InMemoryUserStore(clock=FakeClock())

    users = store.get_all()
    assert [u.id for u in users] == [1, 2, 3]
    assert [u.name for u in users] == ["John Doe", "Jane Smith", "Bob Johnson"]
    assert users[0].email == "john.doe@example.com"
    assert [u.created_at for u in users] == [T0 - timedelta(days=d) for d in (30, 20, 10)]
    assert all(u.updated_at is None for u in users)


def test_unseeded_store_starts_empty_and_ids_start_at_one():
    store = InMemoryUserStore(clock=FakeClock(), seed=False)
    assert store.get_all() == []
    assert store.add(_candidate()).id == 1


def test_get_all_returns_snapshot():
    store = InMemoryUserStore(clock=FakeClock())
    users = store.get_all()
    users.clear()
    assert store.count() == 3


def test_get_by_id():
    store = InMemoryUserStore(clock=FakeClock())
    assert store.get_by_id(2).name == "Jane Smith"
    assert store.get_by_id(999) is None
    assert store.get_by_id(0) is None


def test_add_assigns_next_id_and_creation_time():
    clock = FakeClock()
    store = InMemoryUserStore(clock=clock)
    clock.advance(minutes=5)

    user = store.add(_candidate(user_id=42))

    assert user.id == 4
    assert user.created_at == T0 + timedelta(minutes=5)
    assert user.updated_at is None
    assert store.get_by_id(4) is user


def test_add_multiple_users_assigns_incremental_ids():
    store = InMemoryUserStore(clock=FakeClock())
    ids = [store.add(_candidate(email=f"u{i}@example.com")).id for i in range(5)]
    assert ids == [4, 5, 6, 7, 8]


def test_deleted_ids_are_never_reused():
    store = InMemoryUserStore(clock=FakeClock())
    added = store.add(_candidate())
    assert store.delete(added.id) is True
    assert store.get_by_id(added.id) is None

    assert store.add(_candidate()).id == added.id + 1
    assert store.delete(3) is True
    assert store.add(_candidate()).id == added.id + 2


def test_update_replaces_details_and_stamps_time():
    clock = FakeClock()
    store = InMemoryUserStore(clock=clock)
    original = store.get_by_id(1)
    created_at = original.created_at
    clock.advance(hours=1)

    updated = store.update(User(id=1, name="Updated", email="updated@example.com", created_at=T0 + timedelta(days=9)))

    assert store.get_by_id(1) is updated
    assert [u.id for u in store.get_all()] == [1, 2, 3]
    assert updated.name == "Updated"
    assert updated.email == "updated@example.com"
    assert updated.created_at == created_at
    assert updated.updated_at == T0 + timedelta(hours=1)
    assert updated.updated_at >= updated.created_at


def test_update_missing_user_raises_not_found():
    store = InMemoryUserStore(clock=FakeClock())
    with pytest.raises(UserNotFoundError) as ei:
        store.update(_candidate(user_id=999))
    assert ei.value.user_id == 999
    assert "999" in str(ei.value)


def test_delete_missing_user_returns_false_and_keeps_count():
    store = InMemoryUserStore(clock=FakeClock())
    assert store.delete(999) is False
    assert store.count() == 3


def test_exists():
    store = InMemoryUserStore(clock=FakeClock())
    assert store.exists(1) is True
    assert store.exists(999) is False
    store.delete(1)
    assert store.exists(1) is False


def test_concurrent_adds_get_distinct_contiguous_ids():
    store = InMemoryUserStore(clock=FakeClock())

    with ThreadPoolExecutor(max_workers=16) as pool:
        users = list(pool.map(lambda i: store.add(_candidate(email=f"user{i}@example.com")), range(100)))

    assert sorted(u.id for u in users) == list(range(4, 104))
    assert store.count() == 103


def test_update_leaves_previously_read_record_untouched():
    store = InMemoryUserStore(clock=FakeClock())
    held = store.get_by_id(1)

    store.update(User(id=1, name="New Name", email="new@x.com", created_at=T0))

    assert (held.name, held.email, held.updated_at) == ("John Doe", "john.doe@example.com", None)
    fresh = store.get_by_id(1)
    assert (fresh.name, fresh.email) == ("New Name", "new@x.com")
    assert fresh.updated_at is not None


def test_readers_never_see_a_half_applied_update():
    store = InMemoryUserStore(clock=FakeClock())
    pairs = [("Alice", "alice@example.com"), ("Bob", "bob@example.com")]
    done = threading.Event()
    seen: list[tuple[str, str]] = []

    def writer() -> None:
        for i in range(2000):
            name, email = pairs[i % 2]
            store.update(User(id=1, name=name, email=email, created_at=T0))
        done.set()

    t = threading.Thread(target=writer)
    t.start()
    while not done.is_set():
        user = store.get_by_id(1)
        seen.append((user.name, user.email))
    t.join()

    allowed = set(pairs) | {("John Doe", "john.doe@example.com")}
    assert set(seen) <= allowed
