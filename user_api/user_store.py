from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import timedelta
from typing import Dict, List, Optional

from user_api.entities import Clock, User, utc_now
from user_api.errors import UserNotFoundError

logger = logging.getLogger("user_api.store")


# Fixture records for the demo deployment: (name, email, days before "now").
DEMO_USERS = (
    ("John Doe", "john.doe@example.com", 30),
    ("Jane Smith", "jane.smith@example.com", 20),
    ("Bob Johnson", "bob.johnson@example.com", 10),
)


class InMemoryUserStore:
    """Thread-safe in-memory user store.

    What it's for:
    - Own the canonical collection of users for the lifetime of the process.
    - Hand out ids: monotonically increasing from 1, never reused after delete.

    What it's *not*:
    - Not a validator. Callers (``UserService``) are trusted to pass clean data.
    - Not durable and not shared across API instances.

    Every public method holds ``_lock`` for its whole body and never calls
    another public method, so there is no nested acquisition.
    """

    def __init__(self, *, clock: Clock = utc_now, seed: bool = True):
        self._clock = clock
        self._lock = threading.Lock()
        self._users: Dict[int, User] = {}
        self._next_id = 1
        if seed:
            self._seed_demo_users()

    def _seed_demo_users(self) -> None:
        now = self._clock()
        with self._lock:
            for name, email, days_ago in DEMO_USERS:
                user = User(id=self._next_id, name=name, email=email, created_at=now - timedelta(days=days_ago))
                self._users[user.id] = user
                self._next_id += 1
        logger.debug("Seeded %d demo users", len(DEMO_USERS))

    def get_all(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def add(self, user: User) -> User:
        # Any id or created_at on the candidate is ignored.
        with self._lock:
            stored = dataclasses.replace(user, id=self._next_id, created_at=self._clock(), updated_at=None)
            self._users[stored.id] = stored
            self._next_id += 1
            return stored

    def update(self, user: User) -> User:
        with self._lock:
            existing = self._users.get(user.id)
            if existing is None:
                raise UserNotFoundError(user.id)
            # Swap in a new record so readers holding the old one never see a mix of both.
            updated = existing.with_details(name=user.name, email=user.email, now=self._clock())
            self._users[updated.id] = updated
            return updated

    def delete(self, user_id: int) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def exists(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._users

    def count(self) -> int:
        with self._lock:
            return len(self._users)
