from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email

from user_api.entities import Clock, User, utc_now
from user_api.errors import InvalidArgumentError
from user_api.user_store import InMemoryUserStore

logger = logging.getLogger("user_api.service")


def is_valid_email(email: str) -> bool:
    """True when ``email`` is a single plain ``local@domain`` address.

    Parsing is delegated to ``email-validator`` (the library behind pydantic's
    ``EmailStr``), syntax only: no DNS lookups, no ``Name <addr>`` form. The
    library's normalized address must match the input ignoring case, so
    anything it had to rewrite (quoting, surrounding garbage) is rejected.
    """
    try:
        info = validate_email(email, check_deliverability=False, allow_display_name=False)
    except EmailNotValidError:
        return False
    return info.normalized.casefold() == email.casefold()


def _normalize(name: Optional[str], email: Optional[str]) -> Tuple[str, str]:
    """Validate in a fixed order (name, email, email format) and normalize."""
    name = (name or "").strip()
    email = (email or "").strip()
    if not name:
        raise InvalidArgumentError(field="name", reason="name cannot be empty")
    if not email:
        raise InvalidArgumentError(field="email", reason="email cannot be empty")
    if not is_valid_email(email):
        raise InvalidArgumentError(field="email", reason="invalid email format")
    return name, email.lower()


class UserService:
    """Business rules in front of the user store.

    Absent results (unknown or non-positive ids) come back as ``None``/``False``;
    only rule violations raise, as ``InvalidArgumentError``.
    """

    def __init__(self, store: InMemoryUserStore, *, clock: Clock = utc_now):
        if store is None:
            raise ValueError("store is required")
        self._store = store
        self._clock = clock

    def get_all_users(self) -> List[User]:
        return self._store.get_all()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        if user_id <= 0:
            return None
        return self._store.get_by_id(user_id)

    def create_user(self, name: Optional[str], email: Optional[str]) -> User:
        try:
            name, email = _normalize(name, email)
        except InvalidArgumentError as e:
            logger.warning("Rejected user creation: %s", e.reason)
            raise

        user = self._store.add(User(id=0, name=name, email=email, created_at=self._clock()))
        logger.info("Created user %d", user.id)
        return user

    def update_user(self, user_id: int, name: Optional[str], email: Optional[str]) -> Optional[User]:
        if user_id <= 0:
            return None

        try:
            name, email = _normalize(name, email)
        except InvalidArgumentError as e:
            logger.warning("Rejected update of user %d: %s", user_id, e.reason)
            raise

        existing = self._store.get_by_id(user_id)
        if existing is None:
            return None

        # The store stamps updated_at when it swaps the record in.
        user = self._store.update(dataclasses.replace(existing, name=name, email=email))
        logger.info("Updated user %d", user.id)
        return user

    def delete_user(self, user_id: int) -> bool:
        if user_id <= 0:
            return False
        deleted = self._store.delete(user_id)
        if deleted:
            logger.info("Deleted user %d", user_id)
        return deleted
