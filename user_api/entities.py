from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    def with_details(self, *, name: str, email: str, now: datetime) -> "User":
        """Return a copy carrying the new name/email, stamped as updated at ``now``."""
        return dataclasses.replace(self, name=name, email=email, updated_at=now)
