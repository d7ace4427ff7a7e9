"""The medicine record kept in stock."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

SECONDS_PER_DAY = 24 * 3600
NEAR_EXPIRY_DAYS = 30


def _current_time() -> int:
    return int(time.time())


@dataclass
class Medicine:
    """One medicine in stock.

    ``production_date`` and ``last_restock_date`` are seconds since the epoch;
    ``shelf_life`` is a number of days.
    """

    id: str
    name: str
    category: str
    manufacturer: str
    price: float
    stock: int
    production_date: int
    shelf_life: int
    last_restock_date: int = field(default_factory=_current_time)

    @property
    def shelf_life_seconds(self) -> int:
        return self.shelf_life * SECONDS_PER_DAY

    def is_expired(self, now: int | None = None) -> bool:
        """Return True once the shelf life has run out."""
        if now is None:
            now = _current_time()
        return now - self.production_date > self.shelf_life_seconds

    def is_near_expiration(self, now: int | None = None) -> bool:
        """Return True when less than 30 days of shelf life remain."""
        if now is None:
            now = _current_time()
        remaining = self.shelf_life_seconds - (now - self.production_date)
        return remaining < NEAR_EXPIRY_DAYS * SECONDS_PER_DAY