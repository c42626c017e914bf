"""Day-scoped usage counter.

The count lives under a single key in a key/value store and is reset
whenever the stored date is not today. Reads and writes are not locked:
two concurrent increments from the same client can lose one.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from k_blog_writer.usage.store import KeyValueStore

STORAGE_KEY = "k-blog-writer-usage"
DAILY_LIMIT = 3


@dataclass(frozen=True)
class UsageRecord:
    date: str
    count: int

    def to_json(self) -> str:
        return json.dumps({"date": self.date, "count": self.count})


class UsageGate:
    def __init__(
        self,
        store: KeyValueStore,
        today: Callable[[], date] = date.today,
        limit: int = DAILY_LIMIT,
        key: str = STORAGE_KEY,
    ) -> None:
        self.store = store
        self.today = today
        self.limit = limit
        self.key = key

    def _today_str(self) -> str:
        return self.today().isoformat()

    def usage(self) -> UsageRecord:
        today = self._today_str()
        raw = self.store.get(self.key)
        if not raw:
            return UsageRecord(date=today, count=0)
        try:
            data = json.loads(raw)
            stored_date = str(data["date"])
            count = int(data["count"])
        except (ValueError, TypeError, KeyError):
            return UsageRecord(date=today, count=0)
        if stored_date != today:
            return UsageRecord(date=today, count=0)
        return UsageRecord(date=stored_date, count=count)

    def remaining(self) -> int:
        return max(0, self.limit - self.usage().count)

    def can_use(self) -> bool:
        return self.remaining() > 0

    def increment(self) -> UsageRecord:
        updated = UsageRecord(date=self._today_str(), count=self.usage().count + 1)
        self.store.set(self.key, updated.to_json())
        return updated
