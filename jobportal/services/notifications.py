"""
JobPortal - Mock dashboard notifications.

A scheduled tick appends a random message from a fixed catalog to the
client's feed. Entries expire after a short time and the feed keeps a bounded
backlog. Logging out clears the feed.
"""
import random
import time
from collections import deque
from datetime import datetime, timezone
from typing import Deque, Dict, List, Optional

from ..config import settings

NOTIFICATION_CATALOG = [
    {"title": "Interview Reminder", "text": "Your interview with CloudBridge is tomorrow at 10:00 AM."},
    {"title": "New Job Match", "text": "A new React role matches your profile."},
    {"title": "Application Update", "text": "TechNova viewed your application."},
]


class NotificationFeed:
    """In-memory notification feeds keyed by client scope."""

    def __init__(self, now=time.time, rng: Optional[random.Random] = None):
        self.now = now
        self.rng = rng or random.Random()
        self._feeds: Dict[str, Deque[dict]] = {}

    def emit(self, client_id: str) -> dict:
        """Append one random catalog message to a client's feed."""
        message = self.rng.choice(NOTIFICATION_CATALOG)
        created = self.now()
        entry = {
            "title": message["title"],
            "text": message["text"],
            "created_at": created,
            "time": datetime.fromtimestamp(created, tz=timezone.utc).isoformat(),
        }
        feed = self._feeds.get(client_id)
        if feed is None:
            feed = deque(maxlen=settings.mock.notification_backlog)
            self._feeds[client_id] = feed
        feed.append(entry)
        return entry

    def active(self, client_id: str) -> List[dict]:
        """Notifications younger than the configured lifetime, oldest first."""
        cutoff = self.now() - settings.mock.notification_ttl_seconds
        return [n for n in self._feeds.get(client_id, ()) if n["created_at"] >= cutoff]

    def clear(self, client_id: str) -> None:
        self._feeds.pop(client_id, None)


# Global feed instance
notification_feed = NotificationFeed()
