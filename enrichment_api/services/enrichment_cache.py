"""In-memory cache of enrichment results keyed by website URL.

Keys are the exact strings callers send; ``http://x.com`` and
``http://x.com/`` are different entries. Entries never expire and are
dropped only when the process exits.
"""

import threading
from datetime import datetime, timezone

from enrichment_api.models import CacheEntry, EnrichmentRecord


class EnrichmentCache:
    """Process-local enrichment store, one instance per application."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, website: str) -> EnrichmentRecord | None:
        """Return the cached record for ``website``, or None."""
        with self._lock:
            entry = self._entries.get(website)
        return entry.data if entry else None

    def get_entry(self, website: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(website)

    def set(self, website: str, record: EnrichmentRecord) -> None:
        """Store ``record``, replacing any previous entry for ``website``."""
        entry = CacheEntry(data=record, timestamp=datetime.now(timezone.utc))
        with self._lock:
            self._entries[website] = entry

    def has(self, website: str) -> bool:
        with self._lock:
            return website in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
