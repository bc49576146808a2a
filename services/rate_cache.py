"""
Single-slot, time-limited cache for the latest rate snapshot.

Expiry is checked on read; nothing is evicted in the background, so an
expired snapshot stays available through get_stale_if_any() for degraded
mode.
"""
import threading
import time

DEFAULT_TTL_SECONDS = 3600


class RateCache:
    """Holds the most recent RateSnapshot and the time it was stored."""

    def __init__(self, ttl=DEFAULT_TTL_SECONDS, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        # (snapshot, stored_at) replaced as a whole so readers never see a mix
        self._entry = None

    def get(self):
        """Return the cached snapshot if stored no more than ttl seconds ago, else None."""
        with self._lock:
            entry = self._entry
        if entry is None:
            return None

        snapshot, stored_at = entry
        if self._clock() - stored_at > self.ttl:
            return None
        return snapshot

    def set(self, snapshot):
        """Replace the cached snapshot and restart its TTL."""
        entry = (snapshot, self._clock())
        with self._lock:
            self._entry = entry

    def get_stale_if_any(self):
        """Return the last stored snapshot regardless of age, or None if never set."""
        with self._lock:
            entry = self._entry
        return entry[0] if entry else None

    def age(self):
        """Seconds since the snapshot was stored, or None when empty."""
        with self._lock:
            entry = self._entry
        if entry is None:
            return None
        return self._clock() - entry[1]

    def clear(self):
        with self._lock:
            self._entry = None
