"""
Request token caches.

A verified request token stays valid until the member's ``expired_at``, so
caching it spares a round trip to the platform on every user action. Plug in
any store (Redis, memcached, ...) by subclassing RequestTokenCache; the
in-memory MemoryCache is enough for a single process.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from super_message.models.member import Member

_LOG = logging.getLogger(__name__)

DEFAULT_CLEANUP_INTERVAL_S = 600.0


class RequestTokenCache(ABC):
    @abstractmethod
    def get(self, request_token: str) -> Optional[Member]:
        """Return the cached member, or None when absent or expired."""

    @abstractmethod
    def set(self, request_token: str, member: Member) -> None:
        """Cache ``member`` until ``member.expired_at`` (unix seconds).

        A later set for the same token replaces the entry.

        Raises:
            StorageError: If the backing store is unavailable.
        """

    @abstractmethod
    def delete(self, request_token: str) -> None:
        """Forget a token, e.g. after the user unsubscribed from the channel."""


class MemoryCache(RequestTokenCache):
    """Thread-safe in-process cache.

    Expiry is checked on every read; expired entries that nobody reads again
    are swept at most once per ``cleanup_interval`` seconds.
    """

    def __init__(
        self,
        cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._entries: dict[str, Member] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._cleanup_interval = cleanup_interval
        self._next_cleanup = clock() + cleanup_interval

    def get(self, request_token: str) -> Optional[Member]:
        now = self._clock()
        with self._lock:
            self._sweep(now)
            member = self._entries.get(request_token)
            if member is None:
                return None
            if member.expired_at <= now:
                del self._entries[request_token]
                return None
            return member

    def set(self, request_token: str, member: Member) -> None:
        """Store ``member`` until it expires; the last write for a token wins."""
        now = self._clock()
        if member.expired_at - now <= 0:
            _LOG.debug("not caching request token %s: already expired", mask_token(request_token))
            return
        with self._lock:
            self._sweep(now)
            self._entries[request_token] = member

    def delete(self, request_token: str) -> None:
        with self._lock:
            self._entries.pop(request_token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep(self, now: float) -> None:
        # caller holds the lock
        if now < self._next_cleanup:
            return
        expired = [token for token, member in self._entries.items() if member.expired_at <= now]
        for token in expired:
            del self._entries[token]
        self._next_cleanup = now + self._cleanup_interval
        if expired:
            _LOG.debug("swept %d expired request tokens", len(expired))


def mask_token(request_token: str) -> str:
    """Shorten a token for log output."""
    return request_token[:4] + "…" if len(request_token) > 4 else "…"
