"""
In-memory session store with a pluggable eviction policy.

Sessions live for the process lifetime at most. An EvictionPolicy decides
which idle sessions to drop: by idle time (TTL), by capacity (LRU), or never.
Each session id also gets its own lock so two concurrent turns for the same
conversation cannot interleave their read-modify-write.

Usage:
    store = SessionStore(TTLEviction(ttl_seconds=1800))
    with store.checkout(request.session_id) as (session_id, session):
        session.last_intent = Intent.SAHAYATA
"""

import logging
import threading
import time
import uuid
from abc import ABC, abstractmethod
from collections import OrderedDict
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from saathi.config import SessionConfig, settings
from saathi.schemas.session_schema import Session

logger = logging.getLogger(__name__)


class EvictionPolicy(ABC):
    """Decides which sessions to drop before the store is accessed."""

    @abstractmethod
    def select_evictions(self, last_seen: "OrderedDict[str, float]", now: float) -> list[str]:
        """Return session ids to evict.

        ``last_seen`` maps session id to last access time, oldest first.
        """


class NoEviction(EvictionPolicy):
    """Keep every session for the lifetime of the process."""

    def select_evictions(self, last_seen: "OrderedDict[str, float]", now: float) -> list[str]:
        return []


class TTLEviction(EvictionPolicy):
    """Drop sessions that have been idle longer than ``ttl_seconds``."""

    def __init__(self, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be > 0, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds

    def select_evictions(self, last_seen: "OrderedDict[str, float]", now: float) -> list[str]:
        expired = []
        for session_id, seen_at in last_seen.items():
            if now - seen_at <= self.ttl_seconds:
                break
            expired.append(session_id)
        return expired


class LRUEviction(EvictionPolicy):
    """Keep at most ``max_sessions``, dropping the least recently used."""

    def __init__(self, max_sessions: int) -> None:
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be >= 1, got {max_sessions}")
        self.max_sessions = max_sessions

    def select_evictions(self, last_seen: "OrderedDict[str, float]", now: float) -> list[str]:
        overflow = len(last_seen) - self.max_sessions
        if overflow <= 0:
            return []
        return list(last_seen.keys())[:overflow]


def build_eviction_policy(config: SessionConfig) -> EvictionPolicy:
    """Create the policy named by configuration."""
    if config.eviction_policy == "ttl":
        return TTLEviction(config.ttl_seconds)
    if config.eviction_policy == "lru":
        return LRUEviction(config.max_sessions)
    if config.eviction_policy == "none":
        return NoEviction()
    raise ValueError(f"Unknown eviction policy: {config.eviction_policy!r}")


def generate_session_id() -> str:
    return f"s_{uuid.uuid4().hex[:9]}"


class SessionStore:
    """Keyed dialog state, one Session per conversation."""

    def __init__(
        self,
        policy: Optional[EvictionPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
        default_locale: str = settings.dialog.default_locale,
    ) -> None:
        self._policy = policy or build_eviction_policy(settings.session)
        self._clock = clock
        self._default_locale = default_locale
        self._sessions: dict[str, Session] = {}
        self._last_seen: OrderedDict[str, float] = OrderedDict()
        self._locks: dict[str, threading.Lock] = {}
        self._mutex = threading.Lock()

    def __len__(self) -> int:
        with self._mutex:
            self._evict()
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._mutex:
            self._evict()
            return session_id in self._sessions

    def _touch(self, session_id: str) -> None:
        self._last_seen[session_id] = self._clock()
        self._last_seen.move_to_end(session_id)

    def _evict(self) -> None:
        for session_id in self._policy.select_evictions(self._last_seen, self._clock()):
            self._sessions.pop(session_id, None)
            self._last_seen.pop(session_id, None)
            self._locks.pop(session_id, None)
            logger.debug("Session evicted: %s", session_id)

    def get(self, session_id: str) -> Optional[Session]:
        """Return a live session without creating one."""
        with self._mutex:
            self._evict()
            return self._sessions.get(session_id)

    def get_or_create(self, session_id: Optional[str] = None) -> tuple[str, Session]:
        """
        Return the session for a known id, or mint a fresh one.

        An absent, unknown, or evicted id yields a new opaque id and an empty
        Session. A known id always returns the same Session object.
        """
        with self._mutex:
            self._evict()
            if session_id and session_id in self._sessions:
                self._touch(session_id)
                return session_id, self._sessions[session_id]

            new_id = generate_session_id()
            while new_id in self._sessions:
                new_id = generate_session_id()
            session = Session(session_id=new_id, locale=self._default_locale)
            self._sessions[new_id] = session
            self._touch(new_id)
            # Capacity policies may need to drop an older session now.
            self._evict()
            if session_id:
                logger.info("Unknown session %s replaced by %s", session_id, new_id)
            else:
                logger.info("Session created: %s", new_id)
            return new_id, session

    def set(self, session_id: str, session: Session) -> None:
        """Store (or replace) the session for an id."""
        with self._mutex:
            self._sessions[session_id] = session
            self._touch(session_id)
            self._evict()

    def _lock_for(self, session_id: str) -> threading.Lock:
        with self._mutex:
            return self._locks.setdefault(session_id, threading.Lock())

    @contextmanager
    def lock(self, session_id: str) -> Iterator[None]:
        """Hold the per-session lock for the duration of the block."""
        with self._lock_for(session_id):
            yield

    @contextmanager
    def checkout(self, session_id: Optional[str] = None) -> Iterator[tuple[str, Session]]:
        """
        Critical section for one dialog turn.

        Resolves (or creates) the session, holds its lock while the caller
        mutates it, and writes it back when the block exits normally.
        """
        resolved_id, session = self.get_or_create(session_id)
        with self.lock(resolved_id):
            current = self.get(resolved_id) or session
            yield resolved_id, current
            self.set(resolved_id, current)
