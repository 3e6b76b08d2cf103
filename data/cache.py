# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""In-memory caching layer for upstream statistics responses.

Provides an :class:`ExpiringCache` that maps an opaque string key to a value
and forgets the value once its time-to-live has elapsed.  Expiry is lazy:
an entry is only evicted when it is looked up after it went stale.  There
is no background sweep and no capacity bound; a cache lives exactly as long
as the process that owns it.

Each logical dataset gets its own cache instance, keyed by a composition of
the parameters that identify a record (``make_key(2024, "hitting")`` ->
``"2024-hitting"``).

Usage::

    from data.cache import ExpiringCache, TTL_LONG, make_key

    league = ExpiringCache(ttl=TTL_LONG)
    key = make_key(season, group)
    found, population = league.lookup(key)
    if not found:
        population = fetch_population(season, group)
        league.set(key, population)
    league.clear()                         # forced refresh
"""

from __future__ import annotations

import time
from typing import Any

from config import get_ttl_long, get_ttl_short


# ---------------------------------------------------------------------------
# TTL constants (seconds)
# ---------------------------------------------------------------------------

TTL_LONG: int = get_ttl_long()       # 30 minutes by default
TTL_SHORT: int = get_ttl_short()     # 5 minutes by default


# ---------------------------------------------------------------------------
# Key generation
# ---------------------------------------------------------------------------

def make_key(*parts: Any) -> str:
    """Compose a cache key from the parameters identifying a record.

    ``None`` parts are rendered as an empty segment so that ``(147, None)``
    and ``(147,)`` stay distinct keys.

    Args:
        *parts: Identifying parameters (team ID, season, stat group, ...).

    Returns:
        The parts joined with ``"-"``, e.g. ``"147-2024-hitting"``.
    """
    return "-".join("" if part is None else str(part) for part in parts)


def _now() -> float:
    """Return the current timestamp as a float."""
    return time.time()


# ---------------------------------------------------------------------------
# Cache class
# ---------------------------------------------------------------------------

class ExpiringCache:
    """Key/value store with a single time-to-live for every entry.

    An entry is fresh while ``now - inserted_at <= ttl``.  Both :meth:`has`
    and :meth:`get` run the same expiry check and delete an entry found to
    be stale, so a ``get`` following a ``has`` never returns stale data.

    Args:
        ttl: Time-to-live in seconds.  Defaults to :data:`TTL_LONG`.
        name: Label used in logs and :meth:`stats`.
    """

    def __init__(self, ttl: float = TTL_LONG, name: str = "cache") -> None:
        self._ttl = ttl
        self._name = name
        self._entries: dict[str, tuple[float, Any]] = {}

    # -- public API --------------------------------------------------------

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def name(self) -> str:
        return self._name

    def lookup(self, key: str) -> tuple[bool, Any]:
        """Return ``(found, value)`` for *key* using a single expiry check.

        ``found`` distinguishes a stored ``None`` from a missing or expired
        entry.  An expired entry is evicted as a side effect.
        """
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        inserted_at, value = entry
        if _now() - inserted_at > self._ttl:
            self._entries.pop(key, None)
            return False, None
        return True, value

    def has(self, key: str) -> bool:
        """Return ``True`` if *key* holds a non-expired entry.

        An expired entry is evicted as a side effect.
        """
        found, _ = self.lookup(key)
        return found

    def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if missing / expired."""
        _, value = self.lookup(key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* with the current timestamp.

        Any previous entry for *key* is overwritten unconditionally; other
        keys are untouched.
        """
        self._entries[key] = (_now(), value)

    def invalidate(self, key: str) -> bool:
        """Remove a single entry.  Returns ``True`` if one was removed."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Remove all entries immediately.

        Returns:
            The number of entries that were removed.
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def stats(self) -> dict[str, Any]:
        """Return basic statistics (entry count may include not-yet-evicted stale entries)."""
        return {"name": self._name, "entries": len(self._entries), "ttl": self._ttl}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)
