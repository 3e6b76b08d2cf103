# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Cancellation tokens, request slots and fetch outcomes.

Network-bound operations accept a :class:`CancelToken`.  Instead of raising
for a cancelled operation they resolve to an explicit outcome:

  * :class:`Ok` -- the operation completed; ``value`` holds the result.
  * :class:`Cancelled` -- the token was cancelled before the result could
    be published.  Not an error; callers treat it as a no-op.
  * :class:`Failed` -- a genuine upstream failure; ``error`` holds the
    exception and ``message`` a user-visible description.

A :class:`RequestSlot` implements request superseding: each call to
:meth:`RequestSlot.begin` cancels the token handed out by the previous call,
so a slow earlier load can never overwrite the results of a newer one.

Usage::

    slot = RequestSlot("player-card")
    token = slot.begin()
    outcome = service.load_player_card(player_id, season, "hitting", token)
    if isinstance(outcome, Ok):
        render(outcome.value)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class CancelToken:
    """A one-shot cancellation flag shared between a caller and an operation."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled") -> None:
        """Mark the token cancelled.  Cancelling twice keeps the first reason."""
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    def wait(self, timeout: float) -> bool:
        """Block for up to *timeout* seconds, returning early once cancelled.

        Returns:
            ``True`` if the token was cancelled.
        """
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        state = f"cancelled ({self.reason})" if self.cancelled else "active"
        return f"<CancelToken {state}>"


class _NeverCancelledToken(CancelToken):
    """A shared token whose :meth:`cancel` does nothing."""

    def cancel(self, reason: str = "cancelled") -> None:
        return None


# A token that is never cancelled, for callers without a cancellation source.
NEVER_CANCELLED: CancelToken = _NeverCancelledToken()


class RequestSlot:
    """Hands out tokens for one logical UI slot, superseding older requests.

    Args:
        name: Label for the slot (e.g. ``"player-card"``), used in reasons.
    """

    def __init__(self, name: str = "slot") -> None:
        self.name = name
        self._current: CancelToken | None = None
        self._lock = threading.Lock()

    def begin(self) -> CancelToken:
        """Start a new request, cancelling the previous one still in flight."""
        token = CancelToken()
        with self._lock:
            previous, self._current = self._current, token
        if previous is not None:
            previous.cancel(f"superseded in {self.name}")
        return token

    def is_current(self, token: CancelToken) -> bool:
        return self._current is token and not token.cancelled

    def finish(self, token: CancelToken) -> bool:
        """Mark the request holding *token* as complete.

        Returns:
            ``True`` if no request is in flight in this slot afterwards.
        """
        with self._lock:
            if self._current is token:
                self._current = None
            return self._current is None

    def cancel(self) -> None:
        """Cancel the in-flight request, if any, without starting a new one."""
        with self._lock:
            previous, self._current = self._current, None
        if previous is not None:
            previous.cancel(f"{self.name} cancelled")


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Cancelled:
    reason: str = "cancelled"

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Failed:
    error: Exception
    message: str = field(default="")

    @property
    def ok(self) -> bool:
        return False

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", str(self.error) or type(self.error).__name__)


Outcome = Ok[Any] | Cancelled | Failed


def cancelled_outcome(token: CancelToken) -> Cancelled:
    return Cancelled(token.reason or "cancelled")
