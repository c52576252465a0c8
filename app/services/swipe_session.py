"""
Swipe session: a forward-only cursor over one loaded feed plus the liked list.

Gestures (swipe left/right) and buttons (pass/like) dispatch through the same
table, so both pathways always produce identical state.
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import NamedTuple

from app.schemas.places import RestaurantRecord

logger = logging.getLogger(__name__)


class Gesture(str, Enum):
    SWIPE_LEFT = "swipeLeft"
    SWIPE_RIGHT = "swipeRight"


class Action(str, Enum):
    PASS = "pass"
    LIKE = "like"


class SessionAlreadyLoadedError(RuntimeError):
    """The feed is fetched once per session and cannot be replaced."""


class SessionSnapshot(NamedTuple):
    cursor: int
    accepted: tuple[RestaurantRecord, ...]
    exhausted: bool


class SwipeSession:
    """
    Traversal state for one page load.

    cursor never decreases and is clamped to the last index. Acting on the
    last record sets `exhausted`, after which there is no current record and
    accept/advance do nothing.
    """

    def __init__(self, feed: Sequence[RestaurantRecord] | None = None):
        self._feed: tuple[RestaurantRecord, ...] = ()
        self._loaded = False
        self._cursor = 0
        self._accepted: list[RestaurantRecord] = []
        self._exhausted = False
        self._gesture_handlers = {
            Gesture.SWIPE_LEFT: self.advance,
            Gesture.SWIPE_RIGHT: self.accept,
        }
        self._action_handlers = {
            Action.PASS: self.advance,
            Action.LIKE: self.accept,
        }
        if feed is not None:
            self.load(feed)

    def load(self, feed: Sequence[RestaurantRecord]) -> None:
        """Install the feed fetched at session start. Allowed once."""
        if self._loaded:
            raise SessionAlreadyLoadedError("Swipe session feed is already loaded")
        self._feed = tuple(feed)
        self._loaded = True
        logger.debug("Swipe session loaded with %d restaurants", len(self._feed))

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def feed(self) -> tuple[RestaurantRecord, ...]:
        return self._feed

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def accepted(self) -> tuple[RestaurantRecord, ...]:
        return tuple(self._accepted)

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def has_current(self) -> bool:
        return bool(self._feed) and not self._exhausted

    def current(self) -> RestaurantRecord | None:
        """Record under the cursor, or None when empty or exhausted."""
        if not self.has_current:
            return None
        return self._feed[self._cursor]

    def advance(self) -> None:
        """Pass: move to the next record, or mark exhausted at the last one."""
        if not self.has_current:
            return
        last_index = len(self._feed) - 1
        if self._cursor >= last_index:
            self._exhausted = True
        else:
            self._cursor += 1

    def accept(self) -> None:
        """Like: append the current record to accepted, then advance."""
        current = self.current()
        if current is None:
            return
        self._accepted.append(current)
        self.advance()

    def handle_gesture(self, gesture: Gesture | str) -> None:
        self._gesture_handlers[Gesture(gesture)]()

    def handle_action(self, action: Action | str) -> None:
        self._action_handlers[Action(action)]()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(self._cursor, tuple(self._accepted), self._exhausted)
