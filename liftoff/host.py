from __future__ import annotations

import logging
import sched
import time
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Callable, Dict, Hashable, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Host(Protocol):
    """What the device needs from the platform it runs on."""

    tz: tzinfo

    def now(self) -> datetime: ...

    def run_at(self, when: datetime, callback: Callback) -> Hashable: ...

    def every(self, interval: timedelta, callback: Callback) -> Hashable: ...

    def cancel(self, handle: Hashable) -> None: ...

    def emit(self, name: str, value: Any) -> None: ...


class LoopHost:
    """Single-threaded host backed by a ``sched`` timer queue.

    Callbacks run one at a time on the thread that calls :meth:`run`.
    """

    def __init__(self, tz: tzinfo = timezone.utc) -> None:
        self.tz = tz
        self.attributes: Dict[str, Any] = {}
        self._scheduler = sched.scheduler(time.time, time.sleep)
        self._events: Dict[int, sched.Event] = {}
        self._next_handle = 0

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _new_handle(self) -> int:
        self._next_handle += 1
        return self._next_handle

    def _enter(self, handle: int, when: float, action: Callback) -> None:
        self._events[handle] = self._scheduler.enterabs(when, 1, action)

    def run_at(self, when: datetime, callback: Callback) -> int:
        handle = self._new_handle()

        def fire() -> None:
            self._events.pop(handle, None)
            callback()

        self._enter(handle, when.timestamp(), fire)
        return handle

    def every(self, interval: timedelta, callback: Callback) -> int:
        handle = self._new_handle()
        seconds = interval.total_seconds()

        def fire() -> None:
            # Re-arm first so a failing callback does not stop the timer
            self._enter(handle, time.time() + seconds, fire)
            callback()

        self._enter(handle, time.time() + seconds, fire)
        return handle

    def cancel(self, handle: Hashable) -> None:
        event = self._events.pop(handle, None)
        if event is None:
            return
        try:
            self._scheduler.cancel(event)
        except ValueError:
            # Already left the queue
            pass

    def emit(self, name: str, value: Any) -> None:
        if self.attributes.get(name) != value:
            logger.info("%s: %s", name, value if name != "tile" else f"<{len(value)} chars>")
        self.attributes[name] = value

    def run(self) -> None:
        self._scheduler.run()
