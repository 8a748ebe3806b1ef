from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from liftoff.models.launch import Launch, LaunchStatus, TimePrecision
from liftoff.sources.basesource import LaunchSource

# Wednesday
T = datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc)


def hours(n: float) -> timedelta:
    return timedelta(hours=n)


def make_launch(time, status=None, precision=TimePrecision.EXACT, **kwargs) -> Launch:
    return Launch(time=time, time_precision=precision, status=status, **kwargs)


def scheduled(time, **kwargs) -> Launch:
    return make_launch(time, status=LaunchStatus.SCHEDULED, **kwargs)


class FakeHost:
    def __init__(self, now=T, tz=timezone.utc):
        self.current = now
        self.tz = tz
        self.timers = {}
        self.recurring = {}
        self.attributes = {}
        self._ids = count(1)

    def now(self):
        return self.current

    def run_at(self, when, callback):
        handle = next(self._ids)
        self.timers[handle] = (when, callback)
        return handle

    def every(self, interval, callback):
        handle = next(self._ids)
        self.recurring[handle] = (interval, callback)
        return handle

    def cancel(self, handle):
        self.timers.pop(handle, None)
        self.recurring.pop(handle, None)

    def emit(self, name, value):
        self.attributes[name] = value

    def advance_to(self, when):
        """Fire one-shot timers due up to ``when`` in order."""
        while True:
            due = [(at, h) for h, (at, _) in self.timers.items() if at <= when]
            if not due:
                break
            at, handle = min(due)
            _, callback = self.timers.pop(handle)
            self.current = at
            callback()
        self.current = when


class FakeSource(LaunchSource):
    name = "Fake"

    def __init__(self, *responses):
        super().__init__("https://example.invalid/")
        self.responses = list(responses)
        self.calls = 0

    def fetch(self, now):
        self.calls += 1
        response = self.responses[0] if len(self.responses) == 1 else self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def host():
    return FakeHost()
