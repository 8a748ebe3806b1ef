from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
import logging

from liftoff.core.display import compute_switch_instant
from liftoff.models.launch import Launch

logger = logging.getLogger(__name__)

API_SETTLE_DELAY = timedelta(minutes=10)
STATUS_RETRY_DELAY = timedelta(minutes=10)
STATUS_RETRY_WINDOW = timedelta(hours=3)


class WakeKind(str, Enum):
    SWITCH_DISPLAY = "switch_display"
    REFRESH = "refresh"
    STATUS_RETRY = "status_retry"


@dataclass(frozen=True)
class Wakeup:
    at: datetime
    kind: WakeKind


def plan_wakeups(
    latest: Optional[Launch],
    next_launch: Optional[Launch],
    now: datetime,
    hours_inactive: Optional[float],
    api_settle_delay: timedelta = API_SETTLE_DELAY,
    status_retry_delay: timedelta = STATUS_RETRY_DELAY,
    status_retry_window: timedelta = STATUS_RETRY_WINDOW,
) -> frozenset[Wakeup]:
    """Every future instant at which the launch state must be looked at again.

    The plan is a pure function of the current state. Callers replace any
    previously armed plan with it rather than merging the two.
    """
    wakeups = set()

    # Move the display from the latest to the next launch
    switch_at = compute_switch_instant(latest, next_launch, now)
    if switch_at is not None:
        wakeups.add(Wakeup(switch_at, WakeKind.SWITCH_DISPLAY))

    # Refetch once the API has had time to record the next launch
    if next_launch is not None:
        wakeups.add(Wakeup(next_launch.time + api_settle_delay, WakeKind.REFRESH))

    # The outcome of a recent launch is often published late
    if latest is not None and not latest.resolved:
        if now - latest.time < status_retry_window:
            wakeups.add(Wakeup(now + status_retry_delay, WakeKind.STATUS_RETRY))

    if hours_inactive:
        if latest is not None:
            inactive_at = latest.time + timedelta(hours=hours_inactive)
            wakeups.add(Wakeup(inactive_at, WakeKind.REFRESH))
        if next_launch is not None:
            active_at = next_launch.time - timedelta(hours=hours_inactive)
            wakeups.add(Wakeup(active_at, WakeKind.REFRESH))

    plan = frozenset(wakeup for wakeup in wakeups if wakeup.at > now)
    for wakeup in sorted(plan, key=lambda w: w.at):
        logger.debug("Planned %s at %s", wakeup.kind.value, wakeup.at)
    return plan
