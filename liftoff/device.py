from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Dict, Hashable, Optional

from liftoff.config import Settings
from liftoff.core.activity import is_inactive
from liftoff.core.display import select_launch
from liftoff.core.planner import WakeKind, Wakeup, plan_wakeups
from liftoff.core.timefmt import format_relative, is_today
from liftoff.host import Host
from liftoff.models.launch import Launch
from liftoff.sources.basesource import LaunchSource, UpstreamError
from liftoff.tile import render_tile

logger = logging.getLogger(__name__)

NO_DATA = "No Launch Data"
NO_DESCRIPTION = "No Description Available"
NO_NAME = "Name Unavailable"
NO_LOCATION = "Location Unavailable"
NO_ROCKET = "Rocket Unavailable"


@dataclass
class DeviceState:
    latest: Optional[Launch] = None
    next_launch: Optional[Launch] = None
    update_attempts: int = 0


def get_switch_value(
    latest: Optional[Launch], next_launch: Optional[Launch], now: datetime, tz: tzinfo
) -> str:
    for launch in (latest, next_launch):
        if launch is not None and is_today(launch.time, now, tz):
            return "on"
    return "off"


def build_attributes(
    latest: Optional[Launch],
    next_launch: Optional[Launch],
    now: datetime,
    settings: Settings,
    tz: Optional[tzinfo] = None,
) -> Dict[str, Any]:
    """Everything the host shows for the launch on display at ``now``."""
    tz = tz or settings.tz
    launch = select_launch(latest, next_launch, now)
    inactive = is_inactive(latest, next_launch, now, settings.hours_inactive)

    time_str = NO_DATA
    if launch is not None:
        time_str = format_relative(launch.time, launch.time_precision, now, tz)

    attributes: Dict[str, Any] = {
        "time": NO_DATA,
        "timeStr": time_str,
        "name": NO_DATA,
        "location": NO_DATA,
        "rocket": NO_DATA,
        "description": NO_DATA,
        "status": NO_DATA,
        "coreRecovery": NO_DATA,
    }
    if launch is not None:
        attributes.update(
            {
                "time": launch.epoch_ms,
                "name": launch.name or NO_NAME,
                "location": launch.locality or NO_LOCATION,
                "rocket": launch.rocket_name or NO_ROCKET,
                "description": launch.description or NO_DESCRIPTION,
                "status": launch.status_label or "",
                "coreRecovery": launch.core_recovery.value,
            }
        )

    attributes["switch"] = get_switch_value(latest, next_launch, now, tz)
    attributes["tile"] = render_tile(launch, time_str, settings, inactive=inactive)
    return attributes


class LiftOffDevice:
    """Owns the launch state and every timer armed on its behalf.

    Each callback runs to completion before the host fires the next one, so
    the state is never written concurrently.
    """

    def __init__(self, host: Host, source: LaunchSource, settings: Settings) -> None:
        self.host = host
        self.source = source
        self.settings = settings
        self.state = DeviceState()
        self.armed: Dict[Wakeup, Hashable] = {}
        self._refresh_timer: Optional[Hashable] = None

    def configure(self) -> None:
        logger.debug("Configuring Lift Off...")
        self.state = DeviceState()
        self.unschedule()
        if self._refresh_timer is not None:
            self.host.cancel(self._refresh_timer)
        self._refresh_timer = self.host.every(self.settings.refresh_interval, self.refresh)
        self.refresh()

    def refresh(self) -> None:
        if not self.set_state():
            # Keep the previous launches and the timers already armed
            return
        self.update_displayed_launch()
        self.schedule_update()

    def set_state(self) -> bool:
        try:
            latest, next_launch = self.source.fetch_latest_and_next(self.host.now())
        except UpstreamError as e:
            logger.warning("%s fetch failed: %s", self.source.name, e)
            return False
        self.state.latest = latest
        self.state.next_launch = next_launch
        return True

    def update_displayed_launch(self) -> None:
        attributes = build_attributes(
            self.state.latest,
            self.state.next_launch,
            self.host.now(),
            self.settings,
            self.host.tz,
        )
        for name, value in attributes.items():
            self.host.emit(name, value)

    def schedule_update(self) -> None:
        plan = plan_wakeups(
            self.state.latest,
            self.state.next_launch,
            self.host.now(),
            self.settings.hours_inactive,
            api_settle_delay=self.settings.api_settle_delay,
            status_retry_delay=self.settings.status_retry_delay,
            status_retry_window=self.settings.status_retry_window,
        )

        for wakeup in list(self.armed):
            if wakeup not in plan:
                self.host.cancel(self.armed.pop(wakeup))
        for wakeup in plan:
            if wakeup not in self.armed:
                self.arm(wakeup)

    def arm(self, wakeup: Wakeup) -> None:
        self.armed[wakeup] = self.host.run_at(wakeup.at, lambda: self.wake(wakeup))

    def unschedule(self) -> None:
        for handle in self.armed.values():
            self.host.cancel(handle)
        self.armed.clear()

    def wake(self, wakeup: Wakeup) -> None:
        self.armed.pop(wakeup, None)
        logger.debug("Woke up for %s planned at %s", wakeup.kind.value, wakeup.at)
        if wakeup.kind == WakeKind.SWITCH_DISPLAY:
            self.update_displayed_launch()
        elif wakeup.kind == WakeKind.STATUS_RETRY:
            self.update_latest_launch_status()
        else:
            self.refresh()

    def update_latest_launch_status(self) -> None:
        self.state.update_attempts += 1
        latest = self.state.latest
        stored_status = latest.status if latest is not None else None

        changed = False
        if self.set_state():
            latest = self.state.latest
            changed = (latest.status if latest is not None else None) != stored_status

        if changed:
            self.update_displayed_launch()
            self.state.update_attempts = 0
        elif self.state.update_attempts < self.settings.status_retry_max_attempts:
            # Keep checking until the outcome is published
            self.arm(
                Wakeup(
                    self.host.now() + self.settings.status_retry_interval,
                    WakeKind.STATUS_RETRY,
                )
            )
        else:
            logger.debug(
                "Status of %s still unresolved after %s attempts, giving up",
                latest.name if latest is not None else None,
                self.state.update_attempts,
            )
            self.state.update_attempts = 0
