from datetime import datetime, timedelta
from typing import Optional
import logging

from liftoff.models.launch import Launch
from liftoff.utils.utils import seconds_between

logger = logging.getLogger(__name__)

CLOSE_LAUNCH_MINUTES = 1440


def compute_switch_instant(
    latest: Optional[Launch], next_launch: Optional[Launch], now: datetime
) -> Optional[datetime]:
    """When the display should move from the latest launch to the next one.

    Launches less than a day apart switch halfway between now and the next
    launch, counted from the latest launch. The result moves every time it is
    recomputed with a later ``now``. Launches further apart switch one day
    after the latest launch.
    """
    if latest is None or next_launch is None:
        return None

    minutes_between = round(seconds_between(latest.time, next_launch.time) / 60)
    if minutes_between < CLOSE_LAUNCH_MINUTES:
        if now > next_launch.time:
            # Next launch is already underway
            return now
        half_way = round(seconds_between(now, next_launch.time) / 2)
        return latest.time + timedelta(seconds=half_way)

    return latest.time + timedelta(days=1)


def select_launch(
    latest: Optional[Launch], next_launch: Optional[Launch], now: datetime
) -> Optional[Launch]:
    if latest is None:
        return next_launch
    if next_launch is None:
        return latest

    switch_at = compute_switch_instant(latest, next_launch, now)
    logger.debug("Date for switching to next launch is: %s", switch_at)
    if now >= switch_at:
        logger.debug("Displaying next launch.")
        return next_launch
    logger.debug("Displaying last launch.")
    return latest
