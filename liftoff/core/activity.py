from datetime import datetime, timedelta
from typing import Optional
import logging

from liftoff.models.launch import Launch, TimePrecision

logger = logging.getLogger(__name__)

# Coarser precisions give no meaningful "hours before launch" boundary
BOUNDED_PRECISIONS = (TimePrecision.EXACT, TimePrecision.HOUR, TimePrecision.DAY)


def inactivity_start(
    latest: Optional[Launch], hours_inactive: Optional[float]
) -> Optional[datetime]:
    if latest is None or hours_inactive is None:
        return None
    return latest.time + timedelta(hours=hours_inactive)


def inactivity_end(
    next_launch: Optional[Launch], hours_inactive: Optional[float]
) -> Optional[datetime]:
    if next_launch is None or hours_inactive is None:
        return None
    if next_launch.time_precision not in BOUNDED_PRECISIONS:
        return None
    return next_launch.time - timedelta(hours=hours_inactive)


def is_inactive(
    latest: Optional[Launch],
    next_launch: Optional[Launch],
    now: datetime,
    hours_inactive: Optional[float],
) -> bool:
    start = inactivity_start(latest, hours_inactive)
    end = inactivity_end(next_launch, hours_inactive)
    if start is not None:
        logger.debug("Inactivity post-launch scheduled to start %s", start)
    if end is not None:
        logger.debug("Inactivity pre-launch scheduled to stop %s", end)

    if start is not None and end is not None:
        inactive = start < now < end
    elif end is not None:
        inactive = now < end
    elif start is not None:
        inactive = now > start
    else:
        inactive = False

    if inactive:
        logger.debug(
            "No launch activity within the past %s hour(s) and within the next %s hour(s)",
            hours_inactive,
            hours_inactive,
        )
    return inactive
