"""Human-readable launch times relative to now.

Exact and hour precision times are rendered in the configured zone. Coarser
precisions are rendered in UTC, because the upstream value carries no real
time of day and converting it would imply a precision it does not have.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional
import logging

from liftoff.models.launch import TimePrecision

logger = logging.getLogger(__name__)

UNKNOWN_TIME_STR = "Date TBD"

WEEK = timedelta(days=7)


def clock(dt: datetime) -> str:
    """3:05 PM"""
    return f"{dt.hour % 12 or 12}:{dt:%M %p}"


def absolute(dt: datetime) -> str:
    """Wed, Oct 21 3:05 PM"""
    return f"{dt:%a, %b} {dt.day} {clock(dt)}"


def is_today(instant: datetime, now: datetime, tz: tzinfo) -> bool:
    return instant.astimezone(tz).date() == now.astimezone(tz).date()


def is_yesterday(instant: datetime, now: datetime, tz: tzinfo) -> bool:
    yesterday = now.astimezone(tz).date() - timedelta(days=1)
    return instant.astimezone(tz).date() == yesterday


def format_relative(
    instant: datetime,
    precision: Optional[TimePrecision],
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> str:
    if precision in (None, TimePrecision.EXACT, TimePrecision.HOUR):
        local = instant.astimezone(tz)
        if instant > now + WEEK:
            return absolute(local)
        if is_today(instant, now, tz):
            return f"Today {clock(local)}"
        if is_yesterday(instant, now, tz):
            return f"Yesterday {clock(local)}"
        if instant < now - WEEK:
            return absolute(local)
        if instant < now:
            return f"Last {local:%a} {clock(local)}"
        return f"{local:%a} {clock(local)}"

    utc_instant = instant.astimezone(timezone.utc)
    utc_now = now.astimezone(timezone.utc)

    if precision == TimePrecision.DAY:
        weekday = f"{utc_instant:%a}"
        return "Today" if weekday == f"{utc_now:%a}" else weekday

    if precision == TimePrecision.MONTH:
        month = f"{utc_instant:%B}"
        return "This Month" if month == f"{utc_now:%B}" else month

    if precision == TimePrecision.YEAR:
        year = f"{utc_instant:%Y}"
        return "This Year" if year == f"{utc_now:%Y}" else year

    # No agreed rendering for quarter and half precision yet
    logger.warning("No format for %s precision, showing %r", precision, UNKNOWN_TIME_STR)
    return UNKNOWN_TIME_STR
