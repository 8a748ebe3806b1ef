from datetime import datetime
from typing import Optional, Union
import logging

import httpx

from liftoff.models.launch import (
    CoreRecoveryStatus,
    Launch,
    LaunchStatus,
    TimePrecision,
    is_resolved,
)
from liftoff.sources.basesource import (
    LatestAndNext,
    LaunchSource,
    UpstreamError,
    aggregate_core_recovery,
)
from liftoff.utils.utils import parse_date

logger = logging.getLogger(__name__)

LAUNCH_LIBRARY_API_URL = "https://ll.thespacedevs.com/2.2.0/"

STATUS_BY_ABBREV = {
    "Success": LaunchStatus.LAUNCHED,
    "Failure": LaunchStatus.FAILED,
    "Partial Failure": LaunchStatus.FAILED,
    "Go": LaunchStatus.GO,
    "TBD": LaunchStatus.TBD,
    "TBC": LaunchStatus.TBC,
}

# Matched against the start of net_precision.name, e.g. "Quarter (Q3)"
PRECISION_BY_NAME = (
    ("second", TimePrecision.EXACT),
    ("minute", TimePrecision.EXACT),
    ("hour", TimePrecision.HOUR),
    ("day", TimePrecision.DAY),
    ("month", TimePrecision.MONTH),
    ("quarter", TimePrecision.QUARTER),
    ("half", TimePrecision.HALF),
    ("year", TimePrecision.YEAR),
    ("fiscal", TimePrecision.YEAR),
)


def parse_precision(net_precision: Optional[dict]) -> TimePrecision:
    if not net_precision:
        return TimePrecision.EXACT
    name = (net_precision.get("name") or "").strip().lower()
    for prefix, precision in PRECISION_BY_NAME:
        if name.startswith(prefix):
            return precision
    logger.warning("Unknown net precision %r, treating as exact", name)
    return TimePrecision.EXACT


def parse_status(status: Optional[dict]) -> Union[LaunchStatus, str, None]:
    if not status:
        return None
    abbrev = status.get("abbrev")
    if not abbrev:
        return None
    return STATUS_BY_ABBREV.get(abbrev, abbrev)


class LaunchLibrarySource(LaunchSource):
    """Reads the Launch Library 2 upcoming listing, sorted ascending by NET.

    The listing keeps launches for a while after liftoff, so the last record
    before ``now`` is the latest launch and the first one at or after ``now``
    is the next.
    """

    name = "Launch Library"

    def __init__(
        self,
        base_url: str = LAUNCH_LIBRARY_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
        page_size: int = 10,
        max_pages: int = 5,
    ) -> None:
        super().__init__(base_url, timeout, transport)
        self.page_size = page_size
        self.max_pages = max_pages

    def fetch(self, now: datetime) -> LatestAndNext:
        latest: Optional[Launch] = None
        next_launch: Optional[Launch] = None

        path = "launch/upcoming/"
        params: Optional[dict] = {
            "mode": "detailed",
            "ordering": "net",
            "limit": self.page_size,
        }
        pages = 0
        while path and next_launch is None and pages < self.max_pages:
            page = self.extract(path, params)
            pages += 1
            results = page.get("results")
            if not isinstance(results, list):
                raise UpstreamError(f"{self.name} page has no results list")

            for raw in results:
                launch = self.transform(raw)
                if launch.time >= now:
                    next_launch = launch
                    break
                latest = launch

            # The next link already carries the query string
            path = page.get("next")
            params = None

        return latest, next_launch

    def transform(self, raw: dict) -> Launch:
        time = parse_date(raw.get("net"))
        if time is None:
            raise UpstreamError(f"Launch {raw.get('id')} has no NET")

        status = parse_status(raw.get("status"))
        core_recovery = CoreRecoveryStatus.NOT_APPLICABLE
        rocket = raw.get("rocket") or {}
        if is_resolved(status):
            stages = rocket.get("launcher_stage") or []
            core_recovery = aggregate_core_recovery(
                ((stage.get("landing") or {}).get("attempt"),
                 (stage.get("landing") or {}).get("success"))
                for stage in stages
            )

        configuration = rocket.get("configuration") or {}
        location = (raw.get("pad") or {}).get("location") or {}
        mission = raw.get("mission") or {}
        patches = raw.get("mission_patches") or []

        return Launch(
            # Timing
            time=time,
            time_precision=parse_precision(raw.get("net_precision")),
            # Display
            name=raw.get("name"),
            locality=location.get("name"),
            rocket_name=configuration.get("full_name") or configuration.get("name"),
            description=mission.get("description"),
            patch_url=patches[0].get("image_url") if patches else None,
            # Outcome
            status=status,
            status_detail=(raw.get("status") or {}).get("description"),
            core_recovery=core_recovery,
            id=raw.get("id"),
        )
