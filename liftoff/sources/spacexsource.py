from datetime import datetime
from typing import Optional
import logging

import httpx

from liftoff.models.launch import (
    CoreRecoveryStatus,
    Launch,
    LaunchStatus,
    TimePrecision,
    is_resolved,
)
from liftoff.models.launchpad import Launchpad
from liftoff.models.rocket import Rocket
from liftoff.sources.basesource import (
    LatestAndNext,
    LaunchSource,
    UpstreamError,
    aggregate_core_recovery,
)
from liftoff.utils.utils import from_unix, parse_date

logger = logging.getLogger(__name__)

SPACEX_API_URL = "https://api.spacexdata.com/v4/"


def parse_precision(value: Optional[str]) -> TimePrecision:
    if not value:
        return TimePrecision.EXACT
    try:
        return TimePrecision(value.lower())
    except ValueError:
        logger.warning("Unknown date precision %r, treating as exact", value)
        return TimePrecision.EXACT


def parse_success(value) -> Optional[LaunchStatus]:
    # The flag is sometimes serialized as a string
    if value is True or value == "true":
        return LaunchStatus.LAUNCHED
    if value is False or value == "false":
        return LaunchStatus.FAILED
    return None


class SpaceXSource(LaunchSource):
    """Reads the r/SpaceX v4 API: one endpoint per launch plus pad and rocket lookups."""

    name = "SpaceX"

    def __init__(
        self,
        base_url: str = SPACEX_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(base_url, timeout, transport)
        self._launchpads: dict[str, Launchpad] = {}
        self._rockets: dict[str, Rocket] = {}

    def fetch(self, now: datetime) -> LatestAndNext:
        latest = self.transform(self.extract("launches/latest"), upcoming=False)
        next_launch = self.transform(self.extract("launches/next"), upcoming=True)
        return latest, next_launch

    def transform(self, raw: dict, upcoming: bool) -> Launch:
        time = from_unix(raw.get("date_unix")) or parse_date(raw.get("date_utc"))
        if time is None:
            raise UpstreamError(f"Launch {raw.get('id')} has no date")

        if upcoming:
            status = LaunchStatus.SCHEDULED
        else:
            status = parse_success(raw.get("success"))

        core_recovery = CoreRecoveryStatus.NOT_APPLICABLE
        if is_resolved(status):
            cores = raw.get("cores") or []
            core_recovery = aggregate_core_recovery(
                (core.get("landing_attempt"), core.get("landing_success"))
                for core in cores
            )

        links = raw.get("links") or {}
        patch = links.get("patch") or {}

        return Launch(
            # Timing
            time=time,
            time_precision=parse_precision(raw.get("date_precision")),
            # Display
            name=raw.get("name"),
            locality=self.get_locality(raw.get("launchpad")),
            rocket_name=self.get_rocket_name(raw.get("rocket")),
            description=raw.get("details"),
            patch_url=patch.get("large") or patch.get("small"),
            # Outcome
            status=status,
            core_recovery=core_recovery,
            id=raw.get("id"),
        )

    def get_locality(self, launchpad_id: Optional[str]) -> Optional[str]:
        launchpad = self.get_launchpad(launchpad_id)
        return launchpad.locality if launchpad else None

    def get_rocket_name(self, rocket_id: Optional[str]) -> Optional[str]:
        rocket = self.get_rocket(rocket_id)
        return rocket.name if rocket else None

    def get_launchpad(self, launchpad_id: Optional[str]) -> Optional[Launchpad]:
        if not launchpad_id:
            return None
        if launchpad_id not in self._launchpads:
            try:
                data = self.extract(f"launchpads/{launchpad_id}")
            except UpstreamError as e:
                # Locality is optional on the tile
                logger.warning("Launchpad lookup failed: %s", e)
                return None
            self._launchpads[launchpad_id] = Launchpad(
                id=data.get("id", launchpad_id),
                locality=data.get("locality"),
            )
        return self._launchpads[launchpad_id]

    def get_rocket(self, rocket_id: Optional[str]) -> Optional[Rocket]:
        if not rocket_id:
            return None
        if rocket_id not in self._rockets:
            try:
                data = self.extract(f"rockets/{rocket_id}")
            except UpstreamError as e:
                logger.warning("Rocket lookup failed: %s", e)
                return None
            self._rockets[rocket_id] = Rocket(
                id=data.get("id", rocket_id),
                name=data.get("name"),
            )
        return self._rockets[rocket_id]
