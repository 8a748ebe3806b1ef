from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional
import logging

import httpx

from liftoff.models.launch import CoreRecoveryStatus, Launch

logger = logging.getLogger(__name__)

LatestAndNext = tuple[Optional[Launch], Optional[Launch]]


class UpstreamError(Exception):
    """Raised when the launch API cannot be reached or returns unusable data."""


def aggregate_core_recovery(
    landings: Optional[Iterable[tuple[Optional[bool], Optional[bool]]]],
) -> CoreRecoveryStatus:
    """Collapse (landing_attempt, landing_success) pairs into one recovery status.

    An attempt with an unknown outcome counts as neither success nor failure.
    """
    landings = list(landings or [])
    if not landings:
        return CoreRecoveryStatus.NOT_APPLICABLE

    any_success = False
    any_failure = False
    for attempted, succeeded in landings:
        if attempted is True and succeeded is True:
            any_success = True
        elif attempted is True and succeeded is False:
            any_failure = True

    if any_success and any_failure:
        return CoreRecoveryStatus.PARTIAL_SUCCESS
    if any_success:
        return CoreRecoveryStatus.SUCCESS
    if any_failure:
        return CoreRecoveryStatus.FAILURE
    return CoreRecoveryStatus.NOT_ATTEMPTED


class LaunchSource(ABC):
    name: str

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.transport = transport

    def extract(self, path: str, params: Optional[dict] = None) -> dict:
        logger.debug("%s: GET %s", self.name, path)
        try:
            # Fetch Data from API (synchronously)
            with httpx.Client(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                response = client.get(path.replace(" ", "%20"), params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise UpstreamError(f"{self.name} request for {path} failed: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"{self.name} returned malformed JSON for {path}") from e

        # Every endpoint used here answers with a single JSON object
        if not isinstance(data, dict):
            raise UpstreamError(f"Unexpected response type: {type(data)}")
        return data

    def fetch_latest_and_next(self, now: datetime) -> LatestAndNext:
        try:
            return self.fetch(now)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            # Records that do not have the documented shape
            raise UpstreamError(f"{self.name} returned an unexpected record: {e}") from e

    @abstractmethod
    def fetch(self, now: datetime) -> LatestAndNext:
        """Fetch and normalize the most recent and the next upcoming launch"""
        pass
