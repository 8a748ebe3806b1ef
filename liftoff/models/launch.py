from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union

DEFAULT_PATCH_URL = (
    "https://raw.githubusercontent.com/lnjustin/App-Images/master/Lift-Off/spacexLogo.png"
)


class TimePrecision(str, Enum):
    EXACT = "exact"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    QUARTER = "quarter"
    HALF = "half"
    YEAR = "year"


class LaunchStatus(str, Enum):
    SCHEDULED = "Scheduled"
    LAUNCHED = "Launched"
    FAILED = "Failed"
    GO = "Go"
    TBD = "TBD"
    TBC = "TBC"


class CoreRecoveryStatus(str, Enum):
    NOT_APPLICABLE = "Not Applicable"
    NOT_ATTEMPTED = "Recovery Not Attempted"
    SUCCESS = "Success"
    FAILURE = "Failure"
    PARTIAL_SUCCESS = "Partial Success"


RESOLVED_STATUSES = (LaunchStatus.LAUNCHED, LaunchStatus.FAILED)


def is_resolved(status: Union[LaunchStatus, str, None]) -> bool:
    return status in RESOLVED_STATUSES


@dataclass(frozen=True)
class Launch:
    # Timing
    time: datetime
    time_precision: TimePrecision = TimePrecision.EXACT

    # Display
    name: Optional[str] = None
    locality: Optional[str] = None
    rocket_name: Optional[str] = None
    description: Optional[str] = None
    patch_url: Optional[str] = None

    # Outcome
    status: Union[LaunchStatus, str, None] = None
    status_detail: Optional[str] = None
    core_recovery: CoreRecoveryStatus = CoreRecoveryStatus.NOT_APPLICABLE

    # Identifiers
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.time.tzinfo is None:
            raise ValueError("Launch.time must be timezone-aware")

    @property
    def epoch_ms(self) -> int:
        return int(self.time.timestamp() * 1000)

    @property
    def patch(self) -> str:
        return self.patch_url or DEFAULT_PATCH_URL

    @property
    def resolved(self) -> bool:
        return is_resolved(self.status)

    @property
    def status_label(self) -> Optional[str]:
        if isinstance(self.status, LaunchStatus):
            return self.status.value
        return self.status
