from liftoff.models.launch import (
    DEFAULT_PATCH_URL,
    CoreRecoveryStatus,
    Launch,
    LaunchStatus,
    TimePrecision,
    is_resolved,
)
from liftoff.models.launchpad import Launchpad
from liftoff.models.rocket import Rocket

__all__ = [
    "DEFAULT_PATCH_URL",
    "CoreRecoveryStatus",
    "Launch",
    "LaunchStatus",
    "Launchpad",
    "Rocket",
    "TimePrecision",
    "is_resolved",
]
