from liftoff.config import Settings, load_settings
from liftoff.device import LiftOffDevice, build_attributes
from liftoff.host import Host, LoopHost
from liftoff.models import Launch
from liftoff.sources import (
    LaunchLibrarySource,
    LaunchSource,
    SpaceXSource,
    UpstreamError,
    build_source,
)
