from liftoff.sources.basesource import (
    LaunchSource,
    UpstreamError,
    aggregate_core_recovery,
)
from liftoff.sources.spacexsource import SpaceXSource
from liftoff.sources.launchlibrarysource import LaunchLibrarySource

SOURCES = {
    "spacex": SpaceXSource,
    "launchlibrary": LaunchLibrarySource,
}


def build_source(settings, transport=None) -> LaunchSource:
    if settings.source == "launchlibrary":
        base_url = settings.launch_library_base_url
    else:
        base_url = settings.spacex_base_url
    return SOURCES[settings.source](
        base_url=base_url,
        timeout=settings.request_timeout_seconds,
        transport=transport,
    )


__all__ = [
    "SOURCES",
    "build_source",
    "LaunchLibrarySource",
    "LaunchSource",
    "SpaceXSource",
    "UpstreamError",
    "aggregate_core_recovery",
]
