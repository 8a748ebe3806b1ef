from datetime import datetime, timezone
from typing import Optional

from prefect import flow, get_run_logger, task

from liftoff.config import Settings, load_settings, setup_logging
from liftoff.device import LiftOffDevice, build_attributes
from liftoff.host import LoopHost
from liftoff.models.launch import Launch
from liftoff.sources import LaunchSource, build_source
from liftoff.utils.utils import generate_task_run_name


@task(name="Fetch", task_run_name=generate_task_run_name("Fetch"))
def fetch_task(
    source: LaunchSource, now: datetime
) -> tuple[Optional[Launch], Optional[Launch]]:
    latest, next_launch = source.fetch_latest_and_next(now)
    get_run_logger().info(
        "Latest: %s, next: %s",
        latest.name if latest else None,
        next_launch.name if next_launch else None,
    )
    return latest, next_launch


@task(name="Render")
def render_task(
    latest: Optional[Launch],
    next_launch: Optional[Launch],
    now: datetime,
    settings: Settings,
) -> dict:
    return build_attributes(latest, next_launch, now, settings)


@flow(name="Lift Off Snapshot")
def snapshot_flow(config_path: Optional[str] = None) -> dict:
    settings = load_settings(config_path)
    source = build_source(settings)
    now = datetime.now(timezone.utc)

    latest, next_launch = fetch_task(source, now)
    attributes = render_task(latest, next_launch, now, settings)

    get_run_logger().info("Displaying %s (%s)", attributes["name"], attributes["timeStr"])
    return attributes


@flow(name="Lift Off")
def liftoff_flow(config_path: Optional[str] = None) -> None:
    """Long-running entry point: arms the device timers and blocks in the host loop.

    The flow run stays in Running until the process is stopped. For finite runs,
    deploy `snapshot_flow` on a Prefect interval schedule instead.
    """
    settings = load_settings(config_path)
    setup_logging(settings)

    host = LoopHost(tz=settings.tz)
    device = LiftOffDevice(host, build_source(settings), settings)
    device.configure()

    get_run_logger().info(
        "Watching %s every %s minutes", device.source.name, settings.refresh_interval_minutes
    )
    host.run()


if __name__ == "__main__":
    liftoff_flow()
