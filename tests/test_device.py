from datetime import timedelta

import pytest

from conftest import T, FakeSource, hours, make_launch, scheduled
from liftoff.config import Settings
from liftoff.core.planner import WakeKind
from liftoff.device import LiftOffDevice, build_attributes
from liftoff.models.launch import CoreRecoveryStatus, LaunchStatus
from liftoff.sources.basesource import UpstreamError
from liftoff.tile import EMPTY_TILE

LAUNCHED = make_launch(
    T - hours(30),
    status=LaunchStatus.LAUNCHED,
    core_recovery=CoreRecoveryStatus.SUCCESS,
    name="Starlink 6-30",
    locality="Cape Canaveral",
    rocket_name="Falcon 9",
)
UPCOMING = scheduled(T + hours(10), name="Crew-8", locality="Kennedy")


def make_device(host, *responses, **settings):
    source = FakeSource(*responses)
    device = LiftOffDevice(host, source, Settings(**settings))
    return device, source


def kinds(device):
    return sorted(w.kind.value for w in device.armed)


def test_configure_publishes_selected_launch(host):
    device, source = make_device(host, (LAUNCHED, UPCOMING))

    device.configure()

    assert source.calls == 1
    assert host.attributes["name"] == "Crew-8"
    assert host.attributes["timeStr"] == "Today 10:00 PM"
    assert host.attributes["time"] == UPCOMING.epoch_ms
    assert host.attributes["status"] == "Scheduled"
    assert host.attributes["coreRecovery"] == "Not Applicable"
    assert host.attributes["description"] == "No Description Available"
    assert host.attributes["rocket"] == "Rocket Unavailable"
    assert host.attributes["switch"] == "on"
    assert "Crew-8" not in host.attributes["tile"]
    assert "Today 10:00 PM" in host.attributes["tile"]

    # Recurring refresh plus the planned wakeups
    [(interval, callback)] = host.recurring.values()
    assert interval == timedelta(minutes=120)
    assert callback == device.refresh
    assert len(host.timers) == len(device.armed)


def test_fetch_failure_keeps_previous_state(host):
    device, source = make_device(host, (LAUNCHED, UPCOMING), UpstreamError("boom"))
    device.configure()
    armed = dict(device.armed)
    attributes = dict(host.attributes)

    device.refresh()

    assert source.calls == 2
    assert device.state.latest is LAUNCHED
    assert device.state.next_launch is UPCOMING
    assert device.armed == armed
    assert host.attributes == attributes


def test_replan_cancels_stale_wakeups(host):
    later = scheduled(T + hours(50), name="Later")
    device, _ = make_device(host, (LAUNCHED, UPCOMING), (LAUNCHED, later))
    device.configure()
    first = set(device.armed)

    device.refresh()

    assert set(device.armed) != first
    assert len(host.timers) == len(device.armed)
    assert {at for at, _ in host.timers.values()} == {w.at for w in device.armed}


def test_switch_display_wakeup_does_not_refetch(host):
    latest = make_launch(T - hours(2), status=LaunchStatus.LAUNCHED, name="Latest")
    next_launch = scheduled(T + hours(20), name="Next")
    device, source = make_device(host, (latest, next_launch))
    device.configure()
    assert host.attributes["name"] == "Latest"

    host.advance_to(T + hours(8))

    assert host.attributes["name"] == "Next"
    assert source.calls == 1


def test_status_retry_until_outcome_is_published(host):
    pending = make_launch(T - hours(1), name="Pending")
    launched = make_launch(
        T - hours(1),
        status=LaunchStatus.LAUNCHED,
        core_recovery=CoreRecoveryStatus.SUCCESS,
        name="Pending",
    )
    next_launch = scheduled(T + hours(30))
    device, source = make_device(
        host, (pending, next_launch), (pending, next_launch), (launched, next_launch)
    )
    device.configure()
    assert "status_retry" in kinds(device)
    assert host.attributes["status"] == ""

    # First retry sees no change and re-arms
    host.advance_to(T + timedelta(minutes=10))
    assert source.calls == 2
    assert device.state.update_attempts == 1
    assert any(
        w.kind == WakeKind.STATUS_RETRY and w.at == T + timedelta(minutes=15)
        for w in device.armed
    )

    host.advance_to(T + timedelta(minutes=15))
    assert source.calls == 3
    assert host.attributes["status"] == "Launched"
    assert host.attributes["coreRecovery"] == "Success"
    assert device.state.update_attempts == 0
    assert "status_retry" not in kinds(device)


def test_status_retry_gives_up_after_max_attempts(host):
    pending = make_launch(T - hours(1))
    device, source = make_device(
        host, (pending, scheduled(T + hours(30))), status_retry_max_attempts=3
    )
    device.configure()

    host.advance_to(T + hours(1))

    # One refresh plus three retries at +10, +15 and +20 minutes
    assert source.calls == 4
    assert device.state.update_attempts == 0
    assert "status_retry" not in kinds(device)


def test_retry_counts_failed_fetch_as_attempt(host):
    pending = make_launch(T - hours(1))
    device, source = make_device(
        host, (pending, None), UpstreamError("down"), (pending, None)
    )
    device.configure()

    host.advance_to(T + timedelta(minutes=10))

    assert device.state.update_attempts == 1
    assert device.state.latest is pending
    assert "status_retry" in kinds(device)


def test_no_launch_data(host):
    device, _ = make_device(host, (None, None))
    device.configure()

    assert host.attributes["name"] == "No Launch Data"
    assert host.attributes["timeStr"] == "No Launch Data"
    assert host.attributes["switch"] == "off"
    assert host.attributes["tile"] == EMPTY_TILE
    assert device.armed == {}


def test_clear_when_inactive(host):
    latest = make_launch(T - hours(30), status=LaunchStatus.LAUNCHED)
    next_launch = scheduled(T + hours(30))
    device, _ = make_device(host, (latest, next_launch), clear_when_inactive=True)

    device.configure()

    assert host.attributes["tile"] == EMPTY_TILE
    # The attributes still describe the selected launch
    assert host.attributes["status"] == "Scheduled"


def test_inactivity_end_triggers_refresh(host):
    latest = make_launch(T - hours(30), status=LaunchStatus.LAUNCHED)
    next_launch = scheduled(T + hours(30))
    device, source = make_device(host, (latest, next_launch))
    device.configure()

    host.advance_to(T + hours(6))

    assert source.calls == 2


def test_configure_resets_timers(host):
    device, _ = make_device(host, (LAUNCHED, UPCOMING))
    device.configure()
    device.configure()

    assert len(host.recurring) == 1
    assert len(host.timers) == len(device.armed)


@pytest.mark.parametrize(
    "latest, next_launch, switch",
    [
        (make_launch(T - hours(2)), None, "on"),
        (None, scheduled(T + hours(2)), "on"),
        (make_launch(T - hours(30)), scheduled(T + hours(30)), "off"),
    ],
)
def test_switch_value(latest, next_launch, switch):
    attributes = build_attributes(latest, next_launch, T, Settings())
    assert attributes["switch"] == switch
