from conftest import T, hours, make_launch, scheduled
from liftoff.config import Settings
from liftoff.models.launch import DEFAULT_PATCH_URL, CoreRecoveryStatus, LaunchStatus
from liftoff.tile import (
    EMPTY_TILE,
    LAUNCH_ICONS,
    RECOVERY_ICONS,
    get_tile_parameters,
    render_tile,
)

LAUNCHED = make_launch(
    T - hours(2),
    status=LaunchStatus.LAUNCHED,
    core_recovery=CoreRecoveryStatus.PARTIAL_SUCCESS,
    name="Starlink <6-30>",
    locality="Cape Canaveral",
    patch_url="https://img/patch.png",
)


def test_no_launch_renders_empty_tile():
    assert render_tile(None, "No Launch Data", Settings()) == EMPTY_TILE


def test_inactive_tile_is_cleared_only_when_configured():
    assert render_tile(LAUNCHED, "Today 10:00 AM", Settings(clear_when_inactive=True), inactive=True) == EMPTY_TILE
    assert render_tile(LAUNCHED, "Today 10:00 AM", Settings(), inactive=True) != EMPTY_TILE


def test_default_patch_for_missing_image():
    tile = render_tile(scheduled(T + hours(2)), "Today 2:00 PM", Settings())
    assert f"src='{DEFAULT_PATCH_URL}'" in tile


def test_name_and_locality_lines():
    tile = render_tile(LAUNCHED, "Today 10:00 AM", Settings(show_name=True, show_locality=True))

    assert "<b>Starlink &lt;6-30&gt;</b>" in tile
    assert "Cape Canaveral" in tile
    assert "Today 10:00 AM" in tile


def test_missing_locality_placeholder():
    launch = scheduled(T + hours(2))
    tile = render_tile(launch, "Today 2:00 PM", Settings(show_locality=True))
    assert "Location Unavailable" in tile


def test_outcome_icons():
    tile = render_tile(LAUNCHED, "Today 10:00 AM", Settings())

    assert LAUNCH_ICONS[LaunchStatus.LAUNCHED] in tile
    assert RECOVERY_ICONS[CoreRecoveryStatus.PARTIAL_SUCCESS] in tile
    assert LAUNCH_ICONS[LaunchStatus.FAILED] not in tile


def test_scheduled_launch_has_no_icons():
    tile = render_tile(scheduled(T + hours(2)), "Today 2:00 PM", Settings())
    assert "<svg" not in tile


def test_go_launch_is_not_drawn_as_flown():
    go = make_launch(T + hours(20), status=LaunchStatus.GO)

    tile = render_tile(go, "Tomorrow 8:00 AM", Settings())

    assert get_tile_parameters(go, Settings()).image_width == "100%"
    assert "<svg" not in tile
    assert tile == render_tile(scheduled(T + hours(20)), "Tomorrow 8:00 AM", Settings())


def test_compact_layout_widths():
    settings = Settings(show_name=True, show_locality=True)
    params = get_tile_parameters(LAUNCHED, settings)

    assert params.image_width == "70%"
    assert params.margin == "-25%"
    assert not params.scalable_font
    assert get_tile_parameters(scheduled(T), Settings()).image_width == "100%"


def test_scalable_layout():
    settings = Settings(dashboard_layout="scalable", show_locality=True)

    params = get_tile_parameters(LAUNCHED, settings)
    tile = render_tile(LAUNCHED, "Today 10:00 AM", settings)

    assert params.image_width == "70%"
    assert params.margin == "-10%"
    assert "font-size: min(10vh, 10vw)" in tile


def test_text_color():
    assert get_tile_parameters(LAUNCHED, Settings()).color == ""
    tile = render_tile(LAUNCHED, "Today 10:00 AM", Settings(text_color="#ff0000"))
    assert "color: #ff0000" in tile
