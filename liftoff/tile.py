"""HTML tile for dashboards that render attribute values as markup."""

import html
from dataclasses import dataclass
from typing import Optional

from liftoff.config import DashboardLayout, Settings
from liftoff.models.launch import CoreRecoveryStatus, Launch, LaunchStatus

EMPTY_TILE = "<div style='overflow:auto;'></div>"

GREEN = "green"
RED = "red"

ROCKET_PATH = (
    "M 13.207 12.398 L 13.207 9.977 C 13.207 4.582 10.926 1.320 9.969 0.195 "
    "C 9.867 0.070 9.715 0 9.555 0 C 9.395 0 9.246 0.070 9.141 0.191 "
    "C 8.168 1.316 5.840 4.574 5.840 9.977 L 5.840 12.398 L 5.395 12.699 "
    "C 4.531 13.281 4.016 14.250 4.016 15.289 L 4.016 18.180 "
    "C 4.016 18.348 4.109 18.508 4.262 18.590 C 4.410 18.668 4.594 18.660 4.738 18.566 "
    "L 6.188 17.598 C 6.598 17.328 7.074 17.184 7.563 17.184 L 8.633 17.184 "
    "L 8.633 18.582 C 8.633 18.840 8.840 19.047 9.098 19.047 L 9.949 19.047 "
    "C 10.207 19.047 10.414 18.840 10.414 18.582 L 10.414 17.184 L 11.480 17.184 "
    "C 11.973 17.184 12.449 17.324 12.859 17.598 L 14.309 18.566 "
    "C 14.449 18.660 14.633 18.668 14.785 18.590 C 14.938 18.508 15.031 18.348 15.031 18.180 "
    "L 15.031 15.289 C 15.031 14.254 14.512 13.281 13.652 12.699 Z "
    "M 9.523 8.605 C 8.637 8.605 7.918 7.887 7.918 7 C 7.918 6.113 8.637 5.398 9.523 5.398 "
    "C 10.410 5.398 11.129 6.113 11.129 7 C 11.129 7.887 10.410 8.605 9.523 8.605 Z"
)


def rocket_icon(fill: str) -> str:
    return (
        "<svg xmlns='http://www.w3.org/2000/svg' width='19pt' height='19pt' viewBox='0 0 19 19'>"
        f"<path style='stroke:none;fill-rule:nonzero;fill:{fill};' d='{ROCKET_PATH}'/>"
        "</svg>"
    )


def recovery_icon(outer: str, middle: str, center: str) -> str:
    """Landing-zone target: outer ring, inner ring and bullseye."""
    return (
        "<svg xmlns='http://www.w3.org/2000/svg' width='20pt' height='20pt' viewBox='0 0 20 20'>"
        f"<circle cx='9.94' cy='9.87' r='9.0' fill='none' stroke='{outer}' stroke-width='1.8'/>"
        f"<circle cx='9.93' cy='9.63' r='5.0' fill='none' stroke='{middle}' stroke-width='1.8'/>"
        f"<circle cx='9.93' cy='9.58' r='1.55' fill='{center}'/>"
        "</svg>"
    )


LAUNCH_ICONS = {
    LaunchStatus.LAUNCHED: rocket_icon(GREEN),
    LaunchStatus.FAILED: rocket_icon(RED),
}

RECOVERY_ICONS = {
    CoreRecoveryStatus.SUCCESS: recovery_icon(GREEN, GREEN, GREEN),
    CoreRecoveryStatus.FAILURE: recovery_icon(RED, RED, RED),
    CoreRecoveryStatus.PARTIAL_SUCCESS: recovery_icon(GREEN, RED, GREEN),
}

# Patch width by number of text lines under it
PATCH_WIDTHS = {
    DashboardLayout.COMPACT: {2: "90%", 3: "90%", 4: "70%"},
    DashboardLayout.SCALABLE: {2: "90%", 3: "70%", 4: "50%"},
}
MARGINS = {
    DashboardLayout.COMPACT: "-25%",
    DashboardLayout.SCALABLE: "-10%",
}


@dataclass
class TileParameters:
    scalable_font: bool
    image_width: str
    margin: str
    color: str


def shows_outcome(launch: Launch) -> bool:
    return launch.resolved


def get_tile_parameters(launch: Launch, settings: Settings) -> TileParameters:
    layout = settings.dashboard_layout
    num_lines = 1
    if settings.show_name and launch.name:
        num_lines += 1
    if settings.show_locality:
        num_lines += 1
    if shows_outcome(launch):
        num_lines += 1

    color = ""
    if settings.text_color.lower() != "#000000":
        color = f"color: {settings.text_color}"

    return TileParameters(
        scalable_font=layout == DashboardLayout.SCALABLE,
        image_width=PATCH_WIDTHS[layout].get(num_lines, "100%"),
        margin=MARGINS[layout],
        color=color,
    )


def render_tile(
    launch: Optional[Launch], time_str: str, settings: Settings, inactive: bool = False
) -> str:
    if launch is None or (settings.clear_when_inactive and inactive):
        # Keep the dashboard clean
        return EMPTY_TILE

    params = get_tile_parameters(launch, settings)
    font = "font-size: min(10vh, 10vw)" if params.scalable_font else ""

    def line(text: str) -> str:
        return f"<p style='margin:0px;{font}'>{text}</p>"

    tile = f"<div style='text-align:center;padding:0px;height:100%;{params.color};'>"
    tile += f"<img src='{html.escape(launch.patch, quote=True)}' style='width:{params.image_width}; top:0px;'>"
    tile += "</div>"
    tile += f"<div style='text-align:center;margin-top:{params.margin};'>"
    if settings.show_name:
        tile += line(f"<b>{html.escape(launch.name or '')}</b>")
    tile += line(html.escape(time_str))
    if settings.show_locality:
        tile += line(html.escape(launch.locality or "Location Unavailable"))
    if shows_outcome(launch):
        tile += "<div style='text-align:center;margin:0px;'>"
        tile += LAUNCH_ICONS.get(launch.status, "")
        tile += RECOVERY_ICONS.get(launch.core_recovery, "")
        tile += "</div>"
    tile += "</div>"
    return tile
