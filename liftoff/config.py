from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, fields
from datetime import timedelta, tzinfo
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import pytz
import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LIFTOFF_CONFIG"
MIN_REFRESH_INTERVAL_MINUTES = 5
HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class ConfigError(ValueError):
    pass


class DashboardLayout(str, Enum):
    COMPACT = "compact"
    SCALABLE = "scalable"


@dataclass
class Settings:
    # Tile
    clear_when_inactive: bool = False
    hours_inactive: Optional[float] = 24
    show_name: bool = False
    show_locality: bool = False
    dashboard_layout: DashboardLayout = DashboardLayout.COMPACT
    text_color: str = "#000000"

    # Polling
    refresh_interval_minutes: float = 120
    api_settle_minutes: float = 10
    status_retry_delay_minutes: float = 10
    status_retry_interval_minutes: float = 5
    status_retry_max_attempts: int = 24
    status_retry_window_hours: float = 3

    # Upstream
    source: str = "spacex"
    spacex_base_url: str = "https://api.spacexdata.com/v4/"
    launch_library_base_url: str = "https://ll.thespacedevs.com/2.2.0/"
    request_timeout_seconds: float = 10

    # Host
    time_zone: str = "UTC"
    log_enable: bool = True

    def __post_init__(self) -> None:
        try:
            self.dashboard_layout = DashboardLayout(self.dashboard_layout)
        except ValueError as e:
            raise ConfigError(f"Unknown dashboard layout: {self.dashboard_layout!r}") from e

        if not HEX_COLOR.match(str(self.text_color)):
            raise ConfigError(f"Text color must be a hex string, got {self.text_color!r}")

        if self.source not in ("spacex", "launchlibrary"):
            raise ConfigError(f"Unknown launch source: {self.source!r}")

        if self.hours_inactive is not None and self.hours_inactive < 0:
            raise ConfigError("hours_inactive must not be negative")

        if self.status_retry_max_attempts < 0:
            raise ConfigError("status_retry_max_attempts must not be negative")

        if self.refresh_interval_minutes < MIN_REFRESH_INTERVAL_MINUTES:
            logger.warning(
                "Refresh interval of %s minutes is too short, using %s",
                self.refresh_interval_minutes,
                MIN_REFRESH_INTERVAL_MINUTES,
            )
            self.refresh_interval_minutes = MIN_REFRESH_INTERVAL_MINUTES

        try:
            pytz.timezone(self.time_zone)
        except pytz.UnknownTimeZoneError as e:
            raise ConfigError(f"Unknown time zone: {self.time_zone!r}") from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Settings:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @property
    def tz(self) -> tzinfo:
        return pytz.timezone(self.time_zone)

    @property
    def refresh_interval(self) -> timedelta:
        return timedelta(minutes=self.refresh_interval_minutes)

    @property
    def api_settle_delay(self) -> timedelta:
        return timedelta(minutes=self.api_settle_minutes)

    @property
    def status_retry_delay(self) -> timedelta:
        return timedelta(minutes=self.status_retry_delay_minutes)

    @property
    def status_retry_interval(self) -> timedelta:
        return timedelta(minutes=self.status_retry_interval_minutes)

    @property
    def status_retry_window(self) -> timedelta:
        return timedelta(hours=self.status_retry_window_hours)


def load_yaml_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    return cfg or {}


def load_settings(path: str | Path | None = None) -> Settings:
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if path is None or not Path(path).exists():
        if path is not None:
            logger.warning("Config file %s not found, using defaults", path)
        return Settings()

    cfg = load_yaml_config(path)
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return Settings.from_dict(cfg)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    level = logging.DEBUG if settings.log_enable else logging.INFO
    logging.getLogger("liftoff").setLevel(level)
