"""Utilities to load :mod:`boxer.config` structures from YAML files."""
from __future__ import annotations

import datetime as _dt
import re
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

import yaml

from .config import (
    AnnouncementConfig,
    BoxerConfig,
    Color,
    MenuBarConfig,
    TelegramConfig,
    TickerConfig,
    WallpaperConfig,
)
from .services.scheduler import ConfigurationError

DEFAULT_CONFIG_NAME = "boxer.yaml"

# Seconds per unit; units follow Go's time.ParseDuration plus days.
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
}

_DURATION_PART = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h|d)"
_DURATION_RE = re.compile(rf"(?:{_DURATION_PART})+")
_DURATION_PART_RE = re.compile(_DURATION_PART)

_T = TypeVar("_T")

_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def default_config_path() -> Path:
    """Return ``~/boxer.yaml``."""

    return Path.home() / DEFAULT_CONFIG_NAME


def load_config(path: Path | None = None) -> BoxerConfig:
    """Load a configuration file into :class:`BoxerConfig`.

    Durations may be written as ``"500ms"``, ``"15m"`` or ``"1h30m"`` and colors as
    ``"#RRGGBB"``.  Sections omitted from the file fall back to the defaults
    declared in :mod:`boxer.config`.
    """

    raw = _load_yaml(path or default_config_path())
    return parse_config(raw)


def parse_config(raw: Mapping[str, Any]) -> BoxerConfig:
    """Build a :class:`BoxerConfig` from an already decoded mapping."""

    work_dir = Path(raw["work_dir"]).expanduser() if raw.get("work_dir") else None

    ticker_section = _section(raw, "ticker")
    ticker = TickerConfig(
        tick_interval=_parse_duration(ticker_section.get("tick_interval", "1s")),
    )

    wallpaper_section = _section(raw, "wallpaper")
    defaults = WallpaperConfig()
    wallpaper = WallpaperConfig(
        enabled=bool(wallpaper_section.get("enabled", False)),
        step=_parse_duration(wallpaper_section.get("step", defaults.step)),
        interval=_parse_duration(wallpaper_section.get("interval", defaults.interval)),
        foreground=_parse_color(wallpaper_section.get("foreground", defaults.foreground)),
        background=_parse_color(wallpaper_section.get("background", defaults.background)),
    )

    menubar_section = _section(raw, "menubar")
    menubar = MenuBarConfig(
        enabled=bool(menubar_section.get("enabled", False)),
        step=_parse_duration(menubar_section.get("step", "1m")),
        interval=_parse_duration(menubar_section.get("interval", "15m")),
    )

    announcement_section = _section(raw, "announcement")
    announcement = AnnouncementConfig(
        enabled=bool(announcement_section.get("enabled", False)),
        step=_parse_duration(announcement_section.get("step", "15m")),
        interval=_parse_duration(announcement_section.get("interval", "15m")),
    )

    telegram_cfg = None
    if "telegram" in raw and raw["telegram"]:
        section = _section(raw, "telegram")
        if "bot_token" not in section:
            raise ConfigurationError("telegram: bot_token is required")
        telegram_cfg = TelegramConfig(
            bot_token=str(section["bot_token"]),
            chat_ids=tuple(_convert(int, cid, "telegram.chat_ids") for cid in section.get("chat_ids", [])),
            enabled=bool(section.get("enabled", True)),
            step=_parse_duration(section.get("step", "15m")),
            interval=_parse_duration(section.get("interval", "1h")),
            dry_run=bool(section.get("dry_run", False)),
            request_timeout=_convert(float, section.get("request_timeout", 5.0), "telegram.request_timeout"),
        )

    return BoxerConfig(
        work_dir=work_dir,
        ticker=ticker,
        wallpaper=wallpaper,
        menubar=menubar,
        announcement=announcement,
        telegram=telegram_cfg,
    )


def _load_yaml(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError("configuration root must be a mapping")
    return data


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{name}: section must be a mapping")
    return value


def _parse_duration(value: Any) -> _dt.timedelta:
    if isinstance(value, _dt.timedelta):
        return value
    if isinstance(value, bool):
        raise ConfigurationError(f"unsupported duration value: {value!r}")
    if isinstance(value, (int, float)):
        seconds = _convert(float, value, "duration")
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            seconds = float(text)
        elif _DURATION_RE.fullmatch(text):
            seconds = sum(
                float(amount) * _DURATION_UNITS[unit] for amount, unit in _DURATION_PART_RE.findall(text)
            )
        else:
            raise ConfigurationError(f"invalid duration: {value}")
    else:
        raise ConfigurationError(f"unsupported duration value: {value!r}")
    try:
        return _dt.timedelta(seconds=seconds)
    except (OverflowError, ValueError) as exc:
        raise ConfigurationError(f"duration out of range: {value!r}") from exc


def _convert(kind: Callable[[Any], _T], value: Any, name: str) -> _T:
    try:
        return kind(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ConfigurationError(f"{name}: invalid value {value!r}") from exc


def _parse_color(value: Any) -> Color:
    if isinstance(value, (tuple, list)) and len(value) == 3:
        channels = tuple(_convert(int, part, "color") for part in value)
        if not all(0 <= part <= 255 for part in channels):
            raise ConfigurationError(f"color channels must be within 0-255: {value!r}")
        return channels  # type: ignore[return-value]
    match = _COLOR_RE.match(str(value))
    if match is None:
        raise ConfigurationError(f"cannot parse color: {value!r}")
    red, green, blue = (int(part, 16) for part in match.groups())
    return (red, green, blue)
