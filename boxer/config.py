"""Configuration schema for Boxer.

Each effect gets its own section with an ``enabled`` flag and the ``step`` /
``interval`` pair that drives it on the ticker.  Colors are stored as
``(r, g, b)`` tuples so the effects never have to parse strings.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional, Sequence, Tuple

Color = Tuple[int, int, int]


@dataclass(slots=True)
class TickerConfig:
    """Timing knobs for the driver loop."""

    tick_interval: timedelta = timedelta(seconds=1)


@dataclass(slots=True)
class WallpaperConfig:
    """Desktop wallpaper progress bar."""

    enabled: bool = False
    step: timedelta = timedelta(minutes=1)
    interval: timedelta = timedelta(minutes=15)
    foreground: Color = (0x9A, 0xC9, 0x7C)
    background: Color = (0x53, 0x4B, 0x4D)


@dataclass(slots=True)
class MenuBarConfig:
    """Dark mode toggling of the menu bar."""

    enabled: bool = False
    step: timedelta = timedelta(minutes=1)
    interval: timedelta = timedelta(minutes=15)


@dataclass(slots=True)
class AnnouncementConfig:
    """Desktop notification announcing the current time."""

    enabled: bool = False
    step: timedelta = timedelta(minutes=15)
    interval: timedelta = timedelta(minutes=15)


@dataclass(slots=True)
class TelegramConfig:
    """Outgoing Telegram bot integration."""

    bot_token: str
    chat_ids: Sequence[int]
    enabled: bool = True
    step: timedelta = timedelta(minutes=15)
    interval: timedelta = timedelta(hours=1)
    dry_run: bool = False
    request_timeout: float = 5.0


@dataclass(slots=True)
class BoxerConfig:
    """Top-level configuration bundle."""

    work_dir: Optional[Path] = None
    ticker: TickerConfig = field(default_factory=TickerConfig)
    wallpaper: WallpaperConfig = field(default_factory=WallpaperConfig)
    menubar: MenuBarConfig = field(default_factory=MenuBarConfig)
    announcement: AnnouncementConfig = field(default_factory=AnnouncementConfig)
    telegram: Optional[TelegramConfig] = None
