"""Effects fired by the ticker."""

from .announcement import announcement_handler, format_clock_time
from .menubar import menubar_handler
from .wallpaper import (
    DesktopSizer,
    WallpaperGenerator,
    desktop_size,
    wallpaper_filename,
    wallpaper_handler,
)

__all__ = [
    "DesktopSizer",
    "WallpaperGenerator",
    "announcement_handler",
    "desktop_size",
    "format_clock_time",
    "menubar_handler",
    "wallpaper_filename",
    "wallpaper_handler",
]
