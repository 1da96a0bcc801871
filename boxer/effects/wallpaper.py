"""Desktop wallpaper that fills up as the interval progresses."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Tuple, Union

from PIL import Image

from boxer.config import Color
from boxer.executor import CommandExecutor, run_osascript
from boxer.services.scheduler import Effect, EffectError

logger = logging.getLogger(__name__)

SET_WALLPAPER_SCRIPT = """
tell application "Finder"
  set desktop picture to POSIX file "{path}"
end tell
"""

DESKTOP_SIZE_SCRIPT = """
tell application "Finder"
  get bounds of window of desktop
end tell
"""

_BOUNDS_RE = re.compile(r"^-?\d+, -?\d+, (\d+), (\d+)")

DesktopSizer = Callable[[CommandExecutor], Tuple[int, int]]


def desktop_size(executor: CommandExecutor) -> Tuple[int, int]:
    """Return the ``(width, height)`` of the desktop as reported by Finder."""

    output = run_osascript(executor, DESKTOP_SIZE_SCRIPT)
    match = _BOUNDS_RE.match(output.strip())
    if match is None:
        raise EffectError(f"unexpected exec output: {output!r}")
    return int(match.group(1)), int(match.group(2))


class WallpaperGenerator:
    """Render a PNG where the foreground covers the top ``pct`` of the image."""

    def __init__(self, foreground: Color, background: Color) -> None:
        self.foreground = foreground
        self.background = background

    def __call__(self, path: Path, width: int, height: int, pct: float) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        image = Image.new("RGB", (width, height), self.background)
        band = int(height * pct)
        if band > 0:
            image.paste(self.foreground, (0, 0, width, band))
        image.save(path, format="PNG")


def wallpaper_filename(width: int, height: int, index: int, steps: int) -> str:
    return f"wallpaper_{width:04d}_{height:04d}_{index:02d}_{steps:02d}.png"


def wallpaper_handler(
    executor: CommandExecutor,
    sizer: DesktopSizer,
    generator: Callable[[Path, int, int, float], None],
    directory: Union[Path, Callable[[], Path]],
) -> Effect:
    """Return an effect that sets the wallpaper for step ``i`` of ``n``.

    Images are cached under ``directory`` by desktop size and position, so a
    resized desktop simply produces a new file on the next step.  ``directory``
    may be a callable, resolved only when an image is needed.
    """

    def handle(index: int, steps: int) -> None:
        try:
            width, height = sizer(executor)
        except Exception as exc:
            raise EffectError(f"desktop size: {exc}") from exc

        base = directory() if callable(directory) else Path(directory)
        image_path = base / wallpaper_filename(width, height, index, steps)
        if not image_path.exists():
            try:
                generator(image_path, width, height, index / steps)
            except Exception as exc:
                raise EffectError(f"generate wallpaper: {exc}") from exc
            logger.debug("generated %s", image_path)

        try:
            run_osascript(executor, SET_WALLPAPER_SCRIPT.format(path=image_path))
        except Exception as exc:
            raise EffectError(f"exec: {exc}") from exc

    return handle


__all__ = ["DesktopSizer", "WallpaperGenerator", "desktop_size", "wallpaper_filename", "wallpaper_handler"]
