"""Menu bar flashing through the macOS dark mode preference."""
from __future__ import annotations

from boxer.executor import CommandExecutor, run_osascript
from boxer.services.scheduler import Effect, EffectError

FLASH_DARK_MODE_SCRIPT = """
tell application "System Events"
  tell appearance preferences
    repeat 5 times
      set dark mode to true
      delay 1
      set dark mode to false
      delay 1
    end repeat
  end tell
end tell
"""

SET_DARK_MODE_SCRIPT = """
tell application "System Events"
  tell appearance preferences
    set dark mode to {value}
  end tell
end tell
"""


def menubar_handler(executor: CommandExecutor) -> Effect:
    """Flash at the start of each interval, alternate dark mode on other steps."""

    def handle(index: int, steps: int) -> None:
        if index == 0:
            try:
                run_osascript(executor, FLASH_DARK_MODE_SCRIPT)
            except Exception as exc:
                raise EffectError(f"exec flash: {exc}") from exc
            return

        dark_mode = index % 2 == 1
        source = SET_DARK_MODE_SCRIPT.format(value="true" if dark_mode else "false")
        try:
            run_osascript(executor, source)
        except Exception as exc:
            raise EffectError(f"exec set dark mode: {exc}") from exc

    return handle


__all__ = ["menubar_handler"]
