"""Desktop notification announcing the current time."""
from __future__ import annotations

import json
from datetime import datetime, timezone

from boxer.executor import CommandExecutor, run_osascript
from boxer.services.scheduler import Clock, Effect, EffectError, utc_now

DISPLAY_NOTIFICATION_SCRIPT = 'display notification {message} with title "Boxer"'


def format_clock_time(moment: datetime) -> str:
    """Format ``moment`` in local time like ``3:04pm``.

    Naive datetimes are interpreted as UTC, matching the ticker.
    """

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    local = moment.astimezone()
    hour = local.hour % 12 or 12
    suffix = "am" if local.hour < 12 else "pm"
    return f"{hour}:{local.minute:02d}{suffix}"


def announcement_handler(executor: CommandExecutor, clock: Clock = utc_now) -> Effect:
    def handle(index: int, steps: int) -> None:
        # AppleScript string literals share JSON's quoting rules for plain text.
        message = json.dumps(format_clock_time(clock()))
        try:
            run_osascript(executor, DISPLAY_NOTIFICATION_SCRIPT.format(message=message))
        except Exception as exc:
            raise EffectError(f"exec display notification: {exc}") from exc

    return handle


__all__ = ["announcement_handler", "format_clock_time"]
