"""High-level orchestration: build the ticker from configuration and drive it."""
from __future__ import annotations

import logging
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from boxer.config import BoxerConfig
from boxer.effects import (
    DesktopSizer,
    WallpaperGenerator,
    announcement_handler,
    desktop_size,
    menubar_handler,
    wallpaper_handler,
)
from boxer.executor import CommandExecutor, run_command
from boxer.notifiers import TelegramNotifier
from boxer.services.scheduler import Clock, Ticker, TickOutcome, utc_now

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceDependencies:
    """Bundle of pluggable capabilities used by :class:`BoxerService`."""

    executor: CommandExecutor = run_command
    clock: Clock = utc_now
    sizer: DesktopSizer = desktop_size
    notifier: Optional[TelegramNotifier] = None
    sleep: Optional[Callable[[float], None]] = None


def resolve_work_dir(config: BoxerConfig) -> Path:
    """Return the configured work directory, creating a temp dir when unset.

    Called lazily by the wallpaper effect so that building a ticker never
    touches the filesystem.
    """

    if config.work_dir is None:
        config.work_dir = Path(tempfile.mkdtemp(prefix="boxer-"))
    return config.work_dir


def build_ticker(config: BoxerConfig, deps: Optional[ServiceDependencies] = None) -> Ticker:
    """Register one command per enabled effect section.

    Raises :class:`~boxer.services.scheduler.ConfigurationError` when a section
    has an invalid step/interval pair.
    """

    deps = deps or ServiceDependencies()
    ticker = Ticker(clock=deps.clock)

    if config.wallpaper.enabled:
        section = config.wallpaper
        generator = WallpaperGenerator(section.foreground, section.background)
        ticker.register(
            "wallpaper",
            section.step,
            section.interval,
            wallpaper_handler(deps.executor, deps.sizer, generator, lambda: resolve_work_dir(config) / "wallpaper"),
        )

    if config.menubar.enabled:
        ticker.register("menubar", config.menubar.step, config.menubar.interval, menubar_handler(deps.executor))

    if config.announcement.enabled:
        ticker.register(
            "announcement",
            config.announcement.step,
            config.announcement.interval,
            announcement_handler(deps.executor, deps.clock),
        )

    telegram = config.telegram
    if telegram is not None and telegram.enabled:
        if deps.notifier is None:
            deps.notifier = TelegramNotifier(telegram, clock=deps.clock)
        ticker.register("telegram", telegram.step, telegram.interval, deps.notifier.handler())

    return ticker


class BoxerService:
    """Owns the ticker and the loop that samples it on a fixed cadence."""

    def __init__(self, config: BoxerConfig, deps: Optional[ServiceDependencies] = None) -> None:
        self._config = config
        self._deps = deps or ServiceDependencies()
        self.ticker = build_ticker(config, self._deps)
        self.ticker.error_sink = self._report_failure

    def run_once(self) -> List[TickOutcome]:
        """Sample the ticker a single time."""

        return self.ticker.tick()

    def run_forever(self, stop_event: Optional[threading.Event] = None) -> None:
        """Tick until ``stop_event`` is set (forever when none is given)."""

        stop_event = stop_event or threading.Event()
        interval = self._config.ticker.tick_interval.total_seconds()
        logger.info("Boxer running with %d commands...", len(self.ticker.commands))
        while not stop_event.is_set():
            self.run_once()
            if self._deps.sleep is not None:
                self._deps.sleep(interval)
            else:
                stop_event.wait(interval)

    def close(self) -> None:
        """Release resources held by the effects."""

        if self._deps.notifier is not None:
            self._deps.notifier.close()

    def __enter__(self) -> "BoxerService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()

    @staticmethod
    def _report_failure(outcome: TickOutcome) -> None:
        logger.warning(
            "%s failed at step %d/%d: %s", outcome.command, outcome.index, outcome.steps, outcome.error
        )
