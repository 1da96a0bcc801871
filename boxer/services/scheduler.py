"""Wall-clock step scheduling primitives.

A :class:`Ticker` owns an ordered list of :class:`Command` objects.  Each call
to :meth:`Ticker.tick` samples the clock, quantizes it into an absolute step
index measured from the Unix epoch and invokes the effect of every command
whose step index changed since the previous sample.  The position inside the
repeating interval is always derived from the step index, so there is no second
counter that could drift away from it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Effect = Callable[[int, int], None]
Clock = Callable[[], datetime]
ErrorSink = Callable[["TickOutcome"], None]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ConfigurationError(ValueError):
    """Raised when a command or configuration file is invalid."""


class EffectError(RuntimeError):
    """Raised by an effect when its side effect could not be performed."""


def utc_now() -> datetime:
    """Default clock: the current time as an aware UTC datetime."""

    return datetime.now(timezone.utc)


def duration_ns(value: timedelta) -> int:
    """Return ``value`` as an exact number of nanoseconds."""

    return ((value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds) * 1_000


def epoch_ns(moment: datetime) -> int:
    """Nanoseconds elapsed between the Unix epoch and ``moment``.

    Naive datetimes are interpreted as UTC.
    """

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return duration_ns(moment - EPOCH)


@dataclass(frozen=True, slots=True)
class Command:
    """A named effect fired once per ``step`` within a repeating ``interval``."""

    name: str
    step: timedelta
    interval: timedelta
    effect: Effect

    @property
    def steps_per_interval(self) -> int:
        return duration_ns(self.interval) // duration_ns(self.step)

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` unless the duration pair is usable."""

        step = duration_ns(self.step)
        interval = duration_ns(self.interval)
        if step <= 0:
            raise ConfigurationError(f"{self.name}: step must be positive, got {self.step}")
        if interval <= 0:
            raise ConfigurationError(f"{self.name}: interval must be positive, got {self.interval}")
        if interval % step != 0:
            raise ConfigurationError(
                f"{self.name}: interval {self.interval} is not a multiple of step {self.step}"
            )

    def step_index(self, moment: datetime) -> int:
        """Absolute step index of ``moment`` (floored, may be negative)."""

        return epoch_ns(moment) // duration_ns(self.step)


@dataclass(slots=True)
class TickOutcome:
    """Result of firing one command during a tick."""

    command: str
    step_index: int
    index: int
    steps: int
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Ticker:
    """Sample a clock and fire each command once per crossed step boundary.

    ``tick`` is not synchronized; callers driving it from several threads must
    serialize the calls themselves.
    """

    def __init__(self, clock: Optional[Clock] = None, error_sink: Optional[ErrorSink] = None) -> None:
        self.clock: Clock = clock or utc_now
        self.error_sink = error_sink
        self._commands: List[Command] = []
        self._last_step: Dict[int, int] = {}

    @property
    def commands(self) -> List[Command]:
        """Registered commands in registration order."""

        return list(self._commands)

    # ------------------------------------------------------------------
    # Registration
    def add(self, command: Command) -> Command:
        """Validate and append ``command``."""

        command.validate()
        self._commands.append(command)
        return command

    def register(self, name: str, step: timedelta, interval: timedelta, effect: Effect) -> Command:
        """Build a :class:`Command` from its parts and register it."""

        return self.add(Command(name=name, step=step, interval=interval, effect=effect))

    # ------------------------------------------------------------------
    # Sampling
    def tick(self) -> List[TickOutcome]:
        """Fire every command whose step boundary was crossed since the last tick.

        Returns one :class:`TickOutcome` per fired command.  Failed outcomes are
        additionally passed to ``error_sink`` once all commands were evaluated.
        """

        outcomes: List[TickOutcome] = []
        for slot, command in enumerate(self._commands):
            outcome = self._sample(slot, command)
            if outcome is not None:
                outcomes.append(outcome)

        if self.error_sink is not None:
            for outcome in outcomes:
                if not outcome.ok:
                    self.error_sink(outcome)
        return outcomes

    def _sample(self, slot: int, command: Command) -> Optional[TickOutcome]:
        step_index = command.step_index(self.clock())
        last = self._last_step.get(slot)
        if last is not None:
            if step_index == last:
                return None
            if step_index < last:
                logger.debug(
                    "clock moved backwards for %s (step %d < %d), ignoring sample",
                    command.name,
                    step_index,
                    last,
                )
                return None

        steps = command.steps_per_interval
        outcome = TickOutcome(
            command=command.name,
            step_index=step_index,
            index=step_index % steps,
            steps=steps,
        )
        try:
            command.effect(outcome.index, steps)
        except Exception as exc:  # noqa: BLE001 - effects are isolated from each other
            outcome.error = exc
        finally:
            self._last_step[slot] = step_index

        logger.debug("fired %s at %d/%d", command.name, outcome.index, steps)
        return outcome


__all__ = [
    "Clock",
    "Command",
    "ConfigurationError",
    "Effect",
    "EffectError",
    "ErrorSink",
    "TickOutcome",
    "Ticker",
    "duration_ns",
    "epoch_ns",
    "utc_now",
]
