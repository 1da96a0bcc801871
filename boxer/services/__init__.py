"""Scheduling primitives and service orchestration helpers.

The driver loop lives in :mod:`boxer.services.boxer_service`; it depends on the
effects, which in turn depend on the primitives exported here.
"""

from .scheduler import (
    Command,
    ConfigurationError,
    EffectError,
    TickOutcome,
    Ticker,
)

__all__ = ["Command", "ConfigurationError", "EffectError", "TickOutcome", "Ticker"]
