"""Boxer: fire desktop effects on a fixed wall-clock cadence."""

from .cli import main as cli_main
from .config_loader import load_config

__all__ = [
    "cli_main",
    "load_config",
    "config",
    "effects",
    "executor",
    "notifiers",
    "services",
]
