"""Notification backends."""

from .telegram import TelegramNotifier

__all__ = ["TelegramNotifier"]
