"""Telegram notification effect."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import httpx

from boxer.config import TelegramConfig
from boxer.effects.announcement import format_clock_time
from boxer.services.scheduler import Clock, Effect, EffectError, utc_now

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.telegram.org"
SEND_MESSAGE_ENDPOINT = "/bot{token}/sendMessage"


class TelegramNotifier:
    """Send step announcements through a Telegram bot."""

    def __init__(
        self,
        config: TelegramConfig,
        *,
        clock: Clock = utc_now,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._clock = clock
        self._client = httpx.Client(
            base_url=API_BASE_URL,
            timeout=config.request_timeout,
            transport=transport,
        )

    def format(self, index: int, steps: int) -> str:
        """Build the message that will be sent to Telegram."""

        return f"Boxer: step {index + 1}/{steps} at {format_clock_time(self._clock())}"

    def send(self, text: str, chat_ids: Iterable[int] | None = None) -> None:
        """Deliver ``text`` to the configured chats.

        Every chat is attempted; failures are collected into a single
        :class:`EffectError` raised once all chats were tried.
        """

        targets = list(self._config.chat_ids if chat_ids is None else chat_ids)
        if self._config.dry_run:
            logger.info("dry run, not sending to %d chats: %s", len(targets), text)
            return

        endpoint = SEND_MESSAGE_ENDPOINT.format(token=self._config.bot_token)
        failures: List[str] = []
        for chat_id in targets:
            error = self._send_one(endpoint, chat_id, text)
            if error is not None:
                logger.debug("telegram chat %s failed: %s", chat_id, error)
                failures.append(f"chat {chat_id}: {error}")
        if failures:
            raise EffectError("telegram " + "; ".join(failures))

    def _send_one(self, endpoint: str, chat_id: int, text: str) -> Optional[str]:
        try:
            response = self._client.post(endpoint, json={"chat_id": chat_id, "text": text})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            return str(exc)
        if not isinstance(payload, dict) or not payload.get("ok"):
            description = payload.get("description") if isinstance(payload, dict) else None
            return description or "send failed"
        return None

    def handler(self) -> Effect:
        """Return an effect that announces each step to the configured chats."""

        def handle(index: int, steps: int) -> None:
            self.send(self.format(index, steps))

        return handle

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client`."""

        self._client.close()

    def __enter__(self) -> "TelegramNotifier":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()
