"""Notification collaborators that receive reminder requests."""

import logging
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def send(self, title: str, message: str) -> None: ...


class LogNotifier:
    """Records reminders in the log. Used when no delivery channel is set up."""

    async def send(self, title: str, message: str) -> None:
        logger.info("Reminder: %s | %s", title, message)


class WebhookNotifier:
    """POSTs {title, message} as JSON to a webhook endpoint."""

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        if not webhook_url:
            raise ValueError("webhook_url must not be empty")
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send(self, title: str, message: str) -> None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(
                self.webhook_url, json={"title": title, "message": message}
            )
        resp.raise_for_status()
        logger.info("Reminder delivered to webhook (HTTP %d)", resp.status_code)
