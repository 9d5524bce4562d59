"""Fire-and-forget reminder scheduling."""

import asyncio
import logging

from cepcast.config.schema import NotificationConfig
from cepcast.notify.notifiers import LogNotifier, Notifier, WebhookNotifier

logger = logging.getLogger(__name__)


class NotificationScheduler:
    """Hands reminders to a Notifier as background tasks.

    schedule_reminder never waits on delivery and never raises because of
    it. Collaborator errors end up in the log only.
    """

    def __init__(self, notifier: Notifier, title: str, enabled: bool = True):
        self.notifier = notifier
        self.title = title
        self.enabled = enabled
        self._pending: set[asyncio.Task] = set()

    @classmethod
    def from_config(cls, config: NotificationConfig) -> "NotificationScheduler":
        notifier: Notifier
        if config.webhook_url:
            notifier = WebhookNotifier(config.webhook_url)
        else:
            notifier = LogNotifier()
        return cls(notifier, title=config.title, enabled=config.enabled)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule_reminder(self, message: str) -> None:
        if not self.enabled:
            logger.debug("Notifications disabled, dropping reminder")
            return
        try:
            task = asyncio.get_running_loop().create_task(
                self.notifier.send(self.title, message)
            )
        except RuntimeError:
            logger.warning("No running event loop, reminder not scheduled")
            return
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        logger.info("Reminder scheduled: %s", message)

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("Reminder dispatch cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Reminder dispatch failed: %s", exc, exc_info=exc)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for in-flight reminders, e.g. before the process exits."""
        if not self._pending:
            return
        _, pending = await asyncio.wait(set(self._pending), timeout=timeout)
        if pending:
            logger.warning("%d reminder(s) still in flight, cancelling", len(pending))
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
